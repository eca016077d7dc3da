"""
Database infrastructure for the Fakturly service.
"""

from .database import engine, SessionLocal, Base, create_tables
from .models import *

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "create_tables",
]
