"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .customer_repository import CustomerRepository
from .invoice_repository import InvoiceRepository
from .user_repository import UserRepositoryInterface
from .unit_of_work import UnitOfWork

__all__ = [
    "CustomerRepository",
    "InvoiceRepository",
    "UserRepositoryInterface",
    "UnitOfWork",
]
