"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .customer_mapper import CustomerMapper
from .invoice_mapper import InvoiceMapper

__all__ = [
    "UserMapper",
    "CustomerMapper",
    "InvoiceMapper",
]
