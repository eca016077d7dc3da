"""
Repository implementations for the infrastructure layer.
"""

from .user_repository import SQLAlchemyUserRepository
from .customer_repository import SQLAlchemyCustomerRepository
from .invoice_repository import SQLAlchemyInvoiceRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyCustomerRepository",
    "SQLAlchemyInvoiceRepository",
]
