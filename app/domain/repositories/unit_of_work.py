"""
Unit of work interface.
Groups repository operations into one atomic transaction.
"""

from abc import ABC, abstractmethod

from app.domain.repositories.customer_repository import CustomerRepository
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.domain.repositories.user_repository import UserRepositoryInterface


class UnitOfWork(ABC):
    """
    Transaction boundary for use cases.

    Usage:
        with uow:
            ...
            uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    users: UserRepositoryInterface
    customers: CustomerRepository
    invoices: InvoiceRepository

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass
