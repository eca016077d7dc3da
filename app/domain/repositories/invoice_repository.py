"""Invoice repository interface.
Defines the contract for invoice data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from datetime import date

from app.domain.models.invoice import Invoice, InvoiceStatus, InvoiceSummary


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice aggregate.
    Every query is scoped to the owning user.
    """

    @abstractmethod
    def save(self, invoice: Invoice) -> Invoice:
        """
        Insert or update an invoice with its items.
        New invoices get their ID assigned.
        """
        pass

    @abstractmethod
    def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        """
        Find an invoice owned by the user, with items and customer.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str, status: Optional[InvoiceStatus] = None) -> List[Invoice]:
        """
        List a user's invoices, newest first.
        """
        pass

    @abstractmethod
    def delete(self, invoice_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    def count_by_customer(self, customer_id: str) -> int:
        pass

    @abstractmethod
    def list_summaries(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[InvoiceSummary]:
        """
        Date, status and total of the user's invoices, optionally limited
        to an issue date range.
        """
        pass
