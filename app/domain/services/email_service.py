"""
Email service for sending invoices to customers.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.customer import Customer
from app.domain.models.invoice import Invoice
from app.domain.models.user import User


class EmailService(ABC):
    """
    Email service interface.
    Implementations report delivery failures by returning False.
    """

    @abstractmethod
    async def send_email(self,
                        to: str,
                        subject: str,
                        body: str,
                        html_body: Optional[str] = None) -> bool:
        """
        Send an email to the specified recipient.
        """
        pass

    @abstractmethod
    async def send_invoice_email(self,
                                invoice: Invoice,
                                customer: Customer,
                                issuer: User) -> bool:
        """
        Send an invoice to its customer.
        """
        pass
