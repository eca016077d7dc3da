"""
Invoice DTOs for the application layer.
Data Transfer Objects for invoice-related operations.
"""

from typing import Any, List, Optional
from datetime import date, datetime
from decimal import Decimal
from pydantic import Field

from .base_dto import (
    BaseDTO, CreateRequestDTO, UpdateRequestDTO, ResponseDTO, NotesMixin
)
from .customer_dto import CustomerResponseDTO
from app.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from app.domain.models.user import User
from app.domain.models.value_objects import plain_decimal
from app.domain.services.statistics_service import DashboardStatistics


class InvoiceItemRequestDTO(BaseDTO):
    """Line item in an invoice creation request."""

    description: str = Field(min_length=1, max_length=500, description="Item description")
    # Numeric checks live in the billing service so they surface as INVALID_INPUT.
    quantity: Any = Field(description="Positive whole quantity")
    price: Any = Field(description="Unit price, at most 2 decimal places")


class CreateInvoiceRequestDTO(CreateRequestDTO, NotesMixin):
    """DTO for invoice creation requests."""

    customer_id: str = Field(min_length=1, description="Customer ID")
    issue_date: date = Field(alias="date", description="Invoice date")
    due_date: date = Field(description="Payment due date")
    items: List[InvoiceItemRequestDTO] = Field(description="Line items")
    tax_rate: Optional[Decimal] = Field(
        default=None,
        description="Tax percentage, defaults to the user's setting"
    )


class UpdateInvoiceRequestDTO(UpdateRequestDTO):
    """
    DTO for invoice update requests.
    payment_note is accepted as another name for notes.
    """

    status: Optional[InvoiceStatus] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    payment_note: Optional[str] = Field(default=None, max_length=2000)
    payment_proof: Optional[str] = Field(default=None, max_length=1000, description="Payment proof URL")
    due_date: Optional[date] = None
    paid_at: Optional[datetime] = None


class InvoiceItemResponseDTO(BaseDTO):
    """Line item in invoice responses."""

    id: Optional[str] = None
    description: str
    quantity: int
    price: Decimal
    amount: Decimal

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemResponseDTO":
        return cls(
            id=item.id,
            description=item.description,
            quantity=item.quantity,
            price=plain_decimal(item.price),
            amount=plain_decimal(item.amount),
        )


class BusinessProfileDTO(BaseDTO):
    """Issuer details printed on an invoice."""

    name: str
    business_name: Optional[str] = None
    business_logo: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    business_email: Optional[str] = None

    @classmethod
    def from_domain(cls, user: User) -> "BusinessProfileDTO":
        return cls(
            name=user.name,
            business_name=user.business_name,
            business_logo=user.business_logo,
            business_address=user.business_address,
            business_phone=user.business_phone,
            business_email=user.business_email,
        )


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    number: str
    user_id: str
    customer_id: str
    issue_date: date = Field(alias="date")
    due_date: date
    status: InvoiceStatus
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    notes: Optional[str] = None
    payment_proof: Optional[str] = None
    paid_at: Optional[datetime] = None
    items: List[InvoiceItemResponseDTO] = Field(default_factory=list)
    customer: Optional[CustomerResponseDTO] = None
    business: Optional[BusinessProfileDTO] = None

    @classmethod
    def from_domain(cls, invoice: Invoice, issuer: Optional[User] = None) -> "InvoiceResponseDTO":
        return cls(
            id=invoice.id,
            number=invoice.number,
            user_id=invoice.user_id,
            customer_id=invoice.customer_id,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            status=invoice.status,
            subtotal=plain_decimal(invoice.subtotal),
            tax=plain_decimal(invoice.tax),
            total=invoice.total,
            tax_rate=plain_decimal(invoice.tax_rate),
            notes=invoice.notes,
            payment_proof=invoice.payment_proof,
            paid_at=invoice.paid_at,
            items=[InvoiceItemResponseDTO.from_domain(item) for item in invoice.items],
            customer=CustomerResponseDTO.from_domain(invoice.customer) if invoice.customer else None,
            business=BusinessProfileDTO.from_domain(issuer) if issuer else None,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class PaymentProofResponseDTO(BaseDTO):
    """Location of an uploaded payment proof."""

    url: str


class SendInvoiceResponseDTO(BaseDTO):
    """Outcome of emailing an invoice."""

    delivered: bool
    recipient: str


class DailyRevenueDTO(BaseDTO):
    date_: date = Field(alias="date")
    total: Decimal


class StatusCountDTO(BaseDTO):
    name: str
    value: int


class OverviewDTO(BaseDTO):
    total_invoices: int
    total_amount: Decimal
    unpaid_amount: Decimal
    overdue_amount: Decimal


class MonthlyComparisonDTO(BaseDTO):
    current_month: Decimal
    last_month: Decimal


class DashboardResponseDTO(BaseDTO):
    """Dashboard statistics response."""

    overview: OverviewDTO
    daily_revenue: List[DailyRevenueDTO]
    monthly_comparison: MonthlyComparisonDTO
    status_distribution: List[StatusCountDTO]

    @classmethod
    def from_domain(cls, stats: DashboardStatistics) -> "DashboardResponseDTO":
        return cls(
            overview=OverviewDTO(
                total_invoices=stats.total_invoices,
                total_amount=stats.paid_amount,
                unpaid_amount=stats.unpaid_amount,
                overdue_amount=stats.overdue_amount,
            ),
            daily_revenue=[
                DailyRevenueDTO(date_=day.date, total=day.total) for day in stats.daily_revenue
            ],
            monthly_comparison=MonthlyComparisonDTO(
                current_month=stats.current_month,
                last_month=stats.last_month,
            ),
            status_distribution=[
                StatusCountDTO(name=entry.name, value=entry.value)
                for entry in stats.status_distribution
            ],
        )
