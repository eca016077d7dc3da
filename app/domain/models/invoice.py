"""
Invoice domain model.
Represents invoices issued by a tenant to one of its customers.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional, List, Dict, Any
from enum import Enum
from decimal import Decimal

from app.domain.models.base import (
    AggregateRoot,
    DomainEvent,
    ValidationError,
)
from app.domain.models.customer import Customer
from app.domain.models.value_objects import round_money


class InvoiceStatus(str, Enum):
    """Invoice status."""
    UNPAID = "UNPAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


# Fields that may be changed on an existing invoice.
MUTABLE_FIELDS = ("notes", "payment_proof", "due_date")


# Domain Events

class InvoiceCreatedEvent(DomainEvent):
    """Event raised when an invoice is created."""

    def __init__(self, invoice_id: str, user_id: str, number: str, customer_id: str, total: Decimal):
        super().__init__()
        self.invoice_id = invoice_id
        self.user_id = user_id
        self.number = number
        self.customer_id = customer_id
        self.total = str(total)

    @property
    def event_name(self) -> str:
        return "invoice.created"


class InvoiceStatusChangedEvent(DomainEvent):
    """Event raised when an invoice moves to another status."""

    def __init__(self, invoice_id: str, number: str, previous_status: str, new_status: str):
        super().__init__()
        self.invoice_id = invoice_id
        self.number = number
        self.previous_status = previous_status
        self.new_status = new_status

    @property
    def event_name(self) -> str:
        return "invoice.status_changed"


class InvoicePaidEvent(DomainEvent):
    """Event raised when an invoice is paid."""

    def __init__(self, invoice_id: str, number: str, total: Decimal, paid_at: datetime):
        super().__init__()
        self.invoice_id = invoice_id
        self.number = number
        self.total = str(total)
        self.paid_at = paid_at.isoformat()

    @property
    def event_name(self) -> str:
        return "invoice.paid"


class InvoiceCancelledEvent(DomainEvent):
    """Event raised when an invoice is cancelled."""

    def __init__(self, invoice_id: str, number: str, previous_status: str):
        super().__init__()
        self.invoice_id = invoice_id
        self.number = number
        self.previous_status = previous_status

    @property
    def event_name(self) -> str:
        return "invoice.cancelled"


@dataclass
class InvoiceItem:
    """Individual line item in an invoice."""

    description: str
    quantity: int
    price: Decimal
    amount: Decimal
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "description": self.description,
            "quantity": self.quantity,
            "price": str(self.price),
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class InvoiceSummary:
    """Projection of an invoice used for statistics."""

    issue_date: date
    status: InvoiceStatus
    total: Decimal


@dataclass
class InvoiceChanges:
    """
    Changes requested for an existing invoice.
    Only keys present in `fields` are touched, so a None value clears the field.
    """

    status: Optional[InvoiceStatus] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    paid_at: Optional[datetime] = None

    def __post_init__(self):
        unknown = set(self.fields) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown invoice fields: {', '.join(sorted(unknown))}",
                sorted(unknown)[0]
            )


@dataclass(eq=False, kw_only=True)
class Invoice(AggregateRoot):
    """
    Invoice aggregate root.
    Owns its line items; amounts are fixed at creation time.
    """

    user_id: str
    customer_id: str
    number: str
    issue_date: date
    due_date: date
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    tax_rate: Decimal
    status: InvoiceStatus = InvoiceStatus.UNPAID
    notes: Optional[str] = None
    payment_proof: Optional[str] = None
    paid_at: Optional[datetime] = None
    items: List[InvoiceItem] = field(default_factory=list)

    # Read-side enrichment, never persisted through the invoice.
    customer: Optional[Customer] = None

    def validate(self) -> None:
        """Validate invoice state."""
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")

        if not self.customer_id:
            raise ValidationError("Customer ID is required", "customer_id")

        if not self.items:
            raise ValidationError("Invoice must contain at least one item", "items")

        if self.due_date < self.issue_date:
            raise ValidationError("Due date cannot be before invoice date", "due_date")

        if self.total != round_money(self.subtotal + self.tax):
            raise ValidationError("Total must equal subtotal plus tax, rounded", "total")

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def is_cancelled(self) -> bool:
        return self.status == InvoiceStatus.CANCELLED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "number": self.number,
            "user_id": self.user_id,
            "customer_id": self.customer_id,
            "date": self.issue_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "status": self.status.value,
            "subtotal": str(self.subtotal),
            "tax": str(self.tax),
            "total": str(self.total),
            "tax_rate": str(self.tax_rate),
            "notes": self.notes,
            "payment_proof": self.payment_proof,
            "paid_at": self.paid_at.isoformat() if self.paid_at else None,
            "items": [item.to_dict() for item in self.items],
        }
