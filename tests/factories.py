"""
Builders for domain objects used across the test suite.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from app.domain.models.base import new_id
from app.domain.models.customer import Customer
from app.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from app.domain.models.user import User, UserSettings


FIXED_NOW = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_user(email: str = "owner@example.com", password_hash: Optional[str] = "hashed:secret123",
              **overrides) -> User:
    user_id = overrides.pop("id", new_id())
    settings = overrides.pop("settings", None) or UserSettings(id=new_id(), user_id=user_id)
    return User(
        id=user_id,
        email=email,
        name=overrides.pop("name", "Budi Santoso"),
        password_hash=password_hash,
        has_password=password_hash is not None,
        settings=settings,
        **overrides
    )


def make_customer(user_id: str, **overrides) -> Customer:
    return Customer(
        id=overrides.pop("id", new_id()),
        user_id=user_id,
        name=overrides.pop("name", "PT Maju Jaya"),
        email=overrides.pop("email", "billing@majujaya.co.id"),
        **overrides
    )


def make_invoice(status: InvoiceStatus = InvoiceStatus.UNPAID, **overrides) -> Invoice:
    invoice = Invoice(
        id=overrides.pop("id", new_id()),
        user_id=overrides.pop("user_id", "user-1"),
        customer_id=overrides.pop("customer_id", "customer-1"),
        number=overrides.pop("number", "INV00001"),
        issue_date=overrides.pop("issue_date", date(2024, 3, 1)),
        due_date=overrides.pop("due_date", date(2024, 3, 31)),
        subtotal=Decimal("250.00"),
        tax=Decimal("25.00"),
        total=Decimal("275.00"),
        tax_rate=Decimal("10"),
        status=status,
        items=[
            InvoiceItem("A", 2, Decimal("100.00"), Decimal("200.00")),
            InvoiceItem("B", 1, Decimal("50.00"), Decimal("50.00")),
        ],
        **overrides
    )
    return invoice
