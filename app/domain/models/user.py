"""
User domain model.
A user is a tenant: it owns customers, invoices and one settings record.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional
from enum import Enum
import secrets

from app.domain.models.base import (
    AggregateRoot,
    BaseEntity,
    DomainEvent,
    ValidationError,
)
from app.domain.models.value_objects import (
    DEFAULT_INVOICE_PREFIX,
    InvoiceSequence,
    PhoneNumber,
    validate_invoice_prefix,
    validate_tax_rate,
)


MIN_PASSWORD_LENGTH = 8
MIN_NAME_LENGTH = 2


class LicenseStatus(str, Enum):
    """Licence status of a tenant."""
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


def generate_license_key() -> str:
    """Random 32 character hex licence key."""
    return secrets.token_hex(16)


# Domain Events

class UserRegisteredEvent(DomainEvent):
    """Event raised when a new tenant registers."""

    def __init__(self, user_id: str, email: str):
        super().__init__()
        self.user_id = user_id
        self.email = email

    @property
    def event_name(self) -> str:
        return "user.registered"


class UserProfileUpdatedEvent(DomainEvent):
    """Event raised when the business profile changes."""

    def __init__(self, user_id: str, changes: dict):
        super().__init__()
        self.user_id = user_id
        self.changes = changes

    @property
    def event_name(self) -> str:
        return "user.profile.updated"


class UserPasswordChangedEvent(DomainEvent):
    """Event raised when a password is set or changed."""

    def __init__(self, user_id: str):
        super().__init__()
        self.user_id = user_id

    @property
    def event_name(self) -> str:
        return "user.password.changed"


@dataclass(eq=False, kw_only=True)
class UserSettings(BaseEntity):
    """
    Per-tenant invoice settings and licence bookkeeping.
    `invoice_prefix` and `next_invoice_number` form the tenant's invoice sequence.
    """

    user_id: Optional[str] = None
    invoice_prefix: str = DEFAULT_INVOICE_PREFIX
    next_invoice_number: int = 1
    tax_rate: Decimal = Decimal("0")
    currency: str = "IDR"
    license_key: str = field(default_factory=generate_license_key)
    license_status: LicenseStatus = LicenseStatus.ACTIVE

    @property
    def sequence(self) -> InvoiceSequence:
        return InvoiceSequence(self.invoice_prefix, self.next_invoice_number)

    def advance_to(self, sequence: InvoiceSequence) -> None:
        """Store an advanced sequence. The counter never moves backwards."""
        if sequence.next_number <= self.next_invoice_number:
            raise ValidationError(
                "Invoice counter can only increase",
                "next_invoice_number"
            )
        self.next_invoice_number = sequence.next_number
        self.mark_as_updated()

    def update_invoice_settings(
        self,
        invoice_prefix: Optional[str] = None,
        tax_rate: Optional[Decimal] = None,
    ) -> None:
        if invoice_prefix is not None:
            self.invoice_prefix = validate_invoice_prefix(invoice_prefix)
        if tax_rate is not None:
            self.tax_rate = validate_tax_rate(tax_rate)
        self.mark_as_updated()

    @property
    def is_suspended(self) -> bool:
        return self.license_status == LicenseStatus.SUSPENDED


@dataclass(eq=False, kw_only=True)
class User(AggregateRoot):
    """
    User aggregate root.
    Holds credentials state and the business profile printed on invoices.
    """

    email: str
    name: str
    password_hash: Optional[str] = None
    business_name: Optional[str] = None
    business_logo: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    business_email: Optional[str] = None
    is_google_user: bool = False
    has_password: bool = False
    is_active: bool = True
    settings: Optional[UserSettings] = None

    def __post_init__(self):
        super().__post_init__()
        self.email = (self.email or "").strip().lower()
        self.validate()

    def validate(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", "email")

        if not self.name or len(self.name.strip()) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Name must be at least {MIN_NAME_LENGTH} characters",
                "name"
            )

    @staticmethod
    def validate_password(password: str, field_name: str = "password") -> None:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field_name
            )

    @property
    def license_status(self) -> LicenseStatus:
        if self.settings is None:
            return LicenseStatus.ACTIVE
        return self.settings.license_status

    def update_profile(self, **changes) -> dict:
        """
        Update business profile fields.
        Only keys present in `changes` are applied; an empty string clears
        the optional contact fields. Returns the applied changes.
        """
        applied = {}

        if "business_name" in changes and changes["business_name"] is not None:
            business_name = changes["business_name"].strip()
            if len(business_name) < MIN_NAME_LENGTH:
                raise ValidationError(
                    f"Business name must be at least {MIN_NAME_LENGTH} characters",
                    "business_name"
                )
            applied["business_name"] = business_name

        if "business_phone" in changes:
            phone = PhoneNumber.from_optional(changes["business_phone"])
            applied["business_phone"] = str(phone) if phone else None

        if "business_email" in changes:
            email = (changes["business_email"] or "").strip().lower()
            if email and "@" not in email:
                raise ValidationError("Invalid business email", "business_email")
            applied["business_email"] = email or None

        for key in ("business_address", "business_logo"):
            if key in changes:
                applied[key] = changes[key] or None

        for key, value in applied.items():
            setattr(self, key, value)

        if applied:
            self.mark_as_updated()
            self.add_event(UserProfileUpdatedEvent(self.id, applied))
        return applied

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.has_password = True
        self.mark_as_updated()
        self.add_event(UserPasswordChangedEvent(self.id))
