"""
Value Objects for the domain layer.
Immutable objects that represent values and encapsulate business logic.
"""

from typing import Any, Optional
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from dataclasses import dataclass
import re

import phonenumbers
from phonenumbers import NumberParseException

from app.domain.models.base import ValidationError


# Smallest currency unit. Only the invoice total is rounded to it.
MONEY_QUANTUM = Decimal("0.01")

# Decimal places the amount columns hold. Tax carries the scale of
# price * rate / 100 so it is stored without rounding.
PRICE_PLACES = 4
TAX_RATE_PLACES = 4
TAX_PLACES = PRICE_PLACES + TAX_RATE_PLACES + 2

# Integer digits left in the widest amount column.
MAX_AMOUNT = Decimal(10) ** 12
MAX_TAX_RATE = Decimal(10) ** 5

DEFAULT_INVOICE_PREFIX = "INV"
INVOICE_NUMBER_WIDTH = 5

INVOICE_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,10}$")

# Indonesian mobile numbers: 08xx, 628xx or +628xx followed by 6-9 digits.
INDONESIAN_MOBILE_PATTERN = re.compile(r"^(\+62|62|0)8[1-9][0-9]{6,9}$")


def to_decimal(value: Any, field: str) -> Decimal:
    """Convert a numeric input to Decimal without going through binary floats."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"{field} must be a number", field)
    else:
        raise ValidationError(f"{field} must be a number", field)

    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field)
    return result


def round_money(value: Decimal) -> Decimal:
    """Round an amount to the currency unit using round-half-up."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def plain_decimal(value: Decimal) -> Decimal:
    """Drop trailing zeros without switching to exponent notation."""
    normalized = value.normalize()
    if normalized.as_tuple().exponent > 0:
        return normalized.quantize(Decimal(1))
    return normalized


def decimal_places(value: Decimal) -> int:
    """Number of significant digits after the decimal point."""
    exponent = value.normalize().as_tuple().exponent
    return max(0, -exponent)


def validate_tax_rate(value: Any, field: str = "tax_rate") -> Decimal:
    """A non-negative percentage that fits the tax rate columns."""
    rate = to_decimal(value, field)
    if rate < 0:
        raise ValidationError("Tax rate cannot be negative", field)
    if decimal_places(rate) > TAX_RATE_PLACES:
        raise ValidationError(
            f"Tax rate cannot have more than {TAX_RATE_PLACES} decimal places", field
        )
    if rate >= MAX_TAX_RATE:
        raise ValidationError("Tax rate is too large", field)
    return rate


@dataclass(frozen=True)
class InvoiceNumber:
    """Tenant-scoped, human readable invoice number."""

    prefix: str
    number: int
    width: int = INVOICE_NUMBER_WIDTH

    def __post_init__(self):
        if self.number <= 0:
            raise ValidationError("Invoice number must be positive", "number")

    def __str__(self) -> str:
        return f"{self.prefix}{str(self.number).zfill(self.width)}"


@dataclass(frozen=True)
class InvoiceSequence:
    """
    Per-tenant invoice numbering state.
    `next_number` is the number the next allocation will hand out.
    """

    prefix: str = DEFAULT_INVOICE_PREFIX
    next_number: int = 1

    def __post_init__(self):
        if isinstance(self.next_number, bool) or not isinstance(self.next_number, int):
            raise ValidationError("Next invoice number must be an integer", "next_number")
        if self.next_number < 1:
            raise ValidationError("Next invoice number must be positive", "next_number")


@dataclass(frozen=True)
class PhoneNumber:
    """Value object representing an Indonesian mobile phone number."""

    number: str

    def __post_init__(self):
        candidate = re.sub(r"[\s-]", "", self.number or "")
        if not INDONESIAN_MOBILE_PATTERN.match(candidate):
            raise ValidationError(
                "Invalid phone number format (example: 081234567890)",
                "business_phone"
            )
        try:
            parsed = phonenumbers.parse(candidate, "ID")
        except NumberParseException:
            raise ValidationError(
                "Invalid phone number format (example: 081234567890)",
                "business_phone"
            )
        normalized = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
        object.__setattr__(self, "number", normalized)

    @classmethod
    def from_optional(cls, value: Optional[str]) -> Optional["PhoneNumber"]:
        """Build a phone number, treating empty input as no number."""
        if value is None or not value.strip():
            return None
        return cls(value.strip())

    def __str__(self) -> str:
        return self.number


def validate_invoice_prefix(prefix: str) -> str:
    """Validate a tenant's invoice prefix."""
    if not prefix or not INVOICE_PREFIX_PATTERN.match(prefix):
        raise ValidationError(
            "Invoice prefix must be 1-10 letters, digits, '-' or '_'",
            "invoice_prefix"
        )
    return prefix
