"""Billing service for invoice amount calculations.
Computes item amounts, subtotal and tax exactly and rounds the total once.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Sequence

from app.domain.models.base import ValidationError
from app.domain.models.value_objects import (
    to_decimal,
    round_money,
    decimal_places,
    validate_tax_rate,
    PRICE_PLACES,
    MAX_AMOUNT,
)


@dataclass(frozen=True)
class LineItemInput:
    """Raw line item as received from a request."""

    description: str
    quantity: Any
    price: Any


@dataclass(frozen=True)
class PricedLine:
    """A validated line item with its amount."""

    description: str
    quantity: int
    price: Decimal
    amount: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    """Result of a total calculation."""

    lines: List[PricedLine]
    tax_rate: Decimal
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @property
    def item_amounts(self) -> List[Decimal]:
        return [line.amount for line in self.lines]


class BillingService:
    """
    Domain service for billing calculations.

    amount_i = quantity_i * price_i
    subtotal = sum(amount_i)
    tax      = subtotal * tax_rate / 100
    total    = round_half_up(subtotal + tax, 0.01)

    Amounts, subtotal and tax are exact; the total is the only rounded value.
    """

    def calculate_totals(self, items: Sequence[LineItemInput], tax_rate: Any) -> InvoiceTotals:
        """Calculate item amounts and invoice totals."""
        if not items:
            raise ValidationError("Invoice must contain at least one item", "items")

        rate = self.validate_tax_rate(tax_rate)

        lines = []
        for index, item in enumerate(items):
            quantity = self._validate_quantity(item.quantity, index)
            price = self._validate_price(item.price, index)
            lines.append(PricedLine(item.description, quantity, price, price * quantity))

        subtotal = sum((line.amount for line in lines), Decimal("0"))
        tax = subtotal * rate / Decimal(100)
        total = round_money(subtotal + tax)

        if total >= MAX_AMOUNT:
            raise ValidationError("Invoice total is too large", "items")

        return InvoiceTotals(
            lines=lines,
            tax_rate=rate,
            subtotal=subtotal,
            tax=tax,
            total=total,
        )

    def validate_tax_rate(self, tax_rate: Any) -> Decimal:
        return validate_tax_rate(tax_rate)

    def _validate_quantity(self, quantity: Any, index: int) -> int:
        field = f"items[{index}].quantity"

        # bool is an int subclass
        if isinstance(quantity, bool):
            raise ValidationError("Quantity must be a positive integer", field)

        if isinstance(quantity, int):
            value = quantity
        else:
            number = to_decimal(quantity, field)
            if number != number.to_integral_value():
                raise ValidationError("Quantity must be a positive integer", field)
            value = int(number)

        if value <= 0:
            raise ValidationError("Quantity must be a positive integer", field)
        return value

    def _validate_price(self, price: Any, index: int) -> Decimal:
        field = f"items[{index}].price"
        value = to_decimal(price, field)

        if value < 0:
            raise ValidationError("Price cannot be negative", field)

        if decimal_places(value) > PRICE_PLACES:
            raise ValidationError(
                f"Price cannot have more than {PRICE_PLACES} decimal places", field
            )

        if value >= MAX_AMOUNT:
            raise ValidationError("Price is too large", field)

        return value
