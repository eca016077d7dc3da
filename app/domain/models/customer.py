"""
Customer domain model.
Customers are the parties a tenant sends invoices to.
"""

from dataclasses import dataclass
from typing import Optional

from app.domain.models.base import BaseEntity, ValidationError


@dataclass(eq=False, kw_only=True)
class Customer(BaseEntity):
    """Customer owned by exactly one tenant."""

    user_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        if self.name is not None:
            self.name = self.name.strip()
        self.validate()

    def validate(self) -> None:
        if not self.user_id:
            raise ValidationError("User ID is required", "user_id")

        if not self.name:
            raise ValidationError("Customer name is required", "name")

        if len(self.name) > 255:
            raise ValidationError("Customer name too long (max 255 characters)", "name")

    def update_details(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Update contact details; None leaves a value untouched."""
        if name is not None:
            self.name = name.strip()
        if email is not None:
            self.email = email or None
        if phone is not None:
            self.phone = phone or None
        if address is not None:
            self.address = address or None

        self.validate()
        self.mark_as_updated()
