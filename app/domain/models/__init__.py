"""
Domain models for the invoicing service.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainEvent,
    DomainException,
    ValidationError,
    InvalidInputError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    AuthenticationError,
    LicenseSuspendedError,
    TenantSequenceMissingError,
    InvalidTransitionError,
    InvoiceImmutableError,
)

# Value Objects
from .value_objects import (
    InvoiceNumber,
    InvoiceSequence,
    PhoneNumber,
)

# Domain entities
from .user import (
    User,
    UserSettings,
    LicenseStatus,
    UserRegisteredEvent,
    UserProfileUpdatedEvent,
    UserPasswordChangedEvent,
)

from .customer import Customer

from .invoice import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    InvoiceChanges,
    InvoiceSummary,
    InvoiceCreatedEvent,
    InvoiceStatusChangedEvent,
    InvoicePaidEvent,
    InvoiceCancelledEvent,
)

__all__ = [
    # Base classes
    "BaseEntity",
    "AggregateRoot",
    "DomainEvent",
    "DomainException",
    "ValidationError",
    "InvalidInputError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "AuthenticationError",
    "LicenseSuspendedError",
    "TenantSequenceMissingError",
    "InvalidTransitionError",
    "InvoiceImmutableError",
    "InvoiceNumber",
    "InvoiceSequence",
    "PhoneNumber",

    # User
    "User",
    "UserSettings",
    "LicenseStatus",
    "UserRegisteredEvent",
    "UserProfileUpdatedEvent",
    "UserPasswordChangedEvent",

    # Customer
    "Customer",

    # Invoice
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "InvoiceChanges",
    "InvoiceSummary",
    "InvoiceCreatedEvent",
    "InvoiceStatusChangedEvent",
    "InvoicePaidEvent",
    "InvoiceCancelledEvent",
]
