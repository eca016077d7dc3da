"""
Base entity and exceptions for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict, List
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import uuid


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a new opaque entity identifier."""
    return str(uuid.uuid4())


class DomainEvent(ABC):
    """Base class for domain events."""

    def __init__(self):
        self.occurred_at = utc_now()
        self.event_id = str(uuid.uuid4())

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Return the name of the event."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        data = {
            key: value for key, value in self.__dict__.items()
            if key not in ("event_id", "occurred_at")
        }
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "occurred_at": self.occurred_at.isoformat(),
            "data": data
        }


@dataclass
class BaseEntity:
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = utc_now()
        if self.updated_at is None:
            self.updated_at = self.created_at

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass


@dataclass(eq=False)
class AggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.
    Aggregate roots are the entry points to aggregates and collect domain events
    until the surrounding unit of work has committed.
    """

    _events: List[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def add_event(self, event: DomainEvent) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> List[DomainEvent]:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when input or entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "INVALID_INPUT")
        self.field = field


# Malformed quantities, prices, dates and other request values.
InvalidInputError = ValidationError


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is absent or not owned by the caller."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class AuthenticationError(DomainException):
    """Exception raised when credentials cannot be verified."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "UNAUTHORIZED")


class LicenseSuspendedError(DomainException):
    """Exception raised when a suspended tenant tries to sign in."""

    def __init__(self, message: str = "Your license has been suspended"):
        super().__init__(message, "LICENSE_SUSPENDED")


class TenantSequenceMissingError(DomainException):
    """Exception raised when a tenant has no invoice sequence provisioned."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Invoice settings not found for user {user_id}",
            "TENANT_SEQUENCE_MISSING"
        )
        self.user_id = user_id


class InvalidTransitionError(DomainException):
    """Exception raised when an invoice status change is not allowed."""

    def __init__(self, current: Any, requested: Any):
        current_value = getattr(current, "value", current)
        requested_value = getattr(requested, "value", requested)
        super().__init__(
            f"Cannot change invoice status from {current_value} to {requested_value}",
            "INVALID_TRANSITION"
        )
        self.current = current
        self.requested = requested


class InvoiceImmutableError(DomainException):
    """Exception raised when a paid or cancelled invoice would be modified."""

    def __init__(self, message: str):
        super().__init__(message, "INVOICE_IMMUTABLE")
