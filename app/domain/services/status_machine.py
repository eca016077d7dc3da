"""Invoice status state machine.
The single place that decides which status changes and field edits an
invoice accepts.
"""

from datetime import datetime
from typing import Dict, FrozenSet, Optional

from app.domain.models.base import (
    ValidationError,
    InvalidTransitionError,
    InvoiceImmutableError,
)
from app.domain.models.invoice import (
    Invoice,
    InvoiceChanges,
    InvoiceStatus,
    InvoiceStatusChangedEvent,
    InvoicePaidEvent,
    InvoiceCancelledEvent,
)


TRANSITIONS: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
    InvoiceStatus.UNPAID: frozenset({
        InvoiceStatus.PAID,
        InvoiceStatus.OVERDUE,
        InvoiceStatus.CANCELLED,
    }),
    InvoiceStatus.OVERDUE: frozenset({
        InvoiceStatus.PAID,
        InvoiceStatus.CANCELLED,
    }),
    InvoiceStatus.PAID: frozenset({InvoiceStatus.CANCELLED}),
    InvoiceStatus.CANCELLED: frozenset(),
}


class InvoiceStateMachine:
    """
    Applies requested changes to an invoice.

    PAID invoices accept only a bare cancellation (or a bare PAID request,
    which is a no-op). CANCELLED is terminal.
    """

    transitions = TRANSITIONS

    def can_transition(self, current: InvoiceStatus, requested: InvoiceStatus) -> bool:
        return requested in self.transitions.get(current, frozenset())

    def check_transition(self, current: InvoiceStatus, requested: InvoiceStatus) -> None:
        if not self.can_transition(current, requested):
            raise InvalidTransitionError(current, requested)

    def apply(self, invoice: Invoice, changes: InvoiceChanges, now: datetime) -> bool:
        """
        Validate and apply changes in place.

        Returns False when the request leaves the invoice untouched. Raises
        before mutating anything.
        """
        current = invoice.status
        requested = changes.status

        if current == InvoiceStatus.CANCELLED:
            if requested is not None:
                raise InvalidTransitionError(current, requested)
            raise InvoiceImmutableError("Cancelled invoices cannot be modified")

        if current == InvoiceStatus.PAID:
            has_edits = bool(changes.fields) or changes.paid_at is not None
            if requested == InvoiceStatus.PAID and not has_edits:
                return False
            if requested is None or requested == InvoiceStatus.PAID:
                raise InvoiceImmutableError("Paid invoices can only be cancelled")
            self.check_transition(current, requested)
            if has_edits:
                raise InvoiceImmutableError(
                    "Paid invoices can only be cancelled without other changes"
                )

        status_change = requested is not None and requested != current
        if status_change:
            self.check_transition(current, requested)

        if changes.paid_at is not None and not (status_change and requested == InvoiceStatus.PAID):
            raise ValidationError(
                "paid_at can only be set when marking an invoice as paid",
                "paid_at"
            )

        self._validate_fields(invoice, changes)

        if not status_change and not changes.fields:
            return False

        for key, value in changes.fields.items():
            setattr(invoice, key, value)

        if status_change:
            self._change_status(invoice, requested, changes.paid_at or now)

        invoice.mark_as_updated()
        return True

    def ensure_accepts_payment_proof(self, invoice: Invoice) -> None:
        """Payment proofs can only be attached while the invoice is open."""
        if invoice.is_paid or invoice.is_cancelled:
            raise InvoiceImmutableError(
                f"Cannot upload payment proof for a {invoice.status.value.lower()} invoice"
            )

    def ensure_sendable(self, invoice: Invoice) -> None:
        if invoice.is_cancelled:
            raise InvoiceImmutableError("Cancelled invoices cannot be sent")

    def _validate_fields(self, invoice: Invoice, changes: InvoiceChanges) -> None:
        fields = changes.fields

        if "due_date" in fields:
            due_date = fields["due_date"]
            if due_date is None:
                raise ValidationError("Due date is required", "due_date")
            if due_date < invoice.issue_date:
                raise ValidationError("Due date cannot be before invoice date", "due_date")

        if "payment_proof" in fields:
            proof = fields["payment_proof"]
            if proof is not None and not str(proof).strip():
                raise ValidationError("Payment proof URL cannot be empty", "payment_proof")

    def _change_status(self, invoice: Invoice, requested: InvoiceStatus, paid_at: datetime) -> None:
        previous = invoice.status
        invoice.status = requested

        invoice.add_event(InvoiceStatusChangedEvent(
            invoice.id, invoice.number, previous.value, requested.value
        ))

        if requested == InvoiceStatus.PAID:
            # first payment timestamp wins
            if invoice.paid_at is None:
                invoice.paid_at = paid_at
            invoice.add_event(InvoicePaidEvent(
                invoice.id, invoice.number, invoice.total, invoice.paid_at
            ))
        elif requested == InvoiceStatus.CANCELLED:
            invoice.add_event(InvoiceCancelledEvent(
                invoice.id, invoice.number, previous.value
            ))
