"""
Invoice use cases for the application layer.
Creation, status changes, payment proofs, delivery and statistics.
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from app.application.dto.invoice_dto import (
    CreateInvoiceRequestDTO,
    UpdateInvoiceRequestDTO,
    SendInvoiceResponseDTO,
)
from app.application.use_cases.base_use_case import (
    CommandUseCase, QueryUseCase, Clock
)
from app.domain.models.base import (
    ValidationError,
    EntityNotFoundError,
    TenantSequenceMissingError,
    new_id,
    utc_now,
)
from app.domain.models.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceChanges,
    InvoiceStatus,
    InvoiceCreatedEvent,
)
from app.domain.models.user import User
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.billing_service import BillingService, LineItemInput
from app.domain.services.email_service import EmailService
from app.domain.services.numbering_service import NumberingService
from app.domain.services.statistics_service import (
    StatisticsService, DashboardStatistics, DailyRevenue
)
from app.domain.services.status_machine import InvoiceStateMachine
from app.domain.services.storage_service import (
    FileStorage, UploadedFile, validate_image, dated_path, MAX_IMAGE_SIZE
)


logger = logging.getLogger(__name__)

PAYMENT_PROOF_ROOT = "payment-proofs"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CreateInvoiceUseCase(CommandUseCase):
    """
    Create an invoice with the next number of the user's sequence.

    The settings row is locked while the number is allocated, and the advanced
    counter and the invoice are written in the same transaction.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        billing_service: Optional[BillingService] = None,
        numbering_service: Optional[NumberingService] = None,
        clock: Clock = utc_now
    ):
        super().__init__(uow, clock)
        self.billing_service = billing_service or BillingService()
        self.numbering_service = numbering_service or NumberingService()

    async def execute(self, user_id: str, request: CreateInvoiceRequestDTO) -> Invoice:
        if request.due_date < request.issue_date:
            raise ValidationError("Due date cannot be before invoice date", "due_date")

        line_items = [
            LineItemInput(item.description, item.quantity, item.price)
            for item in request.items
        ]

        with self.uow:
            customer = self.uow.customers.get_by_id(request.customer_id, user_id)
            if customer is None:
                raise EntityNotFoundError("Customer", request.customer_id)

            settings = self.uow.users.get_settings(user_id, for_update=True)
            if settings is None:
                raise TenantSequenceMissingError(user_id)

            tax_rate = request.tax_rate if request.tax_rate is not None else settings.tax_rate
            totals = self.billing_service.calculate_totals(line_items, tax_rate)

            number, next_sequence = self.numbering_service.allocate(settings.sequence)

            invoice = Invoice(
                id=new_id(),
                user_id=user_id,
                customer_id=customer.id,
                number=number,
                issue_date=request.issue_date,
                due_date=request.due_date,
                subtotal=totals.subtotal,
                tax=totals.tax,
                total=totals.total,
                tax_rate=totals.tax_rate,
                status=InvoiceStatus.UNPAID,
                notes=request.notes,
                items=[
                    InvoiceItem(
                        id=new_id(),
                        description=line.description,
                        quantity=line.quantity,
                        price=line.price,
                        amount=line.amount,
                    )
                    for line in totals.lines
                ],
                customer=customer,
            )
            invoice.validate()

            settings.advance_to(next_sequence)
            self.uow.users.save_settings(settings)
            self.uow.invoices.save(invoice)
            invoice.add_event(InvoiceCreatedEvent(
                invoice.id, user_id, invoice.number, customer.id, invoice.total
            ))

            self.uow.commit()
            self._collect_events(invoice)

        logger.info("Created invoice %s for user %s", invoice.number, user_id)
        self._publish_events()
        return invoice


class UpdateInvoiceUseCase(CommandUseCase):
    """Apply a status change and/or field edits through the state machine."""

    def __init__(
        self,
        uow: UnitOfWork,
        state_machine: Optional[InvoiceStateMachine] = None,
        clock: Clock = utc_now
    ):
        super().__init__(uow, clock)
        self.state_machine = state_machine or InvoiceStateMachine()

    def build_changes(self, request: UpdateInvoiceRequestDTO) -> InvoiceChanges:
        provided = request.provided()
        fields = {}

        if "notes" in provided and "payment_note" in provided:
            if provided["notes"] != provided["payment_note"]:
                raise ValidationError(
                    "notes and payment_note must match when both are given",
                    "payment_note"
                )
        if "payment_note" in provided:
            fields["notes"] = provided["payment_note"]
        if "notes" in provided:
            fields["notes"] = provided["notes"]

        for key in ("payment_proof", "due_date"):
            if key in provided:
                fields[key] = provided[key]

        status = provided.get("status")
        return InvoiceChanges(
            status=InvoiceStatus(status) if status is not None else None,
            fields=fields,
            paid_at=_as_utc(provided.get("paid_at")),
        )

    async def execute(self, user_id: str, invoice_id: str, request: UpdateInvoiceRequestDTO) -> Invoice:
        changes = self.build_changes(request)

        with self.uow:
            invoice = self.uow.invoices.get_by_id(invoice_id, user_id)
            if invoice is None:
                raise EntityNotFoundError("Invoice", invoice_id)

            previous_status = invoice.status
            changed = self.state_machine.apply(invoice, changes, self.clock())
            if changed:
                self.uow.invoices.save(invoice)
                self.uow.commit()
                self._collect_events(invoice)

        if changed and previous_status != invoice.status:
            logger.info(
                "Invoice %s moved from %s to %s",
                invoice.number, previous_status.value, invoice.status.value
            )
        self._publish_events()
        return invoice


class GetInvoiceUseCase(QueryUseCase):
    """Get one invoice together with its issuer."""

    async def execute(self, user_id: str, invoice_id: str) -> Tuple[Invoice, Optional[User]]:
        with self.uow:
            invoice = self.uow.invoices.get_by_id(invoice_id, user_id)
            if invoice is None:
                raise EntityNotFoundError("Invoice", invoice_id)
            issuer = self.uow.users.get_by_id(user_id)
        return invoice, issuer


class ListInvoicesUseCase(QueryUseCase):
    """List the user's invoices, newest first."""

    async def execute(self, user_id: str, status: Optional[InvoiceStatus] = None) -> List[Invoice]:
        with self.uow:
            return self.uow.invoices.list_by_user(user_id, status)


class DeleteInvoiceUseCase(CommandUseCase):
    """Delete an invoice. Its number is never handed out again."""

    async def execute(self, user_id: str, invoice_id: str) -> None:
        with self.uow:
            if not self.uow.invoices.delete(invoice_id, user_id):
                raise EntityNotFoundError("Invoice", invoice_id)
            self.uow.commit()
        logger.info("Deleted invoice %s for user %s", invoice_id, user_id)


class UploadPaymentProofUseCase(QueryUseCase):
    """
    Store a payment proof image and return its URL.
    Attaching the URL to the invoice is a separate update.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        storage: FileStorage,
        state_machine: Optional[InvoiceStateMachine] = None,
        clock: Clock = utc_now,
        max_size: int = MAX_IMAGE_SIZE
    ):
        super().__init__(uow, clock)
        self.storage = storage
        self.max_size = max_size
        self.state_machine = state_machine or InvoiceStateMachine()

    async def execute(self, user_id: str, invoice_id: str, upload: UploadedFile) -> str:
        with self.uow:
            invoice = self.uow.invoices.get_by_id(invoice_id, user_id)
        if invoice is None:
            raise EntityNotFoundError("Invoice", invoice_id)

        self.state_machine.ensure_accepts_payment_proof(invoice)
        extension = validate_image(upload, self.max_size)

        path = dated_path(PAYMENT_PROOF_ROOT, invoice.id, "proof", extension, self.clock())
        url = await self.storage.upload(path, upload.content, upload.content_type)
        logger.info("Stored payment proof for invoice %s at %s", invoice.number, path)
        return url


class SendInvoiceUseCase(QueryUseCase):
    """Email an invoice to its customer. Never changes invoice state."""

    def __init__(
        self,
        uow: UnitOfWork,
        email_service: EmailService,
        state_machine: Optional[InvoiceStateMachine] = None
    ):
        super().__init__(uow)
        self.email_service = email_service
        self.state_machine = state_machine or InvoiceStateMachine()

    async def execute(self, user_id: str, invoice_id: str) -> SendInvoiceResponseDTO:
        with self.uow:
            invoice = self.uow.invoices.get_by_id(invoice_id, user_id)
            if invoice is None:
                raise EntityNotFoundError("Invoice", invoice_id)
            customer = invoice.customer or self.uow.customers.get_by_id(invoice.customer_id, user_id)
            issuer = self.uow.users.get_by_id(user_id)

        self.state_machine.ensure_sendable(invoice)

        if customer is None or not customer.email:
            raise ValidationError("Customer has no email address", "email")

        delivered = await self.email_service.send_invoice_email(invoice, customer, issuer)
        if delivered:
            logger.info("Sent invoice %s to %s", invoice.number, customer.email)
        else:
            logger.warning("Could not deliver invoice %s to %s", invoice.number, customer.email)

        return SendInvoiceResponseDTO(delivered=delivered, recipient=customer.email)


class GetDashboardStatisticsUseCase(QueryUseCase):
    """Dashboard figures relative to today."""

    def __init__(
        self,
        uow: UnitOfWork,
        statistics_service: Optional[StatisticsService] = None,
        clock: Clock = utc_now
    ):
        super().__init__(uow, clock)
        self.statistics_service = statistics_service or StatisticsService()

    async def execute(self, user_id: str) -> DashboardStatistics:
        with self.uow:
            summaries = self.uow.invoices.list_summaries(user_id)
        return self.statistics_service.dashboard(summaries, self.clock().date())


class GetRevenueByRangeUseCase(QueryUseCase):
    """PAID revenue per issue date within a date range."""

    def __init__(self, uow: UnitOfWork, statistics_service: Optional[StatisticsService] = None):
        super().__init__(uow)
        self.statistics_service = statistics_service or StatisticsService()

    async def execute(
        self,
        user_id: str,
        start_date: Optional[date],
        end_date: Optional[date]
    ) -> List[DailyRevenue]:
        if start_date is None or end_date is None:
            raise ValidationError("Start date and end date are required", "start_date")
        if start_date > end_date:
            raise ValidationError("Start date must not be after end date", "start_date")

        with self.uow:
            summaries = self.uow.invoices.list_summaries(user_id, start_date, end_date)
        return self.statistics_service.daily_revenue(
            summaries, start_date, end_date, fill_missing=False
        )
