"""
Invoice mapper for converting between domain entities and database models.
"""

from decimal import Decimal

from app.domain.models.invoice import Invoice, InvoiceItem, InvoiceStatus, InvoiceSummary
from app.infrastructure.db.models import InvoiceModel, InvoiceItemModel
from app.infrastructure.mappers.customer_mapper import CustomerMapper
from app.infrastructure.mappers.user_mapper import as_utc


class InvoiceMapper:
    """Maps between Invoice aggregate and InvoiceModel with its items."""

    def __init__(self):
        self.customer_mapper = CustomerMapper()

    def domain_to_model(self, invoice: Invoice) -> InvoiceModel:
        model = InvoiceModel(
            id=invoice.id,
            number=invoice.number,
            user_id=invoice.user_id,
            customer_id=invoice.customer_id,
            date=invoice.issue_date,
            subtotal=invoice.subtotal,
            tax=invoice.tax,
            total=invoice.total,
            tax_rate=invoice.tax_rate,
            created_at=invoice.created_at,
        )
        self.update_model(model, invoice)
        model.items = [
            InvoiceItemModel(
                id=item.id,
                position=position,
                description=item.description,
                quantity=item.quantity,
                price=item.price,
                amount=item.amount,
            )
            for position, item in enumerate(invoice.items)
        ]
        return model

    def update_model(self, model: InvoiceModel, invoice: Invoice) -> None:
        """Copy the state that may change after creation."""
        model.due_date = invoice.due_date
        model.status = invoice.status
        model.notes = invoice.notes
        model.payment_proof = invoice.payment_proof
        model.paid_at = invoice.paid_at
        model.updated_at = invoice.updated_at

    def model_to_domain(self, model: InvoiceModel, with_customer: bool = True) -> Invoice:
        return Invoice(
            id=model.id,
            number=model.number,
            user_id=model.user_id,
            customer_id=model.customer_id,
            issue_date=model.date,
            due_date=model.due_date,
            status=InvoiceStatus(model.status),
            subtotal=Decimal(model.subtotal),
            tax=Decimal(model.tax),
            total=Decimal(model.total),
            tax_rate=Decimal(model.tax_rate),
            notes=model.notes,
            payment_proof=model.payment_proof,
            paid_at=as_utc(model.paid_at),
            items=[
                InvoiceItem(
                    id=item.id,
                    description=item.description,
                    quantity=item.quantity,
                    price=Decimal(item.price),
                    amount=Decimal(item.amount),
                )
                for item in model.items
            ],
            customer=(
                self.customer_mapper.model_to_domain(model.customer)
                if with_customer and model.customer is not None else None
            ),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def model_to_summary(self, model: InvoiceModel) -> InvoiceSummary:
        return InvoiceSummary(
            issue_date=model.date,
            status=InvoiceStatus(model.status),
            total=Decimal(model.total),
        )
