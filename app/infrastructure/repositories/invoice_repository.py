"""
Invoice repository implementation using SQLAlchemy.
"""

from datetime import date
from typing import Optional, List

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload, joinedload

from app.domain.models.invoice import Invoice, InvoiceStatus, InvoiceSummary
from app.domain.repositories.invoice_repository import InvoiceRepository
from app.infrastructure.db.models import InvoiceModel
from app.infrastructure.mappers.invoice_mapper import InvoiceMapper


class SQLAlchemyInvoiceRepository(InvoiceRepository):
    """SQLAlchemy implementation of invoice repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = InvoiceMapper()

    def _base_query(self):
        return select(InvoiceModel).options(
            selectinload(InvoiceModel.items),
            joinedload(InvoiceModel.customer),
        )

    def _get_model(self, invoice_id: str, user_id: str) -> Optional[InvoiceModel]:
        return self.session.execute(
            self._base_query().where(
                InvoiceModel.id == invoice_id,
                InvoiceModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def save(self, invoice: Invoice) -> Invoice:
        """
        Insert a new invoice with its items, or store the mutable fields of
        an existing one. A duplicate (user_id, number) raises IntegrityError,
        which rolls back the surrounding unit of work.
        """
        model = self._get_model(invoice.id, invoice.user_id) if invoice.id else None

        if model is None:
            self.session.add(self.mapper.domain_to_model(invoice))
        else:
            self.mapper.update_model(model, invoice)

        self.session.flush()
        return invoice

    def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        model = self._get_model(invoice_id, user_id)
        return self.mapper.model_to_domain(model) if model else None

    def list_by_user(self, user_id: str, status: Optional[InvoiceStatus] = None) -> List[Invoice]:
        query = self._base_query().where(InvoiceModel.user_id == user_id)
        if status is not None:
            query = query.where(InvoiceModel.status == status)

        models = self.session.execute(
            query.order_by(InvoiceModel.created_at.desc(), InvoiceModel.number.desc())
        ).scalars().all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, invoice_id: str, user_id: str) -> bool:
        model = self._get_model(invoice_id, user_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.flush()
        return True

    def count_by_customer(self, customer_id: str) -> int:
        return self.session.execute(
            select(func.count(InvoiceModel.id)).where(InvoiceModel.customer_id == customer_id)
        ).scalar_one()

    def list_summaries(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[InvoiceSummary]:
        query = select(InvoiceModel).where(InvoiceModel.user_id == user_id)
        if start_date is not None:
            query = query.where(InvoiceModel.date >= start_date)
        if end_date is not None:
            query = query.where(InvoiceModel.date <= end_date)

        models = self.session.execute(query.order_by(InvoiceModel.date.asc())).scalars().all()
        return [self.mapper.model_to_summary(model) for model in models]
