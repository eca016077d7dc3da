"""
Customer repository implementation using SQLAlchemy.
"""

from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.models.customer import Customer
from app.domain.repositories.customer_repository import CustomerRepository
from app.infrastructure.db.models import CustomerModel
from app.infrastructure.mappers.customer_mapper import CustomerMapper


class SQLAlchemyCustomerRepository(CustomerRepository):
    """SQLAlchemy implementation of customer repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = CustomerMapper()

    def _get_model(self, customer_id: str, user_id: str) -> Optional[CustomerModel]:
        return self.session.execute(
            select(CustomerModel).where(
                CustomerModel.id == customer_id,
                CustomerModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def save(self, customer: Customer) -> Customer:
        model = self._get_model(customer.id, customer.user_id) if customer.id else None

        if model is None:
            model = self.mapper.domain_to_model(customer)
            self.session.add(model)
        else:
            self.mapper.update_model(model, customer)

        self.session.flush()
        return customer

    def get_by_id(self, customer_id: str, user_id: str) -> Optional[Customer]:
        model = self._get_model(customer_id, user_id)
        return self.mapper.model_to_domain(model) if model else None

    def list_by_user(self, user_id: str) -> List[Customer]:
        models = self.session.execute(
            select(CustomerModel)
            .where(CustomerModel.user_id == user_id)
            .order_by(CustomerModel.name.asc())
        ).scalars().all()
        return [self.mapper.model_to_domain(model) for model in models]

    def delete(self, customer_id: str, user_id: str) -> bool:
        model = self._get_model(customer_id, user_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.flush()
        return True
