"""
Customer mapper for converting between domain entities and database models.
"""

from app.domain.models.customer import Customer
from app.infrastructure.db.models import CustomerModel
from app.infrastructure.mappers.user_mapper import as_utc


class CustomerMapper:
    """Maps between Customer domain entity and CustomerModel database model."""

    def domain_to_model(self, customer: Customer) -> CustomerModel:
        model = CustomerModel(id=customer.id, user_id=customer.user_id)
        self.update_model(model, customer)
        return model

    def update_model(self, model: CustomerModel, customer: Customer) -> None:
        model.name = customer.name
        model.email = customer.email
        model.phone = customer.phone
        model.address = customer.address
        model.created_at = customer.created_at
        model.updated_at = customer.updated_at

    def model_to_domain(self, model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            address=model.address,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
