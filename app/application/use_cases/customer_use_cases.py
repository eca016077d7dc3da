"""
Customer use cases for the application layer.
"""

import logging
from typing import List

from app.application.dto.customer_dto import (
    CreateCustomerRequestDTO,
    UpdateCustomerRequestDTO,
)
from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase
from app.domain.models.base import EntityNotFoundError, BusinessRuleViolation, new_id
from app.domain.models.customer import Customer


logger = logging.getLogger(__name__)


class CreateCustomerUseCase(CommandUseCase):
    """Use case for creating a new customer."""

    async def execute(self, user_id: str, request: CreateCustomerRequestDTO) -> Customer:
        customer = Customer(
            id=new_id(),
            user_id=user_id,
            name=request.name,
            email=request.email,
            phone=request.phone,
            address=request.address,
        )

        with self.uow:
            self.uow.customers.save(customer)
            self.uow.commit()

        logger.info("Created customer %s for user %s", customer.id, user_id)
        return customer


class UpdateCustomerUseCase(CommandUseCase):
    """Use case for updating customer details."""

    async def execute(self, user_id: str, customer_id: str, request: UpdateCustomerRequestDTO) -> Customer:
        with self.uow:
            customer = self.uow.customers.get_by_id(customer_id, user_id)
            if customer is None:
                raise EntityNotFoundError("Customer", customer_id)

            provided = request.provided()
            # An explicit null clears optional contact details.
            contact = {
                key: provided[key] or ""
                for key in ("email", "phone", "address")
                if key in provided
            }
            customer.update_details(name=provided.get("name"), **contact)

            self.uow.customers.save(customer)
            self.uow.commit()
        return customer


class GetCustomerUseCase(QueryUseCase):

    async def execute(self, user_id: str, customer_id: str) -> Customer:
        with self.uow:
            customer = self.uow.customers.get_by_id(customer_id, user_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer


class ListCustomersUseCase(QueryUseCase):

    async def execute(self, user_id: str) -> List[Customer]:
        with self.uow:
            return self.uow.customers.list_by_user(user_id)


class DeleteCustomerUseCase(CommandUseCase):
    """Delete a customer that has no invoices."""

    async def execute(self, user_id: str, customer_id: str) -> None:
        with self.uow:
            customer = self.uow.customers.get_by_id(customer_id, user_id)
            if customer is None:
                raise EntityNotFoundError("Customer", customer_id)

            if self.uow.invoices.count_by_customer(customer_id) > 0:
                raise BusinessRuleViolation("Cannot delete a customer that has invoices")

            self.uow.customers.delete(customer_id, user_id)
            self.uow.commit()
        logger.info("Deleted customer %s for user %s", customer_id, user_id)
