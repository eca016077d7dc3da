"""
Customer management router.
Handles CRUD operations for the tenant's customers.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Response, status

from app.infrastructure.auth import get_current_user_id
from app.infrastructure.web.dependencies import get_unit_of_work
from app.application.dto.customer_dto import (
    CreateCustomerRequestDTO,
    UpdateCustomerRequestDTO,
    CustomerResponseDTO,
)
from app.application.use_cases.customer_use_cases import (
    CreateCustomerUseCase,
    UpdateCustomerUseCase,
    GetCustomerUseCase,
    ListCustomersUseCase,
    DeleteCustomerUseCase,
)
from app.domain.repositories.unit_of_work import UnitOfWork


router = APIRouter()


@router.get("", response_model=List[CustomerResponseDTO])
async def list_customers(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """List customers ordered by name."""
    customers = await ListCustomersUseCase(uow).execute(user_id)
    return [CustomerResponseDTO.from_domain(customer) for customer in customers]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CustomerResponseDTO)
async def create_customer(
    request: CreateCustomerRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """
    Create a new customer.

    - **name**: Customer name (required)
    - **email**: Used when emailing invoices
    - **phone**, **address**: optional contact details
    """
    customer = await CreateCustomerUseCase(uow).execute(user_id, request)
    return CustomerResponseDTO.from_domain(customer)


@router.get("/{customer_id}", response_model=CustomerResponseDTO)
async def get_customer(
    customer_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    customer = await GetCustomerUseCase(uow).execute(user_id, customer_id)
    return CustomerResponseDTO.from_domain(customer)


@router.patch("/{customer_id}", response_model=CustomerResponseDTO)
async def update_customer(
    customer_id: str,
    request: UpdateCustomerRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Update customer details. Explicit nulls clear optional fields."""
    customer = await UpdateCustomerUseCase(uow).execute(user_id, customer_id, request)
    return CustomerResponseDTO.from_domain(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Delete a customer that has no invoices."""
    await DeleteCustomerUseCase(uow).execute(user_id, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
