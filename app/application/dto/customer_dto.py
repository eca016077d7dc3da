"""
Customer DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field, EmailStr

from .base_dto import CreateRequestDTO, UpdateRequestDTO, ResponseDTO


class CreateCustomerRequestDTO(CreateRequestDTO):
    """DTO for customer creation requests."""

    name: str = Field(min_length=1, max_length=255, description="Customer name")
    email: Optional[EmailStr] = Field(default=None, description="Customer email")
    phone: Optional[str] = Field(default=None, max_length=30, description="Phone number")
    address: Optional[str] = Field(default=None, max_length=500, description="Address")


class UpdateCustomerRequestDTO(UpdateRequestDTO):
    """DTO for customer update requests."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)


class CustomerResponseDTO(ResponseDTO):
    """DTO for customer responses."""

    user_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_domain(cls, customer) -> "CustomerResponseDTO":
        return cls(
            id=customer.id,
            user_id=customer.user_id,
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
