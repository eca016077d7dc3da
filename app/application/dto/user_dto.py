"""
User DTOs for the application layer.
Data Transfer Objects for accounts, profile and settings.
"""

from typing import Optional
from decimal import Decimal
from pydantic import Field, EmailStr

from .base_dto import BaseDTO, RequestDTO, UpdateRequestDTO, ResponseDTO
from app.domain.models.user import (
    User, UserSettings, LicenseStatus, MIN_PASSWORD_LENGTH, MIN_NAME_LENGTH
)
from app.domain.models.value_objects import plain_decimal


class RegisterRequestDTO(RequestDTO):
    """DTO for account registration."""

    email: EmailStr = Field(description="Login email")
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(min_length=MIN_NAME_LENGTH, max_length=255)
    business_name: Optional[str] = Field(default=None, min_length=MIN_NAME_LENGTH, max_length=255)


class LoginRequestDTO(RequestDTO):
    """DTO for login requests."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UpdateProfileRequestDTO(UpdateRequestDTO):
    """
    DTO for profile updates.
    Empty strings clear address, phone and business email.
    """

    business_name: Optional[str] = Field(default=None, max_length=255)
    business_logo: Optional[str] = Field(default=None, max_length=1000)
    business_address: Optional[str] = Field(default=None, max_length=500)
    business_phone: Optional[str] = Field(default=None, max_length=30)
    business_email: Optional[str] = Field(default=None, max_length=255)
    current_password: Optional[str] = Field(default=None, max_length=128)
    new_password: Optional[str] = Field(default=None, max_length=128)


class UpdatePasswordRequestDTO(RequestDTO):
    """DTO for password changes."""

    current_password: Optional[str] = Field(default=None, max_length=128)
    new_password: str = Field(max_length=128)


class UpdateSettingsRequestDTO(UpdateRequestDTO):
    """DTO for invoice settings. The invoice counter is not writable."""

    invoice_prefix: Optional[str] = Field(default=None, max_length=10)
    tax_rate: Optional[Decimal] = None


class SettingsResponseDTO(BaseDTO):
    """User settings response."""

    invoice_prefix: str
    next_invoice_number: int
    tax_rate: Decimal
    currency: str
    license_key: str
    license_status: LicenseStatus

    @classmethod
    def from_domain(cls, settings: UserSettings) -> "SettingsResponseDTO":
        return cls(
            invoice_prefix=settings.invoice_prefix,
            next_invoice_number=settings.next_invoice_number,
            tax_rate=plain_decimal(settings.tax_rate),
            currency=settings.currency,
            license_key=settings.license_key,
            license_status=settings.license_status,
        )


class UserResponseDTO(ResponseDTO):
    """DTO for user responses. Never carries the password hash."""

    email: str
    name: str
    business_name: Optional[str] = None
    business_logo: Optional[str] = None
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    business_email: Optional[str] = None
    is_google_user: bool = False
    has_password: bool = False
    settings: Optional[SettingsResponseDTO] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponseDTO":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            business_name=user.business_name,
            business_logo=user.business_logo,
            business_address=user.business_address,
            business_phone=user.business_phone,
            business_email=user.business_email,
            is_google_user=user.is_google_user,
            has_password=user.has_password,
            settings=SettingsResponseDTO.from_domain(user.settings) if user.settings else None,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponseDTO(BaseDTO):
    """Authenticated user with its access token."""

    user: UserResponseDTO
    access_token: str
    token_type: str = "bearer"


class LogoResponseDTO(BaseDTO):
    url: str


class UserCountResponseDTO(BaseDTO):
    count: int
