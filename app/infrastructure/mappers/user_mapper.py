"""
User mapper for converting between domain entities and database models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from app.domain.models.user import User, UserSettings, LicenseStatus
from app.infrastructure.db.models import UserModel, UserSettingsModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored datetimes are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to UserModel."""
        model = UserModel(id=user.id)
        self.update_model(model, user)
        if user.settings is not None:
            model.settings = self.settings_to_model(user.settings)
        return model

    def update_model(self, model: UserModel, user: User) -> None:
        """Copy mutable user state onto an existing model."""
        model.email = user.email
        model.password = user.password_hash
        model.name = user.name
        model.business_name = user.business_name
        model.business_logo = user.business_logo
        model.business_address = user.business_address
        model.business_phone = user.business_phone
        model.business_email = user.business_email
        model.is_google_user = user.is_google_user
        model.has_password = user.has_password
        model.is_active = user.is_active
        model.created_at = user.created_at
        model.updated_at = user.updated_at

    def model_to_domain(self, model: UserModel) -> User:
        """Convert UserModel to User domain entity."""
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            password_hash=model.password,
            business_name=model.business_name,
            business_logo=model.business_logo,
            business_address=model.business_address,
            business_phone=model.business_phone,
            business_email=model.business_email,
            is_google_user=bool(model.is_google_user),
            has_password=bool(model.has_password),
            is_active=bool(model.is_active),
            settings=self.settings_to_domain(model.settings) if model.settings else None,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def settings_to_model(self, settings: UserSettings) -> UserSettingsModel:
        model = UserSettingsModel(id=settings.id, user_id=settings.user_id)
        self.update_settings_model(model, settings)
        return model

    def update_settings_model(self, model: UserSettingsModel, settings: UserSettings) -> None:
        model.invoice_prefix = settings.invoice_prefix
        model.next_invoice_number = settings.next_invoice_number
        model.tax_rate = settings.tax_rate
        model.currency = settings.currency
        model.license_key = settings.license_key
        model.license_status = settings.license_status
        model.created_at = settings.created_at
        model.updated_at = settings.updated_at

    def settings_to_domain(self, model: UserSettingsModel) -> UserSettings:
        return UserSettings(
            id=model.id,
            user_id=model.user_id,
            invoice_prefix=model.invoice_prefix,
            next_invoice_number=model.next_invoice_number,
            tax_rate=Decimal(model.tax_rate) if model.tax_rate is not None else Decimal("0"),
            currency=model.currency,
            license_key=model.license_key,
            license_status=LicenseStatus(model.license_status),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
