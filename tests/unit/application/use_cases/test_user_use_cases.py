"""
Unit tests for account, profile and settings use cases.
"""

import pytest
from decimal import Decimal

from app.application.dto.user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    UpdateProfileRequestDTO,
    UpdatePasswordRequestDTO,
    UpdateSettingsRequestDTO,
)
from app.application.use_cases.user_use_cases import (
    RegisterUserUseCase,
    LoginUseCase,
    GetCurrentUserUseCase,
    UpdateProfileUseCase,
    UpdatePasswordUseCase,
    UploadLogoUseCase,
    UpdateSettingsUseCase,
    CountActiveUsersUseCase,
)
from app.domain.models.base import (
    ValidationError,
    EntityNotFoundError,
    DuplicateEntityError,
    AuthenticationError,
    LicenseSuspendedError,
)
from app.domain.models.user import LicenseStatus
from app.domain.services.storage_service import UploadedFile
from tests.factories import make_user, fixed_clock, FIXED_NOW
from tests.fakes import InMemoryUnitOfWork, FakeAuthService, FakeStorage


class TestRegisterAndLogin:

    def setup_method(self):
        self.uow = InMemoryUnitOfWork()
        self.auth = FakeAuthService()

    async def register(self, email="new@example.com", password="secret123"):
        request = RegisterRequestDTO(email=email, password=password, name="Siti Rahma")
        return await RegisterUserUseCase(self.uow, self.auth).execute(request)

    @pytest.mark.asyncio
    async def test_register_creates_user_with_settings(self):
        user, token = await self.register(email="New@Example.com")

        assert user.email == "new@example.com"
        assert user.has_password is True
        assert token == f"token-{user.id}"
        settings = self.uow.users.settings[user.id]
        assert settings.next_invoice_number == 1
        assert settings.invoice_prefix == "INV"
        assert settings.license_status == LicenseStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_register_duplicate_email_rejected(self):
        await self.register()

        with pytest.raises(DuplicateEntityError):
            await self.register(email="NEW@example.com")

    @pytest.mark.asyncio
    async def test_login_returns_token(self):
        registered, _ = await self.register()

        user, token = await LoginUseCase(self.uow, self.auth).execute(
            LoginRequestDTO(email="new@example.com", password="secret123")
        )

        assert user.id == registered.id
        assert token == f"token-{registered.id}"

    @pytest.mark.asyncio
    async def test_login_wrong_password_rejected(self):
        await self.register()

        with pytest.raises(AuthenticationError):
            await LoginUseCase(self.uow, self.auth).execute(
                LoginRequestDTO(email="new@example.com", password="wrong-password")
            )

    @pytest.mark.asyncio
    async def test_login_unknown_email_rejected(self):
        with pytest.raises(AuthenticationError):
            await LoginUseCase(self.uow, self.auth).execute(
                LoginRequestDTO(email="nobody@example.com", password="secret123")
            )

    @pytest.mark.asyncio
    async def test_login_inactive_user_rejected(self):
        self.uow.users.save(make_user(email="off@example.com", is_active=False))

        with pytest.raises(AuthenticationError):
            await LoginUseCase(self.uow, self.auth).execute(
                LoginRequestDTO(email="off@example.com", password="secret123")
            )

    @pytest.mark.asyncio
    async def test_login_suspended_license_rejected(self):
        user = make_user()
        user.settings.license_status = LicenseStatus.SUSPENDED
        self.uow.users.save(user)

        with pytest.raises(LicenseSuspendedError):
            await LoginUseCase(self.uow, self.auth).execute(
                LoginRequestDTO(email=user.email, password="secret123")
            )

    @pytest.mark.asyncio
    async def test_count_active_users(self):
        self.uow.users.save(make_user(email="a@example.com"))
        self.uow.users.save(make_user(email="b@example.com", is_active=False))

        assert await CountActiveUsersUseCase(self.uow).execute() == 1


class TestPasswordChanges:

    def setup_method(self):
        self.uow = InMemoryUnitOfWork()
        self.auth = FakeAuthService()
        self.user = make_user()
        self.uow.users.save(self.user)

    async def change(self, user_id, current, new):
        request = UpdatePasswordRequestDTO(current_password=current, new_password=new)
        return await UpdatePasswordUseCase(self.uow, self.auth).execute(user_id, request)

    @pytest.mark.asyncio
    async def test_change_with_current_password(self):
        had_password = await self.change(self.user.id, "secret123", "better-secret")

        assert had_password is True
        assert self.uow.users.users[self.user.id].password_hash == "hashed:better-secret"

    @pytest.mark.asyncio
    async def test_missing_current_password_rejected(self):
        with pytest.raises(ValidationError):
            await self.change(self.user.id, None, "better-secret")

    @pytest.mark.asyncio
    async def test_wrong_current_password_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.change(self.user.id, "not-it-at-all", "better-secret")

        assert exc_info.value.field == "current_password"
        assert self.uow.users.users[self.user.id].password_hash == "hashed:secret123"

    @pytest.mark.asyncio
    async def test_same_password_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.change(self.user.id, "secret123", "secret123")

        assert exc_info.value.field == "new_password"

    @pytest.mark.asyncio
    async def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            await self.change(self.user.id, "secret123", "short")

    @pytest.mark.asyncio
    async def test_google_user_sets_first_password(self):
        google_user = make_user(email="g@example.com", password_hash=None, is_google_user=True)
        self.uow.users.save(google_user)

        had_password = await self.change(google_user.id, None, "first-secret")

        assert had_password is False
        stored = self.uow.users.users[google_user.id]
        assert stored.has_password is True
        assert stored.password_hash == "hashed:first-secret"

    @pytest.mark.asyncio
    async def test_google_user_with_password_must_confirm_it(self):
        google_user = make_user(email="g@example.com", is_google_user=True)
        self.uow.users.save(google_user)

        with pytest.raises(ValidationError):
            await self.change(google_user.id, None, "first-secret")

    @pytest.mark.asyncio
    async def test_unknown_user_rejected(self):
        with pytest.raises(EntityNotFoundError):
            await self.change("missing", "secret123", "better-secret")


class TestProfileAndSettings:

    def setup_method(self):
        self.uow = InMemoryUnitOfWork()
        self.auth = FakeAuthService()
        self.user = make_user()
        self.uow.users.save(self.user)

    @pytest.mark.asyncio
    async def test_update_profile_fields(self):
        request = UpdateProfileRequestDTO(business_name="Toko Sejahtera", business_address="Jl. Sudirman 1")

        user = await UpdateProfileUseCase(self.uow, self.auth).execute(self.user.id, request)

        assert user.business_name == "Toko Sejahtera"
        assert self.uow.users.users[self.user.id].business_name == "Toko Sejahtera"

    @pytest.mark.asyncio
    async def test_profile_password_change_uses_policy(self):
        request = UpdateProfileRequestDTO(current_password="wrong-one", new_password="better-secret")

        with pytest.raises(ValidationError):
            await UpdateProfileUseCase(self.uow, self.auth).execute(self.user.id, request)

    @pytest.mark.asyncio
    async def test_get_current_user_includes_settings(self):
        user = await GetCurrentUserUseCase(self.uow).execute(self.user.id)

        assert user.settings.user_id == self.user.id

    @pytest.mark.asyncio
    async def test_logo_upload_path_and_profile(self):
        storage = FakeStorage()
        upload = UploadedFile("logo.png", "image/png", b"\x89PNG logo")

        user = await UploadLogoUseCase(self.uow, storage, clock=fixed_clock).execute(self.user.id, upload)

        millis = int(FIXED_NOW.timestamp() * 1000)
        expected = f"settings/profile/2024/03/{self.user.id}/logo-{millis}.png"
        assert storage.uploads[0][0] == expected
        assert user.business_logo == f"https://storage.test/{expected}"

    @pytest.mark.asyncio
    async def test_logo_upload_rejects_gif(self):
        storage = FakeStorage()
        upload = UploadedFile("logo.gif", "image/gif", b"GIF89a")

        with pytest.raises(ValidationError):
            await UploadLogoUseCase(self.uow, storage).execute(self.user.id, upload)
        assert storage.uploads == []

    @pytest.mark.asyncio
    async def test_update_settings_keeps_counter(self):
        self.uow.users.settings[self.user.id].next_invoice_number = 12
        request = UpdateSettingsRequestDTO(invoice_prefix="FK", tax_rate=Decimal("11"))

        settings = await UpdateSettingsUseCase(self.uow).execute(self.user.id, request)

        assert settings.invoice_prefix == "FK"
        assert settings.tax_rate == Decimal("11")
        assert self.uow.users.settings[self.user.id].next_invoice_number == 12
        assert self.uow.users.locked == [self.user.id]
