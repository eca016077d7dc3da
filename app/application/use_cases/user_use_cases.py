"""
User use cases for the application layer.
Accounts, profile, password, logo and invoice settings.
"""

import logging
from typing import Optional, Tuple

from app.application.dto.user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    UpdateProfileRequestDTO,
    UpdatePasswordRequestDTO,
    UpdateSettingsRequestDTO,
)
from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase, Clock
from app.domain.models.base import (
    ValidationError,
    EntityNotFoundError,
    DuplicateEntityError,
    AuthenticationError,
    LicenseSuspendedError,
    TenantSequenceMissingError,
    new_id,
    utc_now,
)
from app.domain.models.user import User, UserSettings, UserRegisteredEvent
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.auth_service import AuthService
from app.domain.services.storage_service import (
    FileStorage, UploadedFile, validate_image, dated_path, MAX_IMAGE_SIZE
)


logger = logging.getLogger(__name__)

LOGO_ROOT = "settings/profile"


def _get_user(uow: UnitOfWork, user_id: str) -> User:
    user = uow.users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundError("User", user_id)
    return user


class PasswordPolicy:
    """
    Rules for setting a new password.

    Users that already have a password must confirm it and pick a different
    one. Google users without a password may set one directly.
    """

    def __init__(self, auth_service: AuthService):
        self.auth_service = auth_service

    def requires_current_password(self, user: User) -> bool:
        return not (user.is_google_user and not user.has_password)

    def change(self, user: User, current_password: Optional[str], new_password: str) -> None:
        User.validate_password(new_password, "new_password")

        if self.requires_current_password(user):
            if not current_password:
                raise ValidationError("Current password is required", "current_password")

            if not user.password_hash or not self.auth_service.verify_password(
                current_password, user.password_hash
            ):
                raise ValidationError("Current password is incorrect", "current_password")

            if self.auth_service.verify_password(new_password, user.password_hash):
                raise ValidationError(
                    "New password must be different from the current password",
                    "new_password"
                )

        user.set_password_hash(self.auth_service.hash_password(new_password))


class RegisterUserUseCase(CommandUseCase):
    """Create a user together with its settings."""

    def __init__(self, uow: UnitOfWork, auth_service: AuthService):
        super().__init__(uow)
        self.auth_service = auth_service

    async def execute(self, request: RegisterRequestDTO) -> Tuple[User, str]:
        email = str(request.email).lower()
        User.validate_password(request.password)

        with self.uow:
            if self.uow.users.get_by_email(email) is not None:
                raise DuplicateEntityError("User", "email", email)

            user_id = new_id()
            user = User(
                id=user_id,
                email=email,
                name=request.name,
                business_name=request.business_name,
                password_hash=self.auth_service.hash_password(request.password),
                has_password=True,
                settings=UserSettings(id=new_id(), user_id=user_id),
            )
            user.add_event(UserRegisteredEvent(user.id, user.email))

            self.uow.users.save(user)
            self.uow.commit()
            self._collect_events(user)

        self._publish_events()
        return user, self.auth_service.generate_access_token(user.id, user.email)


class LoginUseCase(QueryUseCase):
    """Check credentials and issue an access token."""

    def __init__(self, uow: UnitOfWork, auth_service: AuthService):
        super().__init__(uow)
        self.auth_service = auth_service

    async def execute(self, request: LoginRequestDTO) -> Tuple[User, str]:
        with self.uow:
            user = self.uow.users.get_by_email(str(request.email).lower())

        if user is None or not user.password_hash:
            raise AuthenticationError("Invalid email or password")

        if not self.auth_service.verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is disabled")

        if user.settings is not None and user.settings.is_suspended:
            logger.warning("Suspended user %s tried to sign in", user.id)
            raise LicenseSuspendedError()

        return user, self.auth_service.generate_access_token(user.id, user.email)


class GetCurrentUserUseCase(QueryUseCase):

    async def execute(self, user_id: str) -> User:
        with self.uow:
            return _get_user(self.uow, user_id)


class UpdateProfileUseCase(CommandUseCase):
    """Update the business profile and optionally the password."""

    def __init__(self, uow: UnitOfWork, auth_service: AuthService):
        super().__init__(uow)
        self.password_policy = PasswordPolicy(auth_service)

    async def execute(self, user_id: str, request: UpdateProfileRequestDTO) -> User:
        provided = request.provided()
        current_password = provided.pop("current_password", None)
        new_password = provided.pop("new_password", None)

        with self.uow:
            user = _get_user(self.uow, user_id)
            user.update_profile(**provided)

            if new_password:
                self.password_policy.change(user, current_password, new_password)

            self.uow.users.save(user)
            self.uow.commit()
            self._collect_events(user)

        self._publish_events()
        return user


class UpdatePasswordUseCase(CommandUseCase):
    """Set or change the password. Returns True when one existed before."""

    def __init__(self, uow: UnitOfWork, auth_service: AuthService):
        super().__init__(uow)
        self.password_policy = PasswordPolicy(auth_service)

    async def execute(self, user_id: str, request: UpdatePasswordRequestDTO) -> bool:
        with self.uow:
            user = _get_user(self.uow, user_id)
            had_password = user.has_password

            self.password_policy.change(user, request.current_password, request.new_password)

            self.uow.users.save(user)
            self.uow.commit()
            self._collect_events(user)

        self._publish_events()
        return had_password


class UploadLogoUseCase(CommandUseCase):
    """Store a business logo and put it on the profile."""

    def __init__(
        self,
        uow: UnitOfWork,
        storage: FileStorage,
        clock: Clock = utc_now,
        max_size: int = MAX_IMAGE_SIZE
    ):
        super().__init__(uow, clock)
        self.storage = storage
        self.max_size = max_size

    async def execute(self, user_id: str, upload: UploadedFile) -> User:
        extension = validate_image(upload, self.max_size)

        with self.uow:
            user = _get_user(self.uow, user_id)

            path = dated_path(LOGO_ROOT, user.id, "logo", extension, self.clock())
            url = await self.storage.upload(path, upload.content, upload.content_type)
            logger.info("Stored logo for user %s at %s", user.id, path)

            user.update_profile(business_logo=url)
            self.uow.users.save(user)
            self.uow.commit()
            self._collect_events(user)

        self._publish_events()
        return user


class UpdateSettingsUseCase(CommandUseCase):
    """Change the invoice prefix or default tax rate."""

    async def execute(self, user_id: str, request: UpdateSettingsRequestDTO) -> UserSettings:
        provided = request.provided()

        with self.uow:
            settings = self.uow.users.get_settings(user_id, for_update=True)
            if settings is None:
                raise TenantSequenceMissingError(user_id)

            settings.update_invoice_settings(
                invoice_prefix=provided.get("invoice_prefix"),
                tax_rate=provided.get("tax_rate"),
            )
            self.uow.users.save_settings(settings)
            self.uow.commit()

        logger.info("Updated invoice settings for user %s", user_id)
        return settings


class CountActiveUsersUseCase(QueryUseCase):

    async def execute(self) -> int:
        with self.uow:
            return self.uow.users.count_active()
