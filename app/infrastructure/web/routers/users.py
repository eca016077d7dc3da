"""
User router.
Profile, password, logo and invoice settings of the authenticated user.
"""

from typing import Annotated, Dict
from fastapi import APIRouter, Depends, File, UploadFile

from app.config import get_settings
from app.infrastructure.auth import get_current_user_id, get_auth_service
from app.infrastructure.web.dependencies import (
    get_unit_of_work, get_storage, get_clock, read_upload
)
from app.application.dto.user_dto import (
    UpdateProfileRequestDTO,
    UpdatePasswordRequestDTO,
    UpdateSettingsRequestDTO,
    UserResponseDTO,
    SettingsResponseDTO,
    LogoResponseDTO,
    UserCountResponseDTO,
)
from app.application.use_cases.base_use_case import Clock
from app.application.use_cases.user_use_cases import (
    GetCurrentUserUseCase,
    UpdateProfileUseCase,
    UpdatePasswordUseCase,
    UploadLogoUseCase,
    UpdateSettingsUseCase,
    CountActiveUsersUseCase,
)
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.auth_service import AuthService
from app.domain.services.storage_service import FileStorage


router = APIRouter()


@router.get("/count", response_model=UserCountResponseDTO)
@router.get("/active-count", response_model=UserCountResponseDTO)
async def count_active_users(
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Public count of active users."""
    count = await CountActiveUsersUseCase(uow).execute()
    return UserCountResponseDTO(count=count)


@router.get("/profile", response_model=UserResponseDTO)
async def get_profile(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    user = await GetCurrentUserUseCase(uow).execute(user_id)
    return UserResponseDTO.from_domain(user)


@router.patch("/profile", response_model=UserResponseDTO)
async def update_profile(
    request: UpdateProfileRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)]
):
    """
    Update business profile fields.

    - **business_phone**: Indonesian mobile number, empty string clears it
    - **business_email**: empty string clears it
    - **current_password** / **new_password**: optional password change
    """
    user = await UpdateProfileUseCase(uow, auth_service).execute(user_id, request)
    return UserResponseDTO.from_domain(user)


@router.patch("/profile/password")
async def update_password(
    request: UpdatePasswordRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)]
) -> Dict[str, str]:
    had_password = await UpdatePasswordUseCase(uow, auth_service).execute(user_id, request)
    message = "Password updated successfully" if had_password else "Password set successfully"
    return {"message": message}


@router.post("/profile/logo", response_model=LogoResponseDTO)
async def upload_logo(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    storage: Annotated[FileStorage, Depends(get_storage)],
    clock: Annotated[Clock, Depends(get_clock)],
    file: UploadFile = File(...)
):
    """Upload a JPG or PNG business logo (max 5MB)."""
    upload = await read_upload(file)
    use_case = UploadLogoUseCase(
        uow, storage, clock, max_size=get_settings().max_upload_size_bytes
    )
    user = await use_case.execute(user_id, upload)
    return LogoResponseDTO(url=user.business_logo)


@router.patch("/settings", response_model=SettingsResponseDTO)
async def update_settings(
    request: UpdateSettingsRequestDTO,
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Update the invoice prefix and default tax rate."""
    settings = await UpdateSettingsUseCase(uow).execute(user_id, request)
    return SettingsResponseDTO.from_domain(settings)
