"""
Authentication router.
Handles registration, login, the current user and logout.
"""

from typing import Annotated, Dict
from fastapi import APIRouter, Depends, Response, status

from app.config import get_settings
from app.infrastructure.auth import get_current_user_id, get_auth_service, get_jwt_handler
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.web.dependencies import get_unit_of_work
from app.application.dto.user_dto import (
    RegisterRequestDTO,
    LoginRequestDTO,
    UserResponseDTO,
    AuthResponseDTO,
)
from app.application.use_cases.user_use_cases import (
    RegisterUserUseCase,
    LoginUseCase,
    GetCurrentUserUseCase,
)
from app.domain.repositories.unit_of_work import UnitOfWork
from app.domain.services.auth_service import AuthService


router = APIRouter()


def set_auth_cookie(response: Response, token: str, max_age: int) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponseDTO)
async def register(
    request: RegisterRequestDTO,
    response: Response,
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
):
    """
    Register a new user account.

    - **email**: Valid email address
    - **password**: Password with at least 8 characters
    - **name**: User's full name
    - **business_name**: Optional business name
    """
    use_case = RegisterUserUseCase(uow, auth_service)
    user, token = await use_case.execute(request)

    set_auth_cookie(response, token, jwt_handler.max_age_seconds)
    return AuthResponseDTO(user=UserResponseDTO.from_domain(user), access_token=token)


@router.post("/login", response_model=AuthResponseDTO)
async def login(
    request: LoginRequestDTO,
    response: Response,
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
):
    """
    Authenticate user and return an access token.

    The token is also set as an http-only cookie.
    """
    use_case = LoginUseCase(uow, auth_service)
    user, token = await use_case.execute(request)

    set_auth_cookie(response, token, jwt_handler.max_age_seconds)
    return AuthResponseDTO(user=UserResponseDTO.from_domain(user), access_token=token)


@router.get("/me", response_model=UserResponseDTO)
async def me(
    user_id: Annotated[str, Depends(get_current_user_id)],
    uow: Annotated[UnitOfWork, Depends(get_unit_of_work)]
):
    """Get the authenticated user."""
    user = await GetCurrentUserUseCase(uow).execute(user_id)
    return UserResponseDTO.from_domain(user)


@router.post("/logout")
async def logout(response: Response) -> Dict[str, str]:
    """Sign out by clearing the auth cookie."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return {"message": "Successfully logged out"}
