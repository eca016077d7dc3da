"""
Authentication dependencies for FastAPI.
Resolves the current user from a Bearer header or the auth cookie.
"""

from typing import Optional, Annotated
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config import get_settings
from app.infrastructure.auth.jwt_handler import JWTHandler
from app.infrastructure.auth.password_auth import PasswordAuthService
from app.domain.models.base import AuthenticationError


# Security scheme; the cookie is checked when the header is absent
security = HTTPBearer(auto_error=False)

# Global instances
jwt_handler = JWTHandler()
auth_service = PasswordAuthService(jwt_handler)


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return jwt_handler


def get_auth_service() -> PasswordAuthService:
    """Dependency to get authentication service."""
    return auth_service


def _extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_settings().auth_cookie_name)


async def get_current_user_id(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> str:
    """
    FastAPI dependency to get current authenticated user ID.

    Raises:
        AuthenticationError: If the token is missing, expired or invalid
    """
    token = _extract_token(request, credentials)
    if not token:
        raise AuthenticationError("Authentication required")

    return jwt_handler.get_user_id(token)
