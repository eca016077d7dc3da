"""
Authentication infrastructure module.
Handles password hashing, JWT validation and user authentication.
"""

from .jwt_handler import JWTHandler
from .password_auth import PasswordAuthService
from .dependencies import (
    get_current_user_id,
    get_auth_service,
    get_jwt_handler,
)

__all__ = [
    "JWTHandler",
    "PasswordAuthService",
    "get_current_user_id",
    "get_auth_service",
    "get_jwt_handler",
]
