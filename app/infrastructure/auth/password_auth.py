"""
Password based authentication service.
bcrypt hashing through passlib plus JWT access tokens.
"""

from typing import Optional

from passlib.context import CryptContext

from app.domain.models.base import AuthenticationError
from app.domain.services.auth_service import AuthService
from app.infrastructure.auth.jwt_handler import JWTHandler


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class PasswordAuthService(AuthService):
    """AuthService implementation used by the API."""

    def __init__(self, jwt_handler: Optional[JWTHandler] = None):
        self.jwt_handler = jwt_handler or JWTHandler()

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        try:
            return pwd_context.verify(password, hashed_password)
        except ValueError:
            # malformed hash
            return False

    def generate_access_token(self, user_id: str, email: str) -> str:
        return self.jwt_handler.create_access_token(user_id, email)

    def verify_token(self, token: str) -> Optional[str]:
        try:
            return self.jwt_handler.get_user_id(token)
        except AuthenticationError:
            return None
