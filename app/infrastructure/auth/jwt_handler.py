"""
JWT token handler.
Issues and validates the access tokens handed out at login.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from app.config import get_settings
from app.domain.models.base import AuthenticationError


class JWTHandler:
    """Handles JWT token creation, validation and user extraction."""

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expire_days: Optional[int] = None
    ):
        settings = get_settings()
        self.jwt_secret = secret or settings.jwt_secret_key
        self.jwt_algorithm = algorithm or settings.jwt_algorithm
        self.expire_days = expire_days if expire_days is not None else settings.jwt_access_token_expire_days

    @property
    def max_age_seconds(self) -> int:
        return self.expire_days * 24 * 60 * 60

    def create_access_token(self, user_id: str, email: str) -> str:
        """
        Create a signed access token.

        Args:
            user_id: Subject of the token
            email: User email, informational

        Returns:
            JWT token string
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self.expire_days)).timestamp()),
        }
        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        if token.startswith("Bearer "):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True}
            )
        except JWTError as e:
            raise AuthenticationError(f"Invalid token: {e}")

        if not payload.get("sub"):
            raise AuthenticationError("Token missing user ID (sub claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """Extract user ID from a valid token."""
        return self.verify_token(token)["sub"]
