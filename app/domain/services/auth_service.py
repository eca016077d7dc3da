"""
Authentication service for user management.
Handles password hashing and access token generation.
"""

from abc import ABC, abstractmethod
from typing import Optional


class AuthService(ABC):
    """
    Authentication service interface.
    Defines authentication operations for users.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """
        Hash a password using secure hashing algorithm.
        """
        pass

    @abstractmethod
    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.
        """
        pass

    @abstractmethod
    def generate_access_token(self, user_id: str, email: str) -> str:
        """
        Generate an access token for the user.
        """
        pass

    @abstractmethod
    def verify_token(self, token: str) -> Optional[str]:
        """
        Verify a token and return the user ID if valid.
        """
        pass
