"""
User repository interface.
Defines the contract for user and settings persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.user import User, UserSettings


class UserRepositoryInterface(ABC):
    """
    Repository interface for User aggregate.
    The user's settings record, which holds the invoice sequence, lives here too.
    """

    @abstractmethod
    def save(self, user: User) -> User:
        """
        Save a user and its settings.
        Raises DuplicateEntityError when the email is taken.
        """
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Find a user by their ID, settings included.
        """
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by their email address.
        """
        pass

    @abstractmethod
    def count_active(self) -> int:
        pass

    @abstractmethod
    def get_settings(self, user_id: str, for_update: bool = False) -> Optional[UserSettings]:
        """
        Read the user's settings.
        With for_update the row stays locked until the transaction ends, which
        serialises invoice number allocation per user.
        """
        pass

    @abstractmethod
    def save_settings(self, settings: UserSettings) -> UserSettings:
        pass
