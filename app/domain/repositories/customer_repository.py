"""
Customer repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.customer import Customer


class CustomerRepository(ABC):
    """Repository interface for customers, scoped to the owning user."""

    @abstractmethod
    def save(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    def get_by_id(self, customer_id: str, user_id: str) -> Optional[Customer]:
        """
        Find a customer owned by the user.
        """
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> List[Customer]:
        """
        List a user's customers ordered by name.
        """
        pass

    @abstractmethod
    def delete(self, customer_id: str, user_id: str) -> bool:
        pass
