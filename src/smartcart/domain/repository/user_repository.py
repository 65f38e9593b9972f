"""Abstract repository for shopper records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user."""
