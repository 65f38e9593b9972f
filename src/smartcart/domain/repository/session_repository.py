"""Abstract repository for ShoppingSession aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.session import ShoppingSession


class SessionRepository(ABC):

    @abstractmethod
    def get_by_id(self, session_id: str) -> ShoppingSession | None:
        """Return a session by its ID, or None if not found."""

    @abstractmethod
    def add(self, session: ShoppingSession) -> None:
        """Persist a new session."""

    @abstractmethod
    def save_completion(self, session: ShoppingSession) -> None:
        """Persist status, completion time and total of a completed session."""
