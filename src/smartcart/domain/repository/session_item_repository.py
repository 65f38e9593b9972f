"""Abstract repository for SessionItem rows."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smartcart.domain.model.session import SessionItem


class SessionItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> SessionItem | None:
        """Return a line item by its ID, or None."""

    @abstractmethod
    def find_by_barcode(self, session_id: str, barcode: str) -> SessionItem | None:
        """Return the session's line item for *barcode*, or None."""

    @abstractmethod
    def list_for_session(self, session_id: str) -> list[SessionItem]:
        """Return every line item of a session."""

    @abstractmethod
    def add(self, item: SessionItem) -> None:
        """Persist a new line item."""

    @abstractmethod
    def save_quantity(self, item: SessionItem) -> None:
        """Persist quantity and total price of an existing line item."""

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Remove a line item.  Deleting a missing item is not an error."""

    @abstractmethod
    def session_id_of(self, item_id: str) -> str | None:
        """Return the session a line item belongs to, or None if it is gone."""
