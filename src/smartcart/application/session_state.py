"""In-memory view of the current shopping session.

The remote store is the system of record; SessionState is the cache the
orchestrator keeps in sync by re-reading after every mutation.  Only the
orchestrator's handlers write to it, always by replacing whole values, so
a subscriber never observes a half-updated session.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from smartcart.domain.exceptions import NoActiveSession
from smartcart.domain.model.session import SessionItem, ShoppingSession

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """Holds one value and pushes it to subscribers when it changes.

    New subscribers immediately receive the latest value.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)
            current = self._value
        listener(current)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def set(self, value: T) -> None:
        with self._lock:
            if value == self._value:
                return
            self._value = value
            listeners = list(self._listeners)
        for listener in listeners:
            listener(value)


class SessionState:
    """Single-writer holder of at most one active session and its items."""

    def __init__(self) -> None:
        self.current_session: Observable[ShoppingSession | None] = Observable(None)
        self.items: Observable[tuple[SessionItem, ...]] = Observable(())

    @property
    def is_active(self) -> bool:
        return self.current_session.value is not None

    def require_active(self, session_id: str | None = None) -> ShoppingSession:
        """Return the active session, checking *session_id* if one is given."""
        session = self.current_session.value
        if session is None:
            raise NoActiveSession("No active shopping session")
        if session_id is not None and session_id != session.session_id:
            raise NoActiveSession(f"Session {session_id} is not the active session")
        return session

    # --- Mutation (orchestrator only) -----------------------------------------

    def activate(self, session: ShoppingSession, items: list[SessionItem]) -> None:
        self.current_session.set(session)
        self.items.set(tuple(items))

    def replace_items(self, items: list[SessionItem]) -> None:
        self.items.set(tuple(items))

    def clear(self) -> None:
        self.current_session.set(None)
        self.items.set(())
