"""Shopper record referenced by sessions and orders."""

from __future__ import annotations

from dataclasses import dataclass

GUEST_NAME = "Guest User"
GUEST_EMAIL_DOMAIN = "smartcart.local"


@dataclass(frozen=True)
class User:
    user_id: str
    email: str
    name: str
    phone: str | None = None

    @staticmethod
    def guest(user_id: str, name: str = GUEST_NAME) -> User:
        """Placeholder row for a shopper the store has not seen before."""
        return User(
            user_id=user_id,
            email=f"{user_id}@{GUEST_EMAIL_DOMAIN}",
            name=name,
        )
