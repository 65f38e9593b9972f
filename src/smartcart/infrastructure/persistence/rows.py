"""Shared conversions between domain values and store columns."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from smartcart.domain.exceptions import RemoteRejected, ValidationError
from smartcart.domain.model.value_objects import Money


@contextmanager
def decoding(resource: str) -> Iterator[None]:
    """Report a row that cannot be turned into an entity as a store rejection."""
    try:
        yield
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise RemoteRejected(f"Malformed row in '{resource}': {exc!r}") from exc


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def from_millis(raw: int | float | None) -> datetime | None:
    if raw is None:
        return None
    return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)


def money(raw: Any) -> Money:
    return Money.of(raw if raw is not None else 0)


def compact(row: dict[str, Any]) -> dict[str, Any]:
    """Drop unset optional columns so the store applies its defaults."""
    return {key: value for key, value in row.items() if value is not None}
