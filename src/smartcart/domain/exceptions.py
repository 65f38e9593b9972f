"""Domain-level exceptions.

All failures the caller may need to act on are expressed as subclasses of
DomainException.  Each class carries an ``ErrorKind`` so callers can branch
on the category instead of matching message text, and the underlying cause
(if any) is chained with ``raise ... from``.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    SERVICE_NOT_CONFIGURED = "SERVICE_NOT_CONFIGURED"
    REMOTE_UNAVAILABLE = "REMOTE_UNAVAILABLE"
    REMOTE_REJECTED = "REMOTE_REJECTED"
    CART_NOT_FOUND = "CART_NOT_FOUND"
    CART_UNAVAILABLE = "CART_UNAVAILABLE"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    SESSION_ALREADY_ACTIVE = "SESSION_ALREADY_ACTIVE"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"
    CHECKOUT_IN_PROGRESS = "CHECKOUT_IN_PROGRESS"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION
    retryable: bool = False

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class SessionItemNotFound(EntityNotFoundError):
    """The line item is not part of the active session."""


# --- Remote store ------------------------------------------------------------


class ServiceNotConfigured(DomainException):
    """Endpoint URL or API key is missing; nothing can be sent."""

    kind = ErrorKind.SERVICE_NOT_CONFIGURED


class RemoteUnavailable(DomainException):
    """Network failure, DNS failure, timeout or a 5xx from the store."""

    kind = ErrorKind.REMOTE_UNAVAILABLE
    retryable = True


class RemoteRejected(DomainException):
    """The store refused the request (constraint, auth or validation)."""

    kind = ErrorKind.REMOTE_REJECTED

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# --- Shopping session --------------------------------------------------------


class CartNotFound(DomainException):
    kind = ErrorKind.CART_NOT_FOUND


class CartUnavailable(DomainException):
    kind = ErrorKind.CART_UNAVAILABLE


class ProductNotFound(DomainException):
    kind = ErrorKind.PRODUCT_NOT_FOUND


class SessionAlreadyActive(DomainException):
    kind = ErrorKind.SESSION_ALREADY_ACTIVE


class NoActiveSession(DomainException):
    kind = ErrorKind.NO_ACTIVE_SESSION


class CheckoutInProgress(DomainException):
    """An order already exists for the session; its items are frozen."""

    kind = ErrorKind.CHECKOUT_IN_PROGRESS
