"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, domain
models, and application services.

The translation to HTTP responses (RFC 7807) is handled by
``croctop/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the offending
    ``table.column`` list, so callers may pass either form.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :type exc: IntegrityError
    :param constraint_name: Constraint name or column reference to match.
    :type constraint_name: str
    :returns: ``True`` if the IntegrityError mentions the given name.
    :rtype: bool
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer translates them to problem responses.
    """

    pass


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class UnauthenticatedError(ServiceError):
    """Raised when a protected operation receives no credential at all."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialError(ServiceError):
    """Raised when a username/email and password pair does not match."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(InvalidCredentialError):
    """
    Raised when a token is malformed, wrongly signed or expired.

    The three causes share one message.
    """

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Authorization & domain rules
# --------------------------------------------------------------------------- #


class AuthorizationError(ServiceError):
    """Raised when an authenticated caller is not allowed to act on a resource."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or set-membership rule is violated.

    Duplicate likes/follows, removing a like or follow that does not exist,
    and duplicate usernames/emails all land here.

    :param entity: Entity name (e.g., "Post").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class SelfFollowError(ConflictError):
    """Raised when a user tries to follow or unfollow themselves.

    :param action: ``"follow"`` or ``"unfollow"``, echoed in the message.
    """

    def __init__(self, action: str = "follow") -> None:
        super().__init__("User", f"you cannot {action} yourself")
