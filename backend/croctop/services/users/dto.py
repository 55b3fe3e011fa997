"""
DTOs for the user-facing services.

Output DTOs never carry the password digest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Partial profile update; ``None`` leaves a field unchanged.

    :param password: New raw password, re-hashed by the model.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    birthday: date | None = None
    bio: str | None = None
    picture_avatar: str | None = None
    status: str | None = None

    def changes(self) -> dict[str, object]:
        return {
            name: getattr(self, name)
            for name in self.__slots__
            if getattr(self, name) is not None
        }


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserSummaryOut:
    id: int
    username: str


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public representation of a user.

    ``followers``, ``following`` and ``posts`` are id lists.
    """

    id: int
    username: str
    email: str
    firstname: str | None
    lastname: str | None
    birthday: date | None
    bio: str | None
    picture_avatar: str | None
    status: str
    role: str
    signup_date: datetime | None
    last_login: datetime | None
    followers: list[int] = field(default_factory=list)
    following: list[int] = field(default_factory=list)
    posts: list[int] = field(default_factory=list)
