# croctop/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from croctop.services.users.dto import UserOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignupIn:
    """
    Input DTO for account creation.

    :param password: Raw password; only its digest is stored.
    """

    username: str
    email: str
    password: str
    firstname: str | None = None
    lastname: str | None = None
    birthday: date | None = None
    bio: str | None = None
    picture_avatar: str | None = None


@dataclass(frozen=True, slots=True)
class SigninIn:
    """
    Input DTO for signin. Either ``email`` or ``username`` identifies the user.
    """

    password: str
    email: str | None = None
    username: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SigninOut:
    access_token: str
    refresh_token: str
    user: UserOut


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    access_token: str
