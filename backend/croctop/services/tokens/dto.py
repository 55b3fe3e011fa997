# croctop/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated caller as carried inside a token.

    :param user_id: Primary key of the user.
    :type user_id: int
    :param role: ``normal`` | ``partner`` | ``certified``. Informational only.
    :type role: str
    """

    user_id: int
    role: str = "normal"


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str
