"""User profile services."""

from .dto import UserOut, UserSummaryOut, UserUpdateIn
from .service import UserService

__all__ = ["UserOut", "UserService", "UserSummaryOut", "UserUpdateIn"]
