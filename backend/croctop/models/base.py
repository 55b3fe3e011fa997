"""Reusable SQLAlchemy mixins shared by domain models (typed 2.0)."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class ModelValidationError(ValueError):
    """Raised by ``@validates`` hooks when a field value is rejected.

    The message is client-safe; the API layer returns it as a 400.
    """


class TimestampMixin:
    """Provide ``created_at`` and ``updated_at`` timestamp columns.

    Attributes
    ----------
    created_at:
        Timezone-aware timestamp filled by the database on insert.
    updated_at:
        Timezone-aware timestamp refreshed on every ORM update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class PKMixin:
    """Expose an integer surrogate primary key column named ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class ReprMixin:
    """Provide a concise ``__repr__`` with the id and an optional label field.

    Subclasses set ``__repr_label__`` to the attribute shown next to the id,
    e.g. ``<User id=3 username='alice'>``.
    """

    __repr_label__: ClassVar[str | None] = None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        if self.__repr_label__:
            return f"<{cls} id={key} {self.__repr_label__}={getattr(self, self.__repr_label__, None)!r}>"
        return f"<{cls} id={key}>"
