"""
DTOs for the content services (posts, comments, likes, follows).

DTOs isolate the service layer from ORM models and HTTP payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from croctop.services.users.dto import UserOut, UserSummaryOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class IngredientIn:
    """One recipe line; ``quantity`` is free text such as ``"1/2"`` or ``"une pincée"``."""

    name: str
    quantity: str
    unit: str

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for publishing a post.

    :param category: One of the ``CATEGORIES`` values.
    :param prep_time: Minutes, non-negative.
    :param cook_time: Minutes, non-negative.
    :param allergens: Subset of the ``ALLERGENS`` values.
    """

    title: str
    category: str
    photos: list[str] = field(default_factory=list)
    prep_time: int = 0
    cook_time: int = 0
    allergens: list[str] = field(default_factory=list)
    prep_steps: list[str] = field(default_factory=list)
    ingredients: list[IngredientIn] = field(default_factory=list)

    def as_fields(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "category": self.category,
            "photos": list(self.photos),
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "allergens": list(self.allergens),
            "prep_steps": list(self.prep_steps),
            "ingredients": [i.as_dict() for i in self.ingredients],
        }


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """Partial post update; ``None`` leaves a field unchanged."""

    title: str | None = None
    category: str | None = None
    photos: list[str] | None = None
    prep_time: int | None = None
    cook_time: int | None = None
    allergens: list[str] | None = None
    prep_steps: list[str] | None = None
    ingredients: list[IngredientIn] | None = None

    def changes(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name in self.__slots__:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "ingredients":
                value = [i.as_dict() for i in value]
            out[name] = value
        return out


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostOut:
    """
    Public representation of a post.

    ``likes`` holds liker user ids and ``comments`` holds comment ids, both in
    insertion order.
    """

    id: int
    author: UserSummaryOut
    title: str
    photos: list[str]
    category: str
    prep_time: int
    cook_time: int
    allergens: list[str]
    prep_steps: list[str]
    ingredients: list[dict[str, Any]]
    archived: bool
    publish_date: datetime | None
    updated_at: datetime | None
    likes: list[int] = field(default_factory=list)
    comments: list[int] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PostListOut:
    items: list[PostOut]


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    post_id: int
    user: UserSummaryOut
    content: str
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class CommentListOut:
    items: list[CommentOut]


@dataclass(frozen=True, slots=True)
class FollowOut:
    """Both ends of a follow edge after the change."""

    user: UserOut
    target: UserOut
