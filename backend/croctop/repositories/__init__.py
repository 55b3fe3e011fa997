"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from croctop.repositories.base import BaseRepository
from croctop.repositories.comment import CommentRepository
from croctop.repositories.post import PostRepository
from croctop.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "PostRepository",
    "UserRepository",
]
