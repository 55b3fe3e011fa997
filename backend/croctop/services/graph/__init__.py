"""Consistency of the User, Post and Comment reference graph."""

from .manager import GraphIntegrityManager

__all__ = ["GraphIntegrityManager"]
