"""Password hashing collaborator.

Thin wrapper over Werkzeug's salted hashes so the rest of the code depends on
two calls only: :func:`hash_password` and :func:`verify_password`.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(plaintext: str) -> str:
    """Return a salted one-way digest of ``plaintext``."""
    if not isinstance(plaintext, str) or not plaintext:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(plaintext)


def verify_password(plaintext: str, digest: str | None) -> bool:
    """Return ``True`` when ``plaintext`` matches ``digest``."""
    if not digest or not isinstance(plaintext, str):
        return False
    # ``check_password_hash`` is untyped; coerce for mypy
    return bool(check_password_hash(digest, plaintext))
