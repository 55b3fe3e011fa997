"""HTTP helpers shared by the API tests."""

from __future__ import annotations

from typing import Any

API = "/api/v1"


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


def signup(client, username: str, password: str = "secret123", **extra: Any) -> dict[str, Any]:
    """Create an account through the API and return the ``data`` body."""
    payload = {"username": username, "email": f"{username}@example.com", "password": password}
    payload.update(extra)
    resp = client.post(f"{API}/auth/signup", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def signin(client, username: str, password: str = "secret123") -> dict[str, Any]:
    """Sign in by username and return ``{access_token, refresh_token, user}``."""
    resp = client.post(f"{API}/auth/signin", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["data"]


def register(client, username: str) -> tuple[dict[str, Any], dict[str, str]]:
    """Sign up and sign in; return the user body and an auth header."""
    user = signup(client, username)
    session = signin(client, username)
    return user, bearer(session["access_token"])


def tarte_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Tarte",
        "category": "Dessert",
        "prep_time": 30,
        "cook_time": 45,
        "allergens": ["Gluten", "Oeufs"],
        "prep_steps": ["Préparer la pâte", "Cuire"],
        "ingredients": [{"name": "Farine", "quantity": "250", "unit": "g"}],
    }
    payload.update(overrides)
    return payload
