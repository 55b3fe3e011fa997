"""Idempotent demo data for local development environments."""

from __future__ import annotations

import logging
from typing import Any, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from croctop.models import Post, User
from croctop.repositories import PostRepository, UserRepository

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicePass123",
        "firstname": "Alice",
        "bio": "Pâtissière du dimanche.",
    },
    {
        "username": "bob",
        "email": "bob@example.com",
        "password": "bobPass123",
        "firstname": "Bob",
        "role": "partner",
    },
]

POST_FIXTURES: list[dict[str, Any]] = [
    {
        "author": "alice",
        "title": "Tarte",
        "category": "Dessert",
        "prep_time": 30,
        "cook_time": 45,
        "allergens": ["Gluten", "Oeufs", "Lait"],
        "prep_steps": [
            "Préparer la pâte brisée.",
            "Disposer les pommes en rosace.",
            "Cuire 45 minutes à 180°C.",
        ],
        "ingredients": [
            {"name": "Farine", "quantity": "250", "unit": "g"},
            {"name": "Beurre", "quantity": "125", "unit": "g"},
            {"name": "Pommes", "quantity": "4", "unit": "pièces"},
        ],
        "liked_by": ["bob"],
    },
]

FOLLOW_FIXTURES: list[tuple[str, str]] = [("bob", "alice")]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def seed_users(session: Session, summary: dict[str, dict[str, int]]) -> dict[str, User]:
    by_username: dict[str, User] = {}
    for fixture in USER_FIXTURES:
        data = dict(fixture)
        username = data["username"]
        user = session.execute(select(User).filter_by(username=username)).scalar_one_or_none()
        created = user is None
        if user is None:
            password = data.pop("password")
            user = User(**data)
            user.password = password
            session.add(user)
            session.flush()
        by_username[username] = user
        _touch(summary, "users", created)
    return by_username


def seed_posts(
    session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]
) -> None:
    posts = PostRepository(session=session)
    for fixture in POST_FIXTURES:
        data = dict(fixture)
        author = users[data.pop("author")]
        liked_by = data.pop("liked_by", [])
        post = session.execute(
            select(Post).filter_by(author_id=author.id, title=data["title"])
        ).scalar_one_or_none()
        created = post is None
        if post is None:
            post = Post(**data)
            author.posts.append(post)
            session.flush()
        _touch(summary, "posts", created)

        for username in liked_by:
            liker = users[username]
            like_created = not posts.has_like(post.id, liker.id)
            if like_created:
                posts.add_like(post.id, liker.id)
            _touch(summary, "post_likes", like_created)


def seed_follows(
    session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]
) -> None:
    repo = UserRepository(session=session)
    for follower_name, followee_name in FOLLOW_FIXTURES:
        follower, followee = users[follower_name], users[followee_name]
        created = not repo.is_following(follower.id, followee.id)
        if created:
            repo.add_follow_edge(follower.id, followee.id)
        _touch(summary, "user_follows", created)


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed users, posts, likes and follows in one transaction."""
    if verbose:
        LOGGER.info("Running demo seed pipeline...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    try:
        users = seed_users(session, summary)
        seed_posts(session, users, summary)
        seed_follows(session, users, summary)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return summary


__all__ = ["run_all", "seed_follows", "seed_posts", "seed_users"]
