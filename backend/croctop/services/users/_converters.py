from __future__ import annotations

from croctop.models.user import User

from .dto import UserOut, UserSummaryOut


def user_to_summary(row: User) -> UserSummaryOut:
    return UserSummaryOut(id=row.id, username=row.username)


def user_to_out(row: User) -> UserOut:
    return UserOut(
        id=row.id,
        username=row.username,
        email=row.email,
        firstname=row.firstname,
        lastname=row.lastname,
        birthday=row.birthday,
        bio=row.bio,
        picture_avatar=row.picture_avatar,
        status=row.status,
        role=row.role,
        signup_date=row.signup_date,
        last_login=row.last_login,
        followers=[u.id for u in row.followers],
        following=[u.id for u in row.following],
        posts=[p.id for p in row.posts],
    )
