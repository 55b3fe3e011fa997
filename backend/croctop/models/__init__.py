from croctop.models.base import ModelValidationError
from croctop.models.comment import Comment
from croctop.models.post import ALLERGENS, CATEGORIES, Post, post_likes
from croctop.models.user import USER_ROLES, USER_STATUSES, User, user_follows

__all__ = [
    "ALLERGENS",
    "CATEGORIES",
    "Comment",
    "ModelValidationError",
    "Post",
    "USER_ROLES",
    "USER_STATUSES",
    "User",
    "post_likes",
    "user_follows",
]
