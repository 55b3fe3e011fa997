"""Post and comment Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, post_load, validate

from croctop.models.post import ALLERGENS, CATEGORIES
from croctop.services.content.dto import IngredientIn

from .user import UserSummarySchema


class IngredientSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=200))
    quantity = fields.String(required=True, validate=validate.Length(min=1, max=50))
    unit = fields.String(required=True, validate=validate.Length(min=1, max=50))


class PostWriteSchema(Schema):
    """
    Input payload for creating a post.

    Load with ``partial=True`` for updates; missing keys are then left
    untouched.
    """

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    category = fields.String(required=True, validate=validate.OneOf(CATEGORIES))
    photos = fields.List(fields.String(validate=validate.Length(max=500)), load_default=list)
    prep_time = fields.Integer(load_default=0, validate=validate.Range(min=0))
    cook_time = fields.Integer(load_default=0, validate=validate.Range(min=0))
    allergens = fields.List(fields.String(validate=validate.OneOf(ALLERGENS)), load_default=list)
    prep_steps = fields.List(fields.String(), load_default=list)
    ingredients = fields.List(fields.Nested(IngredientSchema), load_default=list)

    @post_load
    def build_ingredients(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        if "ingredients" in data:
            data["ingredients"] = [IngredientIn(**item) for item in data["ingredients"]]
        return data


class PostSchema(Schema):
    """Public post representation."""

    id = fields.Integer(required=True)
    author = fields.Nested(UserSummarySchema, required=True)
    title = fields.String(required=True)
    photos = fields.List(fields.String())
    category = fields.String(required=True)
    prep_time = fields.Integer()
    cook_time = fields.Integer()
    allergens = fields.List(fields.String())
    prep_steps = fields.List(fields.String())
    ingredients = fields.List(fields.Nested(IngredientSchema))
    likes = fields.List(fields.Integer())
    comments = fields.List(fields.Integer())
    archived = fields.Boolean()
    publish_date = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)


class CommentCreateSchema(Schema):
    content = fields.String(required=True, validate=validate.Length(min=1))


class CommentSchema(Schema):
    id = fields.Integer(required=True)
    post_id = fields.Integer(required=True)
    user = fields.Nested(UserSummarySchema, required=True)
    content = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
