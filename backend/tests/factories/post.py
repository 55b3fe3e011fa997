"""Factory Boy definitions for posts and comments."""

from __future__ import annotations

import factory

from croctop.models import Comment, Post
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class PostFactory(BaseFactory):
    """Persisted post; ``author`` is appended to the author's ``posts``."""

    class Meta:
        model = Post

    id = None
    author = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Recette {n}")
    category = "Dessert"
    photos = factory.LazyFunction(list)
    prep_time = 15
    cook_time = 30
    allergens = factory.LazyFunction(lambda: ["Gluten"])
    prep_steps = factory.LazyFunction(lambda: ["Mélanger", "Cuire"])
    ingredients = factory.LazyFunction(
        lambda: [{"name": "Farine", "quantity": "200", "unit": "g"}]
    )
    archived = False


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    post = factory.SubFactory(PostFactory)
    user = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")
