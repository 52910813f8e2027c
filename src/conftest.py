"""
Pytest configuration and global fixtures.

Defines common fixtures and settings for the entire test suite.
"""

import os

import django
from django.conf import settings

# Configure Django settings before any Django imports
if not settings.configured:
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.test")
    django.setup()

# Now safe to import Django and DRF components
from datetime import timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any, Callable  # noqa: E402

import pytest  # noqa: E402
from django.core.cache import cache  # noqa: E402
from django.utils import timezone  # noqa: E402
from faker import Faker  # noqa: E402
from rest_framework.test import APIClient  # noqa: E402

from authors.models import Author, Post, PostStatus  # noqa: E402

fake = Faker()


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Start every test with an empty cache (the column catalog lives there)."""
    cache.clear()


@pytest.fixture
def api_client() -> APIClient:
    """DRF API test client."""
    return APIClient()


@pytest.fixture
def make_author() -> Callable[..., Author]:
    """Factory fixture creating authors with fake defaults."""

    def _make_author(**kwargs: Any) -> Author:
        kwargs.setdefault("first_name", fake.first_name())
        kwargs.setdefault("last_name", fake.last_name())
        kwargs.setdefault("gender", fake.random_element(["male", "female"]))
        return Author.objects.create(**kwargs)

    return _make_author


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Factory fixture creating public posts published a few days ago."""

    def _make_post(author: Author, **kwargs: Any) -> Post:
        kwargs.setdefault("title", fake.sentence())
        kwargs.setdefault("content", fake.paragraph())
        kwargs.setdefault("published_at", timezone.now() - timedelta(days=3))
        kwargs.setdefault("is_private", PostStatus.PUBLIC)
        kwargs.setdefault("rating", Decimal("5"))
        return Post.objects.create(author=author, **kwargs)

    return _make_post
