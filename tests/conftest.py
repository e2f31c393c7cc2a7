"""
Shared fixtures for django-kindo-blog tests.
"""
import pytest
from django.contrib.auth import get_user_model

from kindo_blog.models import Category, Post, Tag

User = get_user_model()


@pytest.fixture
def author(db):
    """Create an author."""
    return User.objects.create_user(
        username="author",
        email="author@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_author(db):
    """Create a second author."""
    return User.objects.create_user(
        username="other",
        email="other@example.com",
        password="testpass123",
    )


@pytest.fixture
def author_client(client, author):
    """Client logged in as the author."""
    client.force_login(author)
    return client


@pytest.fixture
def category(db):
    """Create a test category."""
    return Category.objects.create(name="Tech News")


@pytest.fixture
def tag(db):
    """Create a test tag."""
    return Tag.objects.create(name="Django")


@pytest.fixture
def post(db, author, category):
    """Create a published post."""
    return Post.objects.create(
        title="Hello World",
        content="This is a test post body.",
        author=author,
        category=category,
        is_published=True,
    )


@pytest.fixture
def draft(db, author):
    """Create a draft post."""
    return Post.objects.create(
        title="Work In Progress",
        content="Not ready yet.",
        author=author,
    )
