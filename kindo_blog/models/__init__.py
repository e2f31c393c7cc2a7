"""
Models for django-kindo-blog.

All models are importable from kindo_blog.models:

    from kindo_blog.models import Post, Category, Tag, Comment
"""
from .posts import Category, Tag, Post
from .comments import Comment
from .newsletter import NewsletterSubscription
from .profiles import AuthorProfile

__all__ = [
    # Posts
    "Category",
    "Tag",
    "Post",
    # Comments
    "Comment",
    # Newsletter
    "NewsletterSubscription",
    # Accounts
    "AuthorProfile",
]
