"""
django-kindo-blog - A Django blog back end with a JSON API.

Features:
- Unique, length-bounded slugs with numeric collision suffixes
- Posts with categories, tags, featured flags and scheduled publishing
- Threaded guest comments with moderation and likes
- Newsletter subscribe/unsubscribe with source tracking
- Admin dashboard statistics
"""

__version__ = "0.1.0"
