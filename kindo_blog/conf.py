"""
Configuration settings for django-kindo-blog.

Override these in your Django settings.py:

    KINDO_BLOG = {
        'SLUG_MAX_BASE_LENGTH': 200,
        'AUTO_APPROVE_COMMENTS': False,
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Slugs
    "SLUG_MAX_BASE_LENGTH": 200,
    "SLUG_MAX_FINAL_LENGTH": 250,
    "SLUG_MAX_ATTEMPTS": 10000,
    "SLUG_SAVE_RETRIES": 5,

    # Posts
    "POSTS_PER_PAGE": 10,
    "MAX_PER_PAGE": 100,
    "FEATURED_POSTS_LIMIT": 5,
    "RECENT_POSTS_LIMIT": 10,
    "SEARCH_MIN_LENGTH": 2,
    "SEARCH_PER_PAGE": 12,
    "WORDS_PER_MINUTE": 200,

    # Comments
    "AUTO_APPROVE_COMMENTS": True,
    "COMMENT_MAX_LENGTH": 1000,
    "COMMENTS_PER_PAGE": 20,
    "GRAVATAR_URL": "https://www.gravatar.com/avatar/",

    # Newsletter
    "NEWSLETTER_DEFAULT_SOURCE": "website",
    "NEWSLETTER_PER_PAGE": 50,

    # Dashboard
    "RECENT_ACTIVITY_DAYS": 30,
    "DASHBOARD_MONTHS": 12,

    # Users
    "USERS_PER_PAGE": 15,
}


class KindoBlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from kindo_blog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid kindo_blog setting: {name}")

        user_settings = getattr(settings, "KINDO_BLOG", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = KindoBlogSettings()
