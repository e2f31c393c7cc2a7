"""
Exceptions raised by django-kindo-blog.
"""


class BlogError(Exception):
    """Base class for kindo_blog errors."""


class SlugSpaceExhausted(BlogError):
    """No free numeric suffix was found for a base slug."""

    def __init__(self, base, attempts):
        self.base = base
        self.attempts = attempts
        super().__init__(
            f"Could not find a unique slug for '{base}' after {attempts} attempts"
        )
