"""
Unique slug generation for django-kindo-blog.

A slug is resolved from a title in two steps: the title is folded to an
ASCII base slug bounded by SLUG_MAX_BASE_LENGTH, then numeric suffixes
(-1, -2, ...) are tried until the existence checker reports a free
candidate. Candidates never exceed SLUG_MAX_FINAL_LENGTH.

The existence checker is any callable taking a slug and returning True
when it is already taken:

    resolve_slug("My Title", exists=model_slug_checker(Post))

Resolution is optimistic. Callers persisting the result must still handle
a unique-constraint violation (see models.base.UniqueSlugMixin).
"""
import logging
import re

from django.core.exceptions import ValidationError
from django.utils.text import slugify as django_slugify
from unidecode import unidecode

from .conf import blog_settings
from .exceptions import SlugSpaceExhausted

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def slugify(value):
    """
    Fold value to lowercase ASCII words joined by single hyphens.

    Non-Latin scripts are transliterated with Unidecode before Django's
    slugify strips punctuation. Underscores are treated as separators and
    "@" reads as "at".
    """
    value = unidecode(str(value or ""))
    value = value.replace("@", " at ").replace("_", " ")
    return django_slugify(value)


def truncate_slug(slug, max_length):
    """
    Cut slug to max_length without leaving a partial word at the end.

    A single word longer than max_length is cut as-is.
    """
    if len(slug) <= max_length:
        return slug

    truncated = slug[:max_length]
    if slug[max_length] != "-" and "-" in truncated:
        truncated = truncated.rsplit("-", 1)[0]
    return truncated.strip("-")


def model_slug_checker(model, exclude_pk=None, field="slug"):
    """
    Return an existence checker backed by the model's table.

    exclude_pk leaves out the record being edited.
    """
    queryset = model._default_manager.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)

    def exists(candidate):
        return queryset.filter(**{field: candidate}).exists()

    return exists


def resolve_slug(
    title,
    exists,
    max_base_length=None,
    max_final_length=None,
    max_attempts=None,
):
    """
    Return a slug for title that exists() reports as free.

    Args:
        title: human-authored text
        exists: callable returning True when a slug is taken
        max_base_length: bound for the slug before suffixing
        max_final_length: bound for the suffixed slug
        max_attempts: how many suffixes to try before giving up

    Raises:
        ValidationError: title has no letters or digits to build a slug from
        SlugSpaceExhausted: every suffix up to max_attempts was taken
    """
    if max_base_length is None:
        max_base_length = blog_settings.SLUG_MAX_BASE_LENGTH
    if max_final_length is None:
        max_final_length = blog_settings.SLUG_MAX_FINAL_LENGTH
    if max_attempts is None:
        max_attempts = blog_settings.SLUG_MAX_ATTEMPTS

    base = truncate_slug(slugify(title), min(max_base_length, max_final_length))
    if not base:
        raise ValidationError(
            "Cannot build a slug from %(title)r.",
            code="invalid_slug_source",
            params={"title": title},
        )

    if not exists(base):
        return base

    attempts = 0
    for counter in range(1, max_attempts + 1):
        suffix = f"-{counter}"
        available = max_final_length - len(suffix)
        if available < 1:
            break
        attempts = counter

        if len(base) > available:
            candidate = truncate_slug(base, available) + suffix
        else:
            candidate = base + suffix

        if not exists(candidate):
            logger.debug("Slug '%s' taken, using '%s'", base, candidate)
            return candidate

    logger.error("Slug space exhausted for '%s' after %d attempts", base, attempts)
    raise SlugSpaceExhausted(base, attempts)
