"""
Shared model behaviour for django-kindo-blog.
"""
import logging

from django.db import IntegrityError, models, transaction

from ..conf import blog_settings
from ..slugs import model_slug_checker, resolve_slug

logger = logging.getLogger(__name__)


class UniqueSlugMixin(models.Model):
    """
    Fill an empty slug from slug_source_field on save.

    The slug is resolved against the model's own table. If another writer
    takes the same slug between the check and the insert, the unique
    constraint fires and the slug is resolved again, up to
    SLUG_SAVE_RETRIES times. A slug set by hand is saved as-is.
    """

    slug_source_field = "title"

    class Meta:
        abstract = True

    def get_slug_source(self):
        return getattr(self, self.slug_source_field)

    def get_slug_checker(self):
        return model_slug_checker(type(self), exclude_pk=self.pk)

    def resolve_slug(self):
        return resolve_slug(self.get_slug_source(), self.get_slug_checker())

    def save(self, *args, **kwargs):
        if self.slug:
            return super().save(*args, **kwargs)

        self.slug = self.resolve_slug()
        retries = 0
        while True:
            try:
                with transaction.atomic():
                    return super().save(*args, **kwargs)
            except IntegrityError as exc:
                if retries >= blog_settings.SLUG_SAVE_RETRIES or "slug" not in str(exc).lower():
                    raise
                retries += 1
                logger.warning(
                    "Slug '%s' for %s was taken concurrently, retrying (%d)",
                    self.slug,
                    type(self).__name__,
                    retries,
                )
                self.slug = self.resolve_slug()
