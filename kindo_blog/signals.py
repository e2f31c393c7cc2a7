"""
Signal handlers for django-kindo-blog.
"""
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import AuthorProfile


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_author_profile(sender, instance, created, **kwargs):
    """Give every new user a profile; superusers start as admins."""
    if not created:
        return
    role = AuthorProfile.ROLE_ADMIN if instance.is_superuser else AuthorProfile.ROLE_AUTHOR
    AuthorProfile.objects.get_or_create(user=instance, defaults={"role": role})
