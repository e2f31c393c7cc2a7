"""
Newsletter subscription model for django-kindo-blog.
"""
from django.db import models
from django.utils import timezone

from ..conf import blog_settings


class SubscriptionQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def inactive(self):
        return self.filter(is_active=False)

    def from_source(self, source):
        return self.filter(subscription_source=source)


class NewsletterSubscription(models.Model):
    """
    One row per email address.

    Unsubscribing keeps the row so a later subscribe reactivates it.
    """

    email = models.EmailField(max_length=255, unique=True)
    is_active = models.BooleanField(default=True)
    subscribed_at = models.DateTimeField(default=timezone.now, db_index=True)
    unsubscribed_at = models.DateTimeField(null=True, blank=True)
    subscription_source = models.CharField(max_length=50, blank=True)

    objects = SubscriptionQuerySet.as_manager()

    class Meta:
        ordering = ["-subscribed_at"]

    def __str__(self):
        status = "active" if self.is_active else "unsubscribed"
        return f"{self.email} ({status})"

    @classmethod
    def is_subscribed(cls, email):
        return cls.objects.active().filter(email__iexact=email).exists()

    @classmethod
    def subscribe(cls, email, source=None):
        """Create or reactivate the subscription for email."""
        subscription, _ = cls.objects.update_or_create(
            email=email.strip().lower(),
            defaults={
                "is_active": True,
                "subscribed_at": timezone.now(),
                "unsubscribed_at": None,
                "subscription_source": source or blog_settings.NEWSLETTER_DEFAULT_SOURCE,
            },
        )
        return subscription

    def unsubscribe(self):
        self.is_active = False
        self.unsubscribed_at = timezone.now()
        self.save(update_fields=["is_active", "unsubscribed_at"])
        return self
