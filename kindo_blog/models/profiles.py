"""
Author profile model for django-kindo-blog.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class AuthorProfile(models.Model):
    """
    Blog role and public profile for a user.

    Admins moderate comments and manage categories, subscribers and
    accounts. Authors manage their own posts.
    """

    ROLE_ADMIN = "admin"
    ROLE_AUTHOR = "author"
    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_AUTHOR, "Author"),
    ]

    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"
    STATUS_SUSPENDED = "suspended"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
        (STATUS_SUSPENDED, "Suspended"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_profile",
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_AUTHOR)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    bio = models.TextField(blank=True)
    avatar = models.URLField(max_length=500, blank=True)
    social_facebook = models.URLField(blank=True)
    social_twitter = models.URLField(blank=True)
    social_instagram = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Author Profile"

    def __str__(self):
        return f"{self.user} ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def is_author(self):
        return self.role == self.ROLE_AUTHOR or self.is_admin

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    def set_status(self, status):
        """
        Change account status.

        Raises ValidationError for unknown statuses and when this is the
        last active admin being taken out of service.
        """
        if status not in dict(self.STATUS_CHOICES):
            raise ValidationError(f"Unknown status: {status}", code="invalid_status")

        if self.is_admin and self.is_active and status != self.STATUS_ACTIVE:
            active_admins = AuthorProfile.objects.filter(
                role=self.ROLE_ADMIN,
                status=self.STATUS_ACTIVE,
            ).count()
            if active_admins <= 1:
                raise ValidationError(
                    "Cannot change status of the last active admin account.",
                    code="last_admin",
                )

        self.status = status
        self.save(update_fields=["status", "updated_at"])
