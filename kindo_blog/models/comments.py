"""
Comment model for django-kindo-blog.
"""
import hashlib

from django.db import models

from ..conf import blog_settings


class CommentQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(is_approved=True)

    def pending(self):
        return self.filter(is_approved=False)

    def top_level(self):
        return self.filter(parent__isnull=True)


class Comment(models.Model):
    """
    Guest comment on a post.

    Supports:
    - Threaded replies via parent field
    - Moderation via is_approved
    - Likes counter
    """

    post = models.ForeignKey(
        "kindo_blog.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="replies",
    )
    content = models.TextField()
    author_name = models.CharField(max_length=255)
    author_email = models.EmailField(max_length=255)
    author_website = models.URLField(max_length=255, blank=True)
    is_approved = models.BooleanField(default=False)
    likes = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CommentQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["post", "is_approved", "created_at"]),
        ]

    def __str__(self):
        return f"Comment by {self.author_name} on {self.post}"

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content

    @property
    def is_reply(self):
        return self.parent_id is not None

    @property
    def approved_replies(self):
        return self.replies.approved().order_by("created_at")

    @property
    def has_replies(self):
        return self.approved_replies.exists()

    @property
    def gravatar_url(self):
        digest = hashlib.md5(self.author_email.strip().lower().encode()).hexdigest()
        return f"{blog_settings.GRAVATAR_URL}{digest}?s=60&d=mp"

    def approve(self):
        """Approve the comment for display."""
        self.is_approved = True
        self.save(update_fields=["is_approved", "updated_at"])

    def reject(self):
        """Hide the comment again."""
        self.is_approved = False
        self.save(update_fields=["is_approved", "updated_at"])

    def increment_likes(self):
        """Increment likes atomically."""
        Comment.objects.filter(pk=self.pk).update(likes=models.F("likes") + 1)
        self.refresh_from_db(fields=["likes"])
