"""
Post, Category, and Tag models for django-kindo-blog.
"""
import math

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.html import strip_tags

from ..conf import blog_settings
from .base import UniqueSlugMixin


class CategoryQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def ordered(self):
        return self.order_by("order", "name")


class Category(UniqueSlugMixin):
    """
    Topic grouping for posts.

    Inactive categories are hidden from public listings but keep their posts.
    """

    slug_source_field = "name"

    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True)
    color = models.CharField(max_length=7, blank=True, help_text="Hex color, e.g. #1e88e5")
    icon = models.CharField(max_length=50, blank=True)
    is_active = models.BooleanField(default=True)
    order = models.IntegerField(default=0, help_text="Display order")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CategoryQuerySet.as_manager()

    class Meta:
        ordering = ["order", "name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse("kindo_blog:category_posts", kwargs={"slug": self.slug})

    @property
    def published_posts(self):
        return self.posts.published()


class Tag(UniqueSlugMixin):
    """Flat keyword attached to posts."""

    slug_source_field = "name"

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    @property
    def published_posts(self):
        return self.posts.published()


class PostQuerySet(models.QuerySet):
    def published(self):
        """Posts flagged published whose publish time has arrived."""
        return self.filter(is_published=True, published_at__lte=timezone.now())

    def drafts(self):
        return self.filter(is_published=False)

    def featured(self):
        return self.filter(is_featured=True)

    def in_category(self, category_slug):
        return self.filter(category__slug=category_slug)


class Post(UniqueSlugMixin):
    """
    Blog post / article.

    The slug is resolved from the title once, on first save. Editing code
    clears it when the title changes and no slug was chosen by hand.
    """

    # Content
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    content = models.TextField()
    excerpt = models.CharField(max_length=500, blank=True)
    featured_image = models.CharField(
        max_length=500,
        blank=True,
        help_text="Stored file path or absolute URL",
    )
    image_caption = models.CharField(max_length=255, blank=True)

    # SEO
    meta_title = models.CharField(max_length=255, blank=True)
    meta_description = models.CharField(max_length=500, blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )
    category = models.ForeignKey(
        Category,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="posts",
    )
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    # Status
    is_published = models.BooleanField(default=False)
    is_featured = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True, db_index=True)

    views = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-created_at"]
        indexes = [
            models.Index(fields=["is_published", "-published_at"]),
            models.Index(fields=["author", "-created_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if self.is_published and not self.published_at:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("kindo_blog:post_detail", kwargs={"slug": self.slug})

    @property
    def url(self):
        return self.get_absolute_url()

    @property
    def is_live(self):
        """Published and past its publish time."""
        return bool(
            self.is_published
            and self.published_at
            and self.published_at <= timezone.now()
        )

    @property
    def reading_time(self):
        """Estimated reading time in minutes, never less than one."""
        word_count = len(strip_tags(self.content).split())
        return max(1, math.ceil(word_count / blog_settings.WORDS_PER_MINUTE))

    @property
    def approved_comments(self):
        return self.comments.approved()

    @property
    def top_level_comments(self):
        return self.comments.approved().top_level()

    def increment_views(self):
        """Increment view count atomically."""
        Post.objects.filter(pk=self.pk).update(views=models.F("views") + 1)
        self.refresh_from_db(fields=["views"])

    def publish(self):
        """Publish the post, keeping an earlier publish time if it had one."""
        self.is_published = True
        if not self.published_at:
            self.published_at = timezone.now()
        self.save(update_fields=["is_published", "published_at", "updated_at"])

    def unpublish(self):
        """Return the post to draft."""
        self.is_published = False
        self.save(update_fields=["is_published", "updated_at"])
