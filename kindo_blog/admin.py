"""
Django admin configuration for kindo_blog.
"""
from django.contrib import admin

from .forms import SlugAdminForm
from .models import (
    AuthorProfile,
    Category,
    Comment,
    NewsletterSubscription,
    Post,
    Tag,
)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    form = SlugAdminForm
    list_display = ["name", "slug", "color", "is_active", "order"]
    list_filter = ["is_active"]
    search_fields = ["name", "slug", "description"]
    list_editable = ["order", "is_active"]


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    form = SlugAdminForm
    list_display = ["name", "slug", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    form = SlugAdminForm
    list_display = [
        "title_preview",
        "author",
        "category",
        "is_published",
        "is_featured",
        "views",
        "published_at",
    ]
    list_filter = ["is_published", "is_featured", "category", "created_at"]
    search_fields = ["title", "content", "slug", "author__username"]
    raw_id_fields = ["author"]
    filter_horizontal = ["tags"]
    date_hierarchy = "created_at"
    readonly_fields = ["views", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "tags")
        }),
        ("Image", {
            "fields": ("featured_image", "image_caption"),
        }),
        ("Publishing", {
            "fields": ("is_published", "is_featured", "published_at")
        }),
        ("SEO", {
            "fields": ("meta_title", "meta_description"),
            "classes": ("collapse",),
        }),
        ("Metadata", {
            "fields": ("views", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts", "feature_posts", "unfeature_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        for post in queryset:
            post.publish()
        self.message_user(request, f"{queryset.count()} posts published.")

    @admin.action(description="Unpublish selected posts")
    def unpublish_posts(self, request, queryset):
        count = queryset.update(is_published=False)
        self.message_user(request, f"{count} posts unpublished.")

    @admin.action(description="Feature selected posts")
    def feature_posts(self, request, queryset):
        count = queryset.update(is_featured=True)
        self.message_user(request, f"{count} posts featured.")

    @admin.action(description="Unfeature selected posts")
    def unfeature_posts(self, request, queryset):
        count = queryset.update(is_featured=False)
        self.message_user(request, f"{count} posts unfeatured.")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = [
        "preview",
        "author_name",
        "author_email",
        "post",
        "is_approved",
        "likes",
        "created_at",
    ]
    list_filter = ["is_approved", "created_at"]
    search_fields = ["content", "author_name", "author_email", "post__title"]
    raw_id_fields = ["post", "parent"]
    readonly_fields = ["likes", "created_at", "updated_at"]
    actions = ["approve_comments", "reject_comments"]

    @admin.action(description="Approve selected comments")
    def approve_comments(self, request, queryset):
        count = queryset.update(is_approved=True)
        self.message_user(request, f"{count} comments approved.")

    @admin.action(description="Reject selected comments")
    def reject_comments(self, request, queryset):
        count = queryset.update(is_approved=False)
        self.message_user(request, f"{count} comments rejected.")


@admin.register(NewsletterSubscription)
class NewsletterSubscriptionAdmin(admin.ModelAdmin):
    list_display = ["email", "is_active", "subscription_source", "subscribed_at", "unsubscribed_at"]
    list_filter = ["is_active", "subscription_source", "subscribed_at"]
    search_fields = ["email"]
    readonly_fields = ["subscribed_at", "unsubscribed_at"]
    actions = ["deactivate_subscriptions", "reactivate_subscriptions"]

    @admin.action(description="Unsubscribe selected emails")
    def deactivate_subscriptions(self, request, queryset):
        count = 0
        for subscription in queryset.active():
            subscription.unsubscribe()
            count += 1
        self.message_user(request, f"{count} subscriptions deactivated.")

    @admin.action(description="Resubscribe selected emails")
    def reactivate_subscriptions(self, request, queryset):
        count = 0
        for subscription in queryset.inactive():
            NewsletterSubscription.subscribe(subscription.email, subscription.subscription_source)
            count += 1
        self.message_user(request, f"{count} subscriptions reactivated.")


@admin.register(AuthorProfile)
class AuthorProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "role", "status", "created_at"]
    list_filter = ["role", "status"]
    search_fields = ["user__username", "user__email", "bio"]
    raw_id_fields = ["user"]
    readonly_fields = ["created_at", "updated_at"]
