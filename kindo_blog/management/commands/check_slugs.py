"""
Management command to audit post slugs.

Usage:
    python manage.py check_slugs              # list recent slugs, report problems
    python manage.py check_slugs --limit 25   # list more recent slugs
    python manage.py check_slugs --fix        # re-resolve duplicate and malformed slugs
"""
from django.core.management.base import BaseCommand
from django.db.models import Count

from kindo_blog.conf import blog_settings
from kindo_blog.models import Post
from kindo_blog.slugs import SLUG_PATTERN


class Command(BaseCommand):
    help = "Check post slugs for duplicates and malformed values"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            help="Number of recent posts to list",
        )
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Regenerate duplicate and malformed slugs from titles",
        )

    def handle(self, *args, **options):
        self.stdout.write("Recent post slugs:")
        for post in Post.objects.order_by("-created_at", "-pk")[:options["limit"]]:
            self.stdout.write(f"ID {post.pk}: {post.slug}")

        duplicates = (
            Post.objects.values("slug")
            .annotate(count=Count("id"))
            .filter(count__gt=1)
            .order_by("slug")
        )
        malformed = [
            post for post in Post.objects.order_by("pk")
            if not SLUG_PATTERN.match(post.slug)
            or len(post.slug) > blog_settings.SLUG_MAX_FINAL_LENGTH
        ]

        if duplicates:
            self.stderr.write(self.style.ERROR("Duplicate slugs found:"))
            for row in duplicates:
                self.stderr.write(f"- {row['slug']} ({row['count']} times)")
        else:
            self.stdout.write(self.style.SUCCESS("No duplicate slugs found."))

        if malformed:
            self.stderr.write(self.style.ERROR("Malformed slugs found:"))
            for post in malformed:
                self.stderr.write(f"- ID {post.pk}: {post.slug!r}")

        if options["fix"]:
            fixed = self.fix(duplicates, malformed)
            self.stdout.write(self.style.SUCCESS(f"Regenerated {fixed} slugs."))

    def fix(self, duplicates, malformed):
        """Re-resolve slugs, keeping the oldest post of each duplicate group."""
        to_fix = {post.pk: post for post in malformed}
        for row in duplicates:
            posts = Post.objects.filter(slug=row["slug"]).order_by("created_at", "pk")
            for post in posts[1:]:
                to_fix.setdefault(post.pk, post)

        for post in to_fix.values():
            old_slug = post.slug
            post.slug = ""
            post.save(update_fields=["slug"])
            self.stdout.write(f"ID {post.pk}: {old_slug} -> {post.slug}")
        return len(to_fix)
