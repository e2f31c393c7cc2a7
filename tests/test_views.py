"""
Tests for the django-kindo-blog JSON API.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from kindo_blog.models import (
    AuthorProfile,
    Category,
    Comment,
    NewsletterSubscription,
    Post,
)


def api(name, **kwargs):
    return reverse(f"kindo_blog:{name}", kwargs=kwargs)


def make_comment(post, **kwargs):
    defaults = {
        "author_name": "Reader",
        "author_email": "reader@example.com",
        "content": "Nice one",
        "is_approved": True,
    }
    defaults.update(kwargs)
    return Comment.objects.create(post=post, **defaults)


class TestPostCreate:
    """Tests for creating posts over the API."""

    def test_requires_login(self, client, db):
        response = client.post(api("post_list"), {"title": "Hi", "content": "Body"},
                               content_type="application/json")
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create_post(self, author_client, author, category, tag):
        """Test a created post gets a slug from its title."""
        response = author_client.post(
            api("post_list"),
            {
                "title": "My First Post",
                "content": "Body text",
                "category": category.pk,
                "tags": [tag.pk],
                "is_published": True,
            },
            content_type="application/json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Post created successfully."
        assert body["data"]["slug"] == "my-first-post"
        assert body["data"]["author"]["id"] == author.pk
        assert body["data"]["category"]["slug"] == "tech-news"
        assert body["data"]["tags"] == [{"id": tag.pk, "name": "Django", "slug": "django"}]
        assert body["data"]["published_at"] is not None

    def test_create_form_encoded(self, author_client):
        response = author_client.post(api("post_list"), {"title": "Form Post", "content": "Body"})
        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "form-post"
        assert response.json()["data"]["is_published"] is False

    def test_duplicate_title_suffixed(self, author_client, post):
        response = author_client.post(
            api("post_list"),
            {"title": "Hello World", "content": "Again"},
            content_type="application/json",
        )
        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "hello-world-1"

    def test_title_required(self, author_client):
        response = author_client.post(api("post_list"), {"content": "Body"},
                                      content_type="application/json")
        assert response.status_code == 422
        body = response.json()
        assert body["errors"]["title"][0]["message"] == "Title is required."

    def test_title_without_slug_characters(self, author_client):
        response = author_client.post(api("post_list"), {"title": "?!?", "content": "Body"},
                                      content_type="application/json")
        assert response.status_code == 422
        assert "title" in response.json()["errors"]

    def test_malformed_json(self, author_client):
        response = author_client.post(api("post_list"), "{not json",
                                      content_type="application/json")
        assert response.status_code == 400
        assert response.json()["message"] == "Request body is not valid JSON."

    def test_slug_space_exhausted(self, author_client, author, settings):
        """Test a title with no free suffix left is refused with 409."""
        settings.KINDO_BLOG = {"SLUG_MAX_ATTEMPTS": 1}
        Post.objects.create(title="Busy", content="Body", author=author)
        Post.objects.create(title="Busy", content="Body", author=author)

        response = author_client.post(api("post_list"), {"title": "Busy", "content": "Body"},
                                      content_type="application/json")

        assert response.status_code == 409
        assert response.json()["success"] is False
        assert Post.objects.count() == 2

    def test_inactive_author_refused(self, author_client, author):
        author.blog_profile.set_status(AuthorProfile.STATUS_SUSPENDED)
        response = author_client.post(api("post_list"), {"title": "Hi", "content": "Body"},
                                      content_type="application/json")
        assert response.status_code == 403
        assert response.json()["message"] == "Your account is not active."


class TestPostList:
    """Tests for listing posts."""

    def test_public_list_only_published(self, client, post, draft):
        response = client.get(api("post_list"))
        body = response.json()
        assert response.status_code == 200
        assert [item["slug"] for item in body["data"]["data"]] == ["hello-world"]
        assert body["data"]["total"] == 1
        assert body["data"]["current_page"] == 1

    def test_pagination(self, client, author):
        """Test the configured page size is applied."""
        for i in range(7):
            Post.objects.create(title=f"Post {i}", content="Body", author=author, is_published=True)

        body = client.get(api("post_list")).json()["data"]
        assert body["per_page"] == 5
        assert body["last_page"] == 2
        assert len(body["data"]) == 5

        body = client.get(api("post_list"), {"page": 2, "per_page": 3}).json()["data"]
        assert body["per_page"] == 3
        assert len(body["data"]) == 3

    def test_filters(self, client, author, post, tag):
        other = Post.objects.create(
            title="Other", content="Body", author=author, is_published=True, is_featured=True,
        )
        other.tags.add(tag)

        def slugs(**params):
            data = client.get(api("post_list"), params).json()["data"]["data"]
            return [item["slug"] for item in data]

        assert slugs(category="tech-news") == ["hello-world"]
        assert slugs(tag="django") == ["other"]
        assert slugs(featured="true") == ["other"]
        assert slugs(search="test post") == ["hello-world"]

    def test_ordering(self, client, author, post):
        Post.objects.create(title="Aardvark", content="Body", author=author, is_published=True)
        data = client.get(api("post_list"), {"order_by": "title", "order_dir": "asc"}).json()
        assert [item["title"] for item in data["data"]["data"]] == ["Aardvark", "Hello World"]

    def test_own_posts(self, author_client, post, draft, other_author):
        Post.objects.create(title="Not Mine", content="Body", author=other_author)
        make_comment(post)
        make_comment(post, is_approved=False)

        data = author_client.get(api("post_list"), {"mine": 1}).json()["data"]["data"]
        assert {item["slug"] for item in data} == {"hello-world", "work-in-progress"}
        counts = {item["slug"]: item["comments_count"] for item in data}
        assert counts["hello-world"] == 1

        data = author_client.get(api("post_list"), {"mine": 1, "status": "draft"}).json()
        assert [item["slug"] for item in data["data"]["data"]] == ["work-in-progress"]

    def test_admin_list_with_stats(self, admin_client, post, draft):
        body = admin_client.get(api("post_list"), {"admin": 1}).json()
        assert body["data"]["total"] == 2
        assert body["stats"] == {
            "total_posts": 2,
            "published_posts": 1,
            "draft_posts": 1,
            "total_comments": 0,
        }

    def test_featured_and_recent(self, client, author, post):
        Post.objects.create(
            title="Star", content="Body", author=author, is_published=True, is_featured=True,
        )
        featured = client.get(api("post_featured")).json()["data"]
        recent = client.get(api("post_recent")).json()["data"]
        assert [item["slug"] for item in featured] == ["star"]
        assert {item["slug"] for item in recent} == {"star", "hello-world"}


class TestPostSearch:
    """Tests for post search."""

    def test_query_too_short(self, client, db):
        response = client.get(api("post_search"), {"q": "a"})
        assert response.status_code == 422
        assert response.json()["message"] == "Search query must be at least 2 characters long."

    def test_search_matches_category_and_tag(self, client, author, post, tag):
        tagged = Post.objects.create(title="Tagged", content="Body", author=author, is_published=True)
        tagged.tags.add(tag)

        data = client.get(api("post_search"), {"q": "tech"}).json()["data"]["data"]
        assert [item["slug"] for item in data] == ["hello-world"]

        data = client.get(api("post_search"), {"q": "django"}).json()["data"]["data"]
        assert [item["slug"] for item in data] == ["tagged"]

    def test_search_skips_unpublished(self, client, author, tag):
        """Test drafts never leak through tag or category matches."""
        hidden = Post.objects.create(title="Hidden", content="Body", author=author)
        hidden.tags.add(tag)
        body = client.get(api("post_search"), {"q": "django"}).json()
        assert body["data"]["total"] == 0
        assert body["message"] == "Search results for: django"


class TestPostDetail:
    """Tests for reading a post by slug."""

    def test_view_counted(self, client, post):
        response = client.get(api("post_detail", slug="hello-world"))
        assert response.status_code == 200
        assert response.json()["data"]["views"] == 1
        post.refresh_from_db()
        assert post.views == 1

    def test_includes_comment_threads(self, client, post):
        parent = make_comment(post)
        make_comment(post, parent=parent, content="Reply")
        make_comment(post, content="Pending", is_approved=False)

        comments = client.get(api("post_detail", slug="hello-world")).json()["data"]["comments"]
        assert len(comments) == 1
        assert [reply["content"] for reply in comments[0]["replies"]] == ["Reply"]

    def test_missing_post(self, client, db):
        response = client.get(api("post_detail", slug="nope"))
        assert response.status_code == 404

    def test_draft_hidden_from_public(self, client, draft):
        response = client.get(api("post_detail", slug=draft.slug))
        assert response.status_code == 404

    def test_draft_visible_to_owner(self, author_client, draft):
        response = author_client.get(api("post_detail", slug=draft.slug))
        assert response.status_code == 200
        draft.refresh_from_db()
        assert draft.views == 0

    def test_scheduled_post_hidden(self, client, author):
        Post.objects.create(
            title="Later", content="Body", author=author, is_published=True,
            published_at=timezone.now() + timedelta(days=1),
        )
        assert client.get(api("post_detail", slug="later")).status_code == 404


class TestPostManage:
    """Tests for editing and deleting posts."""

    def test_get_for_editing(self, author_client, draft):
        response = author_client.get(api("post_manage", pk=draft.pk))
        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "work-in-progress"

    def test_other_author_forbidden(self, client, other_author, post):
        client.force_login(other_author)
        response = client.get(api("post_manage", pk=post.pk))
        assert response.status_code == 403
        assert response.json()["message"] == "You do not have permission to access this post."

    def test_admin_may_manage_any_post(self, admin_client, post):
        response = admin_client.get(api("post_manage", pk=post.pk))
        assert response.status_code == 200

    def test_title_change_regenerates_slug(self, author_client, post):
        response = author_client.patch(api("post_manage", pk=post.pk), {"title": "Hello Again"},
                                       content_type="application/json")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["slug"] == "hello-again"
        assert data["content"] == "This is a test post body."
        assert data["category"]["slug"] == "tech-news"

    def test_same_title_keeps_slug(self, author_client, post):
        response = author_client.put(
            api("post_manage", pk=post.pk),
            {"title": "Hello World", "content": "Rewritten"},
            content_type="application/json",
        )
        assert response.json()["data"]["slug"] == "hello-world"
        assert response.json()["data"]["content"] == "Rewritten"

    def test_regenerated_slug_avoids_others(self, author_client, author, post):
        Post.objects.create(title="Taken Title", content="Body", author=author)
        response = author_client.patch(api("post_manage", pk=post.pk), {"title": "Taken Title"},
                                       content_type="application/json")
        assert response.json()["data"]["slug"] == "taken-title-1"

    def test_manual_slug(self, author_client, post):
        response = author_client.patch(
            api("post_manage", pk=post.pk),
            {"title": "Renamed", "slug": "hand-picked"},
            content_type="application/json",
        )
        assert response.json()["data"]["slug"] == "hand-picked"

    @pytest.mark.parametrize("slug", ["Bad_Slug", "double--hyphen", "-edge-"])
    def test_manual_slug_validated(self, author_client, post, slug):
        response = author_client.patch(api("post_manage", pk=post.pk), {"slug": slug},
                                       content_type="application/json")
        assert response.status_code == 422
        assert "slug" in response.json()["errors"]

    def test_manual_slug_must_be_unique(self, author_client, author, post):
        Post.objects.create(title="Other", content="Body", author=author)
        response = author_client.patch(api("post_manage", pk=post.pk), {"slug": "other"},
                                       content_type="application/json")
        assert response.status_code == 422

    def test_delete(self, author_client, post):
        response = author_client.delete(api("post_manage", pk=post.pk))
        assert response.status_code == 200
        assert not Post.objects.filter(pk=post.pk).exists()

    def test_publish_and_unpublish(self, author_client, draft):
        response = author_client.post(api("post_publish", pk=draft.pk))
        assert response.json()["data"]["is_published"] is True

        response = author_client.post(api("post_unpublish", pk=draft.pk))
        assert response.json()["data"]["is_published"] is False
        draft.refresh_from_db()
        assert draft.published_at is not None


class TestCategories:
    """Tests for category endpoints."""

    def test_list_with_counts(self, client, category, post, draft):
        Category.objects.create(name="Hidden", is_active=False)
        draft.category = category
        draft.save()

        data = client.get(api("category_list")).json()["data"]
        assert len(data) == 1
        assert data[0]["slug"] == "tech-news"
        assert data[0]["posts_count"] == 1

    def test_create_requires_admin(self, author_client):
        response = author_client.post(api("category_list"), {"name": "New"},
                                      content_type="application/json")
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Admin privileges required."

    def test_create(self, admin_client):
        response = admin_client.post(api("category_list"), {"name": "Science & Tech"},
                                     content_type="application/json")
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "science-tech"
        assert data["is_active"] is True
        assert data["order"] == 0

    def test_rename_regenerates_slug(self, admin_client, category):
        response = admin_client.patch(api("category_detail", pk=category.pk), {"name": "World News"},
                                      content_type="application/json")
        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "world-news"

    def test_create_slug_space_exhausted(self, admin_client, settings):
        settings.KINDO_BLOG = {"SLUG_MAX_ATTEMPTS": 1}
        Category.objects.create(name="Tech")
        Category.objects.create(name="TECH")

        response = admin_client.post(api("category_list"), {"name": "TEch"},
                                     content_type="application/json")

        assert response.status_code == 409
        assert Category.objects.count() == 2

    def test_rename_slug_space_exhausted(self, admin_client, settings):
        settings.KINDO_BLOG = {"SLUG_MAX_ATTEMPTS": 1}
        Category.objects.create(name="Tech")
        Category.objects.create(name="TECH")
        science = Category.objects.create(name="Science")

        response = admin_client.patch(api("category_detail", pk=science.pk), {"name": "TEch"},
                                      content_type="application/json")

        assert response.status_code == 409
        science.refresh_from_db()
        assert science.name == "Science"
        assert science.slug == "science"

    def test_delete_with_posts_refused(self, admin_client, category, post):
        response = admin_client.delete(api("category_detail", pk=category.pk))
        assert response.status_code == 422
        assert Category.objects.filter(pk=category.pk).exists()

    def test_delete(self, admin_client, category):
        response = admin_client.delete(api("category_detail", pk=category.pk))
        assert response.status_code == 200
        assert not Category.objects.exists()

    def test_category_posts(self, client, category, post):
        body = client.get(api("category_posts", slug="tech-news")).json()["data"]
        assert body["category"]["name"] == "Tech News"
        assert [item["slug"] for item in body["posts"]["data"]] == ["hello-world"]

    def test_unknown_category(self, client, db):
        assert client.get(api("category_posts", slug="nope")).status_code == 404


class TestComments:
    """Tests for comment endpoints."""

    payload = {
        "author_name": "Guest",
        "author_email": "guest@example.com",
        "content": "First!",
    }

    def test_submit_comment(self, client, post):
        response = client.post(api("post_comments", post_id=post.pk), self.payload,
                               content_type="application/json")
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment submitted successfully."
        assert body["data"]["is_approved"] is True

    def test_submit_comment_moderated(self, client, post, settings):
        settings.KINDO_BLOG = {"AUTO_APPROVE_COMMENTS": False}
        response = client.post(api("post_comments", post_id=post.pk), self.payload,
                               content_type="application/json")
        body = response.json()
        assert body["message"] == "Comment submitted successfully. It will appear after approval."
        assert body["data"]["is_approved"] is False

    def test_reply(self, client, post):
        parent = make_comment(post)
        payload = dict(self.payload, parent=parent.pk)
        response = client.post(api("post_comments", post_id=post.pk), payload,
                               content_type="application/json")
        assert response.json()["data"]["parent_id"] == parent.pk

    def test_reply_to_other_post_rejected(self, client, author, post):
        other = Post.objects.create(title="Other", content="Body", author=author, is_published=True)
        foreign = make_comment(other)
        payload = dict(self.payload, parent=foreign.pk)
        response = client.post(api("post_comments", post_id=post.pk), payload,
                               content_type="application/json")
        assert response.status_code == 422

    def test_draft_not_commentable(self, client, draft):
        response = client.post(api("post_comments", post_id=draft.pk), self.payload,
                               content_type="application/json")
        assert response.status_code == 404
        assert response.json()["message"] == "Post not found or not published."

    def test_invalid_comment(self, client, post):
        payload = dict(self.payload, author_email="not-an-email", content="x" * 1001)
        response = client.post(api("post_comments", post_id=post.pk), payload,
                               content_type="application/json")
        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"author_email", "content"}

    def test_comment_length_follows_settings(self, client, post, settings):
        settings.KINDO_BLOG = {"COMMENT_MAX_LENGTH": 10}
        payload = dict(self.payload, content="x" * 11)
        response = client.post(api("post_comments", post_id=post.pk), payload,
                               content_type="application/json")
        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"content"}

    def test_list_threads(self, client, post):
        parent = make_comment(post)
        make_comment(post, parent=parent, content="Reply")
        data = client.get(api("post_comments", post_id=post.pk)).json()["data"]
        assert len(data) == 1
        assert data[0]["replies"][0]["content"] == "Reply"

    def test_like(self, client, post):
        comment = make_comment(post)
        response = client.post(api("comment_like", pk=comment.pk))
        assert response.json()["data"] == {"likes": 1}

    def test_like_pending_comment(self, client, post):
        comment = make_comment(post, is_approved=False)
        assert client.post(api("comment_like", pk=comment.pk)).status_code == 404

    def test_moderation_queue(self, admin_client, post):
        pending = make_comment(post, is_approved=False)
        make_comment(post)
        data = admin_client.get(api("comment_moderation")).json()["data"]
        assert [item["id"] for item in data["data"]] == [pending.pk]

    def test_moderation_requires_admin(self, author_client):
        assert author_client.get(api("comment_moderation")).status_code == 403

    def test_approve(self, admin_client, post):
        pending = make_comment(post, is_approved=False)
        response = admin_client.post(api("comment_approve", pk=pending.pk))
        assert response.json()["data"]["is_approved"] is True

    def test_delete(self, admin_client, post):
        comment = make_comment(post)
        assert admin_client.delete(api("comment_delete", pk=comment.pk)).status_code == 200
        assert not Comment.objects.exists()


class TestNewsletter:
    """Tests for newsletter endpoints."""

    def test_subscribe(self, client, db):
        response = client.post(api("newsletter_subscribe"), {"email": "Fan@Example.com"},
                               content_type="application/json")
        body = response.json()
        assert body["message"] == "Thank you for subscribing!"
        assert body["data"]["email"] == "fan@example.com"
        sub = NewsletterSubscription.objects.get()
        assert sub.subscription_source == "website"

    def test_already_subscribed(self, client, db):
        NewsletterSubscription.subscribe("fan@example.com")
        response = client.post(api("newsletter_subscribe"), {"email": "fan@example.com"},
                               content_type="application/json")
        assert response.json()["message"] == "You are already subscribed to our newsletter!"

    def test_invalid_email(self, client, db):
        response = client.post(api("newsletter_subscribe"), {"email": "nope"},
                               content_type="application/json")
        assert response.status_code == 422
        assert response.json()["message"] == "Invalid email address"

    def test_unsubscribe(self, client, db):
        NewsletterSubscription.subscribe("fan@example.com")
        url = api("newsletter_unsubscribe")

        response = client.post(url, {"email": "fan@example.com"}, content_type="application/json")
        assert response.json()["message"] == (
            "You have been successfully unsubscribed from our newsletter."
        )
        response = client.post(url, {"email": "fan@example.com"}, content_type="application/json")
        assert response.json()["message"] == "You are already unsubscribed from our newsletter."

    def test_unsubscribe_unknown(self, client, db):
        response = client.post(api("newsletter_unsubscribe"), {"email": "who@example.com"},
                               content_type="application/json")
        assert response.status_code == 404

    def test_subscribers_list(self, admin_client):
        NewsletterSubscription.subscribe("a@example.com", "footer")
        NewsletterSubscription.subscribe("b@example.com").unsubscribe()

        data = admin_client.get(api("newsletter_subscribers"), {"status": "active"}).json()["data"]
        assert [item["email"] for item in data["data"]] == ["a@example.com"]

        data = admin_client.get(api("newsletter_subscribers"), {"source": "footer"}).json()["data"]
        assert data["total"] == 1

    def test_stats(self, admin_client):
        NewsletterSubscription.subscribe("a@example.com", "footer")
        NewsletterSubscription.subscribe("b@example.com")
        NewsletterSubscription.subscribe("c@example.com").unsubscribe()

        data = admin_client.get(api("newsletter_stats")).json()["data"]
        assert data == {
            "total_subscribers": 2,
            "total_unsubscribed": 1,
            "recent_subscribers": 2,
            "sources": {"footer": 1, "website": 1},
        }

    def test_stats_requires_admin(self, client, db):
        assert client.get(api("newsletter_stats")).status_code == 401


class TestDashboard:
    """Tests for dashboard statistics."""

    def test_stats(self, author_client, post, draft):
        post.increment_views()
        data = author_client.get(api("dashboard_stats")).json()["data"]
        assert data["totals"]["posts"] == 2
        assert data["totals"]["published_posts"] == 1
        assert data["totals"]["draft_posts"] == 1
        assert data["totals"]["views"] == 1
        assert data["popular_posts"][0]["id"] == post.pk

    def test_recent_activity(self, author_client, post):
        make_comment(post)
        data = author_client.get(api("dashboard_recent_activity")).json()["data"]
        assert data["recent_posts"][0]["category"] == "Tech News"
        assert data["recent_comments"][0]["post"] == "Hello World"
        assert data["recent_users"][0]["username"] == "author"

    def test_monthly_stats(self, author_client, post):
        data = author_client.get(api("dashboard_monthly_stats")).json()["data"]
        assert len(data["months"]) == 12
        assert data["months"][-1] == timezone.localtime().strftime("%b %Y")
        assert data["posts"][-1] == 1

    def test_requires_login(self, client, db):
        assert client.get(api("dashboard_stats")).status_code == 401


class TestUsers:
    """Tests for user administration."""

    def test_stats(self, admin_client, author):
        data = admin_client.get(api("user_stats")).json()["data"]
        assert data["total_users"] == 2
        assert data["admins"] == 1
        assert data["authors"] == 1

    def test_set_status(self, admin_client, author):
        response = admin_client.patch(api("user_status", pk=author.pk), {"status": "suspended"},
                                      content_type="application/json")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "suspended"

    def test_invalid_status(self, admin_client, author):
        response = admin_client.patch(api("user_status", pk=author.pk), {"status": "banned"},
                                      content_type="application/json")
        assert response.status_code == 422

    def test_last_admin(self, admin_client, admin_user):
        response = admin_client.patch(api("user_status", pk=admin_user.pk), {"status": "inactive"},
                                      content_type="application/json")
        assert response.status_code == 422
        assert response.json()["message"] == (
            "Cannot change status of the last active admin account."
        )


class TestHealth:
    def test_healthy(self, client, author):
        body = client.get(api("health")).json()
        assert body["status"] == "healthy"
        assert body["users_count"] == 1


class TestUserManagement:
    """Tests for admin user management."""

    def test_list(self, admin_client, author, other_author, post):
        body = admin_client.get(api("user_list")).json()
        assert body["data"]["total"] == 3
        assert body["stats"]["admins"] == 1
        counts = {item["username"]: item["posts_count"] for item in body["data"]["data"]}
        assert counts == {"admin": 0, "author": 1, "other": 0}

    def test_list_filters(self, admin_client, author, other_author):
        def usernames(**params):
            data = admin_client.get(api("user_list"), params).json()["data"]["data"]
            return sorted(item["username"] for item in data)

        assert usernames(role="author") == ["author", "other"]
        assert usernames(role="admin") == ["admin"]
        assert usernames(search="other") == ["other"]

        author.blog_profile.set_status(AuthorProfile.STATUS_SUSPENDED)
        assert usernames(status="suspended") == ["author"]

    def test_list_requires_admin(self, author_client):
        assert author_client.get(api("user_list")).status_code == 403

    def test_detail(self, admin_client, author, post, draft):
        data = admin_client.get(api("user_detail", pk=author.pk)).json()["data"]
        assert data["email"] == "author@example.com"
        assert data["posts_count"] == 2
        assert [item["slug"] for item in data["recent_posts"]] == [
            "work-in-progress",
            "hello-world",
        ]

    def test_missing_user(self, admin_client):
        assert admin_client.get(api("user_detail", pk=999)).status_code == 404

    def test_update(self, admin_client, author):
        response = admin_client.patch(
            api("user_detail", pk=author.pk),
            {
                "role": "admin",
                "bio": "Editor at large",
                "email": "editor@example.com",
                "social_twitter": "https://twitter.com/editor",
            },
            content_type="application/json",
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["role"] == "admin"
        assert data["bio"] == "Editor at large"
        assert data["email"] == "editor@example.com"
        assert data["social_twitter"] == "https://twitter.com/editor"
        author.blog_profile.refresh_from_db()
        assert author.blog_profile.is_admin

    def test_update_validation(self, admin_client, author, other_author):
        response = admin_client.patch(
            api("user_detail", pk=author.pk),
            {"email": "other@example.com", "role": "owner", "social_facebook": "nope"},
            content_type="application/json",
        )
        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"email", "role", "social_facebook"}

    def test_last_admin_keeps_role(self, admin_client, admin_user):
        response = admin_client.patch(api("user_detail", pk=admin_user.pk), {"role": "author"},
                                      content_type="application/json")
        assert response.status_code == 422
        errors = response.json()["errors"]
        assert errors["role"][0]["message"] == "Cannot change role of the last active admin account."

    def test_delete(self, admin_client, author):
        response = admin_client.delete(api("user_detail", pk=author.pk))
        assert response.status_code == 200
        assert not AuthorProfile.objects.filter(user_id=author.pk).exists()

    def test_delete_last_admin(self, admin_client, admin_user):
        response = admin_client.delete(api("user_detail", pk=admin_user.pk))
        assert response.status_code == 403
        assert response.json()["message"] == "Cannot delete the last administrator."

    def test_delete_self(self, admin_client, admin_user, django_user_model):
        django_user_model.objects.create_superuser("deputy", "deputy@example.com", "pass")
        response = admin_client.delete(api("user_detail", pk=admin_user.pk))
        assert response.status_code == 403
        assert response.json()["message"] == "You cannot delete your own account."


class TestProfile:
    """Tests for the signed-in user's own profile."""

    def test_get(self, author_client, post):
        data = author_client.get(api("profile")).json()["data"]
        assert data["username"] == "author"
        assert data["email"] == "author@example.com"
        assert data["posts_count"] == 1

    def test_update(self, author_client, author):
        response = author_client.patch(
            api("profile"),
            {"first_name": "Ada", "bio": "Writes about code", "role": "admin"},
            content_type="application/json",
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Ada"
        assert data["bio"] == "Writes about code"
        assert data["role"] == "author"

    def test_update_validation(self, author_client):
        response = author_client.patch(api("profile"), {"social_instagram": "not a url"},
                                       content_type="application/json")
        assert response.status_code == 422
        assert "social_instagram" in response.json()["errors"]

    def test_requires_login(self, client, db):
        assert client.get(api("profile")).status_code == 401
