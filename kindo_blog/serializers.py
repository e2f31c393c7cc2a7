"""
Plain-dict representations of models for JSON responses.
"""


def _isoformat(value):
    return value.isoformat() if value else None


def serialize_user(user, detail=False):
    """
    Public author fields; detail adds account data for admins and the
    user themselves.
    """
    if user is None:
        return None
    profile = getattr(user, "blog_profile", None)
    data = {
        "id": user.pk,
        "username": user.get_username(),
        "name": user.get_full_name() or user.get_username(),
        "role": profile.role if profile else None,
        "status": profile.status if profile else None,
        "bio": profile.bio if profile else "",
        "avatar": profile.avatar if profile else "",
        "social_facebook": profile.social_facebook if profile else "",
        "social_twitter": profile.social_twitter if profile else "",
        "social_instagram": profile.social_instagram if profile else "",
    }
    if detail:
        data["email"] = user.email
        data["first_name"] = user.first_name
        data["last_name"] = user.last_name
        data["date_joined"] = _isoformat(user.date_joined)
        if hasattr(user, "posts_count"):
            data["posts_count"] = user.posts_count
    return data


def serialize_category(category, posts_count=None):
    if category is None:
        return None
    data = {
        "id": category.pk,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "color": category.color,
        "icon": category.icon,
        "is_active": category.is_active,
        "order": category.order,
    }
    if posts_count is not None:
        data["posts_count"] = posts_count
    return data


def serialize_tag(tag):
    return {"id": tag.pk, "name": tag.name, "slug": tag.slug}


def serialize_comment(comment, with_replies=False):
    data = {
        "id": comment.pk,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
        "author_name": comment.author_name,
        "author_website": comment.author_website,
        "gravatar_url": comment.gravatar_url,
        "is_approved": comment.is_approved,
        "likes": comment.likes,
        "created_at": _isoformat(comment.created_at),
    }
    if with_replies:
        data["replies"] = [
            serialize_comment(reply, with_replies=True)
            for reply in comment.approved_replies
        ]
    return data


def serialize_post(post, with_comments=False):
    data = {
        "id": post.pk,
        "title": post.title,
        "slug": post.slug,
        "url": post.url,
        "content": post.content,
        "excerpt": post.excerpt,
        "featured_image": post.featured_image,
        "image_caption": post.image_caption,
        "meta_title": post.meta_title,
        "meta_description": post.meta_description,
        "is_published": post.is_published,
        "is_featured": post.is_featured,
        "published_at": _isoformat(post.published_at),
        "views": post.views,
        "reading_time": post.reading_time,
        "author": serialize_user(post.author),
        "category": serialize_category(post.category),
        "tags": [serialize_tag(tag) for tag in post.tags.all()],
        "created_at": _isoformat(post.created_at),
        "updated_at": _isoformat(post.updated_at),
    }
    if hasattr(post, "approved_comments_count"):
        data["comments_count"] = post.approved_comments_count
    if with_comments:
        data["comments"] = [
            serialize_comment(comment, with_replies=True)
            for comment in post.top_level_comments.order_by("-created_at")
        ]
    return data


def serialize_subscription(subscription):
    return {
        "id": subscription.pk,
        "email": subscription.email,
        "is_active": subscription.is_active,
        "subscription_source": subscription.subscription_source,
        "subscribed_at": _isoformat(subscription.subscribed_at),
        "unsubscribed_at": _isoformat(subscription.unsubscribed_at),
    }


def serialize_page(page, items):
    """Wrap a paginator page the way list endpoints return it."""
    return {
        "data": items,
        "current_page": page.number,
        "last_page": page.paginator.num_pages,
        "per_page": page.paginator.per_page,
        "total": page.paginator.count,
    }
