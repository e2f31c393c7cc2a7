"""
JSON API views for django-kindo-blog.

Every response uses the envelope {"success": ..., "data": ..., "message": ...}.
"""
import json
import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.exceptions import BadRequest, ValidationError
from django.core.paginator import Paginator
from django.db import DatabaseError, connection, transaction
from django.db.models import Count, Q, Sum
from django.http import JsonResponse, QueryDict
from django.utils import timezone
from django.views import View

from .conf import blog_settings
from .exceptions import SlugSpaceExhausted
from .forms import (
    AccountForm,
    CategoryForm,
    CommentForm,
    NewsletterForm,
    PostForm,
    PostUpdateForm,
    ProfileForm,
    ProfileRoleForm,
    StatusForm,
    UserUpdateForm,
    bound_data,
)
from .models import (
    AuthorProfile,
    Category,
    Comment,
    NewsletterSubscription,
    Post,
)
from .serializers import (
    serialize_category,
    serialize_comment,
    serialize_page,
    serialize_post,
    serialize_subscription,
    serialize_user,
)

logger = logging.getLogger(__name__)

LIST_FIELDS = {"tags"}
TRUTHY = {"1", "true", "yes", "on"}


def api_response(data=None, message="", status=200, **extra):
    body = {"success": True, "data": data, "message": message}
    body.update(extra)
    return JsonResponse(body, status=status)


def api_error(message, status=400, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return JsonResponse(body, status=status)


def validation_error(*forms, message="The given data was invalid."):
    errors = {}
    for form in forms:
        errors.update(form.errors.get_json_data())
    return api_error(message, status=422, errors=errors)


def parse_payload(request):
    """Read a JSON or form-encoded request body into a dict."""
    if request.content_type == "application/json":
        try:
            payload = json.loads(request.body or b"{}")
        except ValueError:
            raise BadRequest("Request body is not valid JSON.")
        if not isinstance(payload, dict):
            raise BadRequest("Request body must be a JSON object.")
        return payload

    if request.method == "POST":
        querydict = request.POST
    else:
        querydict = QueryDict(request.body, encoding=request.encoding)
    return {
        key: values if key in LIST_FIELDS else values[-1]
        for key, values in querydict.lists()
    }


def is_blog_admin(user):
    if not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    profile = getattr(user, "blog_profile", None)
    return bool(profile and profile.is_admin)


def can_manage_post(user, post):
    return is_blog_admin(user) or post.author_id == user.pk


def login_denied(request):
    """Return an error response unless the user is logged in and active."""
    if not request.user.is_authenticated:
        return api_error("Authentication required.", status=401)
    profile = getattr(request.user, "blog_profile", None)
    if profile is not None and not profile.is_active:
        return api_error("Your account is not active.", status=403)
    return None


def admin_denied(request):
    """Return an error response unless the user is an active admin."""
    denied = login_denied(request)
    if denied is not None:
        return denied
    if not is_blog_admin(request.user):
        return api_error("Access denied. Admin privileges required.", status=403)
    return None


def int_param(request, name, default, upper=None):
    try:
        value = int(request.GET.get(name, default))
    except (TypeError, ValueError):
        value = default
    value = max(1, value)
    if upper is not None:
        value = min(value, upper)
    return value


def paginate(request, queryset, per_page, serializer):
    per_page = int_param(request, "per_page", per_page, upper=blog_settings.MAX_PER_PAGE)
    page = Paginator(queryset, per_page).get_page(request.GET.get("page"))
    return serialize_page(page, [serializer(obj) for obj in page.object_list])


def save_with_slug(form, **attrs):
    """
    Save a validated form for a slugged model; returns (obj, error_response).

    attrs are set on the instance before saving.
    """
    obj = form.save(commit=False)
    for name, value in attrs.items():
        setattr(obj, name, value)
    try:
        obj.save()
    except SlugSpaceExhausted:
        return None, api_error("Could not generate a unique slug.", status=409)
    form.save_m2m()
    return obj, None


class ApiView(View):
    """Base view turning malformed bodies into JSON 400 responses."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except BadRequest as exc:
            return api_error(str(exc), status=400)


class ApiLoginRequiredMixin:
    def dispatch(self, request, *args, **kwargs):
        denied = login_denied(request)
        if denied is not None:
            return denied
        return super().dispatch(request, *args, **kwargs)


class AdminRequiredMixin:
    def dispatch(self, request, *args, **kwargs):
        denied = admin_denied(request)
        if denied is not None:
            return denied
        return super().dispatch(request, *args, **kwargs)


# Posts


def post_queryset():
    return Post.objects.select_related(
        "author__blog_profile", "category"
    ).prefetch_related("tags")


class PostListCreateView(ApiView):
    """List posts, or create one when logged in."""

    ORDER_FIELDS = {"published_at", "created_at", "updated_at", "title", "views"}

    def get(self, request):
        params = request.GET
        user = request.user
        admin_mode = "admin" in params and is_blog_admin(user)
        own_posts = "mine" in params and user.is_authenticated

        if own_posts:
            queryset = Post.objects.filter(author=user).annotate(
                approved_comments_count=Count("comments", filter=Q(comments__is_approved=True)),
            )
        elif admin_mode:
            queryset = Post.objects.all()
        else:
            queryset = Post.objects.published()

        if own_posts or admin_mode:
            status = params.get("status")
            if status == "published":
                queryset = queryset.filter(is_published=True)
            elif status == "draft":
                queryset = queryset.drafts()
            default_order = "created_at"
        else:
            default_order = "published_at"

        search = params.get("search")
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search)
                | Q(content__icontains=search)
                | Q(excerpt__icontains=search)
            )
        if params.get("category"):
            queryset = queryset.in_category(params["category"])
        if params.get("tag"):
            queryset = queryset.filter(tags__slug=params["tag"])
        if params.get("featured", "").lower() in TRUTHY:
            queryset = queryset.featured()

        order_by = params.get("order_by", default_order)
        if order_by not in self.ORDER_FIELDS:
            order_by = default_order
        direction = "" if params.get("order_dir", "desc").lower() == "asc" else "-"
        queryset = queryset.select_related(
            "author__blog_profile", "category"
        ).prefetch_related("tags").order_by(f"{direction}{order_by}", "-pk")

        stats = None
        if admin_mode:
            stats = {
                "total_posts": Post.objects.count(),
                "published_posts": Post.objects.filter(is_published=True).count(),
                "draft_posts": Post.objects.drafts().count(),
                "total_comments": Comment.objects.count(),
            }

        data = paginate(request, queryset, blog_settings.POSTS_PER_PAGE, serialize_post)
        return api_response(data, "Posts retrieved successfully.", stats=stats)

    def post(self, request):
        denied = login_denied(request)
        if denied is not None:
            return denied

        form = PostForm(bound_data(Post(), PostForm._meta.fields, parse_payload(request)))
        if not form.is_valid():
            return validation_error(form)

        post, error = save_with_slug(form, author=request.user)
        if error is not None:
            return error
        logger.info("Post %s created by %s with slug '%s'", post.pk, request.user, post.slug)
        return api_response(serialize_post(post), "Post created successfully.", status=201)


class FeaturedPostsView(ApiView):
    def get(self, request):
        posts = post_queryset().published().featured().order_by("-published_at")
        posts = posts[:blog_settings.FEATURED_POSTS_LIMIT]
        return api_response(
            [serialize_post(post) for post in posts],
            "Featured posts retrieved successfully.",
        )


class RecentPostsView(ApiView):
    def get(self, request):
        posts = post_queryset().published().order_by("-published_at")
        posts = posts[:blog_settings.RECENT_POSTS_LIMIT]
        return api_response(
            [serialize_post(post) for post in posts],
            "Recent posts retrieved successfully.",
        )


class PostSearchView(ApiView):
    """Search published posts by text, category name and tag name."""

    def get(self, request):
        query = request.GET.get("q", "").strip()
        if len(query) < blog_settings.SEARCH_MIN_LENGTH:
            return api_error(
                f"Search query must be at least {blog_settings.SEARCH_MIN_LENGTH} characters long.",
                status=422,
            )

        posts = post_queryset().published().filter(
            Q(title__icontains=query)
            | Q(content__icontains=query)
            | Q(excerpt__icontains=query)
            | Q(category__name__icontains=query)
            | Q(tags__name__icontains=query)
        ).distinct().order_by("-created_at", "-pk")

        data = paginate(request, posts, blog_settings.SEARCH_PER_PAGE, serialize_post)
        return api_response(data, f"Search results for: {query}")


class PostDetailView(ApiView):
    """Public post page by slug; counts a view for live posts."""

    def get(self, request, slug):
        post = post_queryset().filter(slug=slug).first()
        if post is None:
            return api_error("Post not found.", status=404)

        if not post.is_live:
            user = request.user
            if not user.is_authenticated or not can_manage_post(user, post):
                return api_error("Post not found.", status=404)
        else:
            post.increment_views()

        return api_response(
            serialize_post(post, with_comments=True),
            "Post retrieved successfully.",
        )


class PostManageView(ApiLoginRequiredMixin, ApiView):
    """Read, edit or delete a post by id. Owners and admins only."""

    def get_post(self, request, pk):
        post = post_queryset().filter(pk=pk).first()
        if post is None:
            return None, api_error("Post not found.", status=404)
        if not can_manage_post(request.user, post):
            return None, api_error("You do not have permission to access this post.", status=403)
        return post, None

    def get(self, request, pk):
        post, error = self.get_post(request, pk)
        if error is not None:
            return error
        return api_response(serialize_post(post), "Post retrieved for editing.")

    def put(self, request, pk):
        post, error = self.get_post(request, pk)
        if error is not None:
            return error

        payload = parse_payload(request)
        title = payload.get("title")
        if title is not None and str(title).strip() != post.title and not payload.get("slug"):
            payload["slug"] = ""

        fields = PostUpdateForm._meta.fields
        form = PostUpdateForm(bound_data(post, fields, payload), instance=post)
        if not form.is_valid():
            return validation_error(form)

        post, error = save_with_slug(form)
        if error is not None:
            return error
        logger.info("Post %s updated by %s", post.pk, request.user)
        return api_response(serialize_post(post), "Post updated successfully.")

    patch = put

    def delete(self, request, pk):
        post, error = self.get_post(request, pk)
        if error is not None:
            return error
        post.delete()
        logger.info("Post %s deleted by %s", pk, request.user)
        return api_response(message="Post deleted successfully.")


class PostPublishView(PostManageView):
    http_method_names = ["post"]

    def post(self, request, pk):
        post, error = self.get_post(request, pk)
        if error is not None:
            return error
        post.publish()
        return api_response(serialize_post(post), "Post published successfully.")


class PostUnpublishView(PostManageView):
    http_method_names = ["post"]

    def post(self, request, pk):
        post, error = self.get_post(request, pk)
        if error is not None:
            return error
        post.unpublish()
        return api_response(serialize_post(post), "Post unpublished successfully.")


# Categories


class CategoryListCreateView(ApiView):
    def get(self, request):
        now = timezone.now()
        categories = Category.objects.active().ordered().annotate(
            posts_count=Count(
                "posts",
                filter=Q(posts__is_published=True, posts__published_at__lte=now),
            )
        )
        return api_response(
            [serialize_category(cat, posts_count=cat.posts_count) for cat in categories],
            "Categories retrieved successfully.",
        )

    def post(self, request):
        denied = admin_denied(request)
        if denied is not None:
            return denied

        form = CategoryForm(bound_data(Category(), CategoryForm._meta.fields, parse_payload(request)))
        if not form.is_valid():
            return validation_error(form)
        category, error = save_with_slug(form)
        if error is not None:
            return error
        return api_response(serialize_category(category), "Category created successfully.", status=201)


class CategoryDetailView(AdminRequiredMixin, ApiView):
    def put(self, request, pk):
        category = Category.objects.filter(pk=pk).first()
        if category is None:
            return api_error("Category not found.", status=404)

        payload = parse_payload(request)
        name = payload.get("name")
        if name is not None and str(name).strip() != category.name and not payload.get("slug"):
            payload["slug"] = ""

        form = CategoryForm(bound_data(category, CategoryForm._meta.fields, payload), instance=category)
        if not form.is_valid():
            return validation_error(form)
        category, error = save_with_slug(form)
        if error is not None:
            return error
        return api_response(serialize_category(category), "Category updated successfully.")

    patch = put

    def delete(self, request, pk):
        category = Category.objects.filter(pk=pk).first()
        if category is None:
            return api_error("Category not found.", status=404)
        if category.posts.exists():
            return api_error(
                "Cannot delete category that has posts. Please reassign posts first.",
                status=422,
            )
        category.delete()
        return api_response(message="Category deleted successfully.")


class CategoryPostsView(ApiView):
    def get(self, request, slug):
        category = Category.objects.filter(slug=slug).first()
        if category is None:
            return api_error("Category not found.", status=404)

        posts = post_queryset().published().filter(category=category).order_by("-published_at")
        data = {
            "category": serialize_category(category),
            "posts": paginate(request, posts, blog_settings.POSTS_PER_PAGE, serialize_post),
        }
        return api_response(data, "Category posts retrieved successfully.")


# Comments


class PostCommentsView(ApiView):
    """Approved comment threads for a post, and guest comment submission."""

    def get(self, request, post_id):
        post = Post.objects.filter(pk=post_id).first()
        if post is None:
            return api_error("Post not found.", status=404)

        comments = post.top_level_comments.order_by("-created_at")
        return api_response(
            [serialize_comment(comment, with_replies=True) for comment in comments],
            "Post comments retrieved successfully.",
        )

    def post(self, request, post_id):
        post = Post.objects.published().filter(pk=post_id).first()
        if post is None:
            return api_error("Post not found or not published.", status=404)

        form = CommentForm(parse_payload(request), post=post)
        if not form.is_valid():
            return validation_error(form)

        comment = form.save(commit=False)
        comment.is_approved = blog_settings.AUTO_APPROVE_COMMENTS
        comment.save()

        if comment.is_approved:
            message = "Comment submitted successfully."
        else:
            message = "Comment submitted successfully. It will appear after approval."
        return api_response(serialize_comment(comment), message, status=201)


class CommentLikeView(ApiView):
    def post(self, request, pk):
        comment = Comment.objects.approved().filter(pk=pk).first()
        if comment is None:
            return api_error("Comment not found.", status=404)
        comment.increment_likes()
        return api_response({"likes": comment.likes}, "Comment liked successfully.")


class CommentModerationView(AdminRequiredMixin, ApiView):
    def get(self, request):
        comments = Comment.objects.pending().select_related("post").order_by("-created_at")
        data = paginate(request, comments, blog_settings.COMMENTS_PER_PAGE, serialize_comment)
        return api_response(data, "Moderation queue retrieved successfully.")


class CommentApproveView(AdminRequiredMixin, ApiView):
    def post(self, request, pk):
        comment = Comment.objects.filter(pk=pk).first()
        if comment is None:
            return api_error("Comment not found.", status=404)
        comment.approve()
        return api_response(serialize_comment(comment), "Comment approved successfully.")


class CommentDeleteView(AdminRequiredMixin, ApiView):
    def delete(self, request, pk):
        comment = Comment.objects.filter(pk=pk).first()
        if comment is None:
            return api_error("Comment not found.", status=404)
        comment.delete()
        return api_response(message="Comment deleted successfully.")


# Newsletter


class NewsletterSubscribeView(ApiView):
    def post(self, request):
        form = NewsletterForm(parse_payload(request))
        if not form.is_valid():
            return validation_error(form, message="Invalid email address")

        email = form.cleaned_data["email"]
        source = form.cleaned_data["source"] or blog_settings.NEWSLETTER_DEFAULT_SOURCE

        if NewsletterSubscription.is_subscribed(email):
            return api_response(message="You are already subscribed to our newsletter!")

        subscription = NewsletterSubscription.subscribe(email, source)
        logger.info(
            "Newsletter subscription email=%s source=%s ip=%s",
            subscription.email,
            source,
            request.META.get("REMOTE_ADDR"),
        )
        return api_response(
            {
                "email": subscription.email,
                "subscribed_at": subscription.subscribed_at.isoformat(),
            },
            "Thank you for subscribing!",
        )


class NewsletterUnsubscribeView(ApiView):
    def post(self, request):
        form = NewsletterForm(parse_payload(request))
        if not form.is_valid():
            return validation_error(form, message="Invalid email address")

        email = form.cleaned_data["email"]
        subscription = NewsletterSubscription.objects.filter(email__iexact=email).first()
        if subscription is None:
            return api_error("Email not found in our newsletter list.", status=404)
        if not subscription.is_active:
            return api_response(message="You are already unsubscribed from our newsletter.")

        subscription.unsubscribe()
        logger.info(
            "Newsletter unsubscription email=%s ip=%s",
            subscription.email,
            request.META.get("REMOTE_ADDR"),
        )
        return api_response(message="You have been successfully unsubscribed from our newsletter.")


class NewsletterSubscribersView(AdminRequiredMixin, ApiView):
    def get(self, request):
        params = request.GET
        subscribers = NewsletterSubscription.objects.all()

        status = params.get("status")
        if status == "active":
            subscribers = subscribers.active()
        elif status == "inactive":
            subscribers = subscribers.inactive()
        if params.get("source"):
            subscribers = subscribers.from_source(params["source"])
        if params.get("search"):
            subscribers = subscribers.filter(email__icontains=params["search"])

        subscribers = subscribers.order_by("-subscribed_at", "-pk")
        data = paginate(
            request, subscribers, blog_settings.NEWSLETTER_PER_PAGE, serialize_subscription
        )
        return api_response(data, "Subscribers retrieved successfully.")


class NewsletterStatsView(AdminRequiredMixin, ApiView):
    def get(self, request):
        since = timezone.now() - timedelta(days=blog_settings.RECENT_ACTIVITY_DAYS)
        active = NewsletterSubscription.objects.active()
        sources = (
            active.values("subscription_source")
            .annotate(count=Count("id"))
            .order_by("subscription_source")
        )
        data = {
            "total_subscribers": active.count(),
            "total_unsubscribed": NewsletterSubscription.objects.inactive().count(),
            "recent_subscribers": active.filter(subscribed_at__gte=since).count(),
            "sources": {row["subscription_source"]: row["count"] for row in sources},
        }
        return api_response(data, "Newsletter statistics retrieved successfully.")


# Dashboard


def month_starts(count):
    """Return the first instant of each of the last count months, oldest first."""
    start = timezone.localtime().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    starts = [start]
    for _ in range(count - 1):
        start = (start - timedelta(days=1)).replace(day=1)
        starts.append(start)
    return list(reversed(starts))


class DashboardStatsView(ApiLoginRequiredMixin, ApiView):
    def get(self, request):
        User = get_user_model()
        since = timezone.now() - timedelta(days=blog_settings.RECENT_ACTIVITY_DAYS)
        popular = Post.objects.published().order_by("-views", "-pk")[:5]

        data = {
            "totals": {
                "posts": Post.objects.count(),
                "published_posts": Post.objects.published().count(),
                "draft_posts": Post.objects.drafts().count(),
                "users": User.objects.count(),
                "comments": Comment.objects.count(),
                "categories": Category.objects.count(),
                "views": Post.objects.aggregate(total=Sum("views"))["total"] or 0,
            },
            "recent": {
                "posts": Post.objects.filter(created_at__gte=since).count(),
                "users": User.objects.filter(date_joined__gte=since).count(),
                "comments": Comment.objects.filter(created_at__gte=since).count(),
            },
            "popular_posts": [
                {
                    "id": post.pk,
                    "title": post.title,
                    "views": post.views,
                    "published_at": post.published_at.isoformat(),
                }
                for post in popular
            ],
        }
        return api_response(data, "Dashboard statistics retrieved successfully.")


class DashboardRecentActivityView(ApiLoginRequiredMixin, ApiView):
    def get(self, request):
        User = get_user_model()
        posts = Post.objects.select_related("author", "category").order_by("-created_at", "-pk")[:10]
        comments = Comment.objects.select_related("post").order_by("-created_at", "-pk")[:10]
        users = User.objects.select_related("blog_profile").order_by("-date_joined", "-pk")[:10]

        data = {
            "recent_posts": [
                {
                    "id": post.pk,
                    "title": post.title,
                    "author": post.author.get_username(),
                    "category": post.category.name if post.category else None,
                    "is_published": post.is_published,
                    "created_at": post.created_at.isoformat(),
                }
                for post in posts
            ],
            "recent_comments": [
                {
                    "id": comment.pk,
                    "content": comment.preview,
                    "author_name": comment.author_name,
                    "post": comment.post.title,
                    "is_approved": comment.is_approved,
                    "created_at": comment.created_at.isoformat(),
                }
                for comment in comments
            ],
            "recent_users": [serialize_user(user) for user in users],
        }
        return api_response(data, "Recent activity retrieved successfully.")


class DashboardMonthlyStatsView(ApiLoginRequiredMixin, ApiView):
    def get(self, request):
        User = get_user_model()
        starts = month_starts(blog_settings.DASHBOARD_MONTHS)
        ends = starts[1:] + [(starts[-1] + timedelta(days=32)).replace(day=1)]

        data = {"months": [], "posts": [], "users": [], "comments": []}
        for start, end in zip(starts, ends):
            data["months"].append(start.strftime("%b %Y"))
            data["posts"].append(
                Post.objects.filter(created_at__gte=start, created_at__lt=end).count()
            )
            data["users"].append(
                User.objects.filter(date_joined__gte=start, date_joined__lt=end).count()
            )
            data["comments"].append(
                Comment.objects.filter(created_at__gte=start, created_at__lt=end).count()
            )
        return api_response(data, "Monthly statistics retrieved successfully.")


# Users


def user_stats():
    User = get_user_model()
    profiles = AuthorProfile.objects.all()
    return {
        "total_users": User.objects.count(),
        "active_users": profiles.filter(status=AuthorProfile.STATUS_ACTIVE).count(),
        "inactive_users": profiles.filter(status=AuthorProfile.STATUS_INACTIVE).count(),
        "suspended_users": profiles.filter(status=AuthorProfile.STATUS_SUSPENDED).count(),
        "admins": profiles.filter(role=AuthorProfile.ROLE_ADMIN).count(),
        "authors": profiles.filter(role=AuthorProfile.ROLE_AUTHOR).count(),
    }


def user_queryset():
    return get_user_model().objects.select_related("blog_profile").annotate(
        posts_count=Count("blog_posts"),
    )


def serialize_account(user):
    return serialize_user(user, detail=True)


def update_account(user, payload, account_form_class, profile_form_class):
    """
    Apply a partial update to a user and their profile.

    Returns an error response, or None once both records are saved.
    """
    profile, _ = AuthorProfile.objects.get_or_create(user=user)
    account_form = account_form_class(
        bound_data(user, account_form_class._meta.fields, payload), instance=user,
    )
    profile_form = profile_form_class(
        bound_data(profile, profile_form_class._meta.fields, payload), instance=profile,
    )
    account_valid = account_form.is_valid()
    profile_valid = profile_form.is_valid()
    if not (account_valid and profile_valid):
        return validation_error(account_form, profile_form)

    with transaction.atomic():
        account_form.save()
        profile_form.save()
    return None


class UserListView(AdminRequiredMixin, ApiView):
    """Users with post counts, filterable by role, status and search text."""

    def get(self, request):
        params = request.GET
        users = user_queryset()

        if params.get("role"):
            users = users.filter(blog_profile__role=params["role"])
        if params.get("status"):
            users = users.filter(blog_profile__status=params["status"])
        search = params.get("search")
        if search:
            users = users.filter(
                Q(username__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(email__icontains=search)
            )

        users = users.order_by("-date_joined", "-pk")
        data = paginate(request, users, blog_settings.USERS_PER_PAGE, serialize_account)
        return api_response(data, "Users retrieved successfully.", stats=user_stats())


class UserDetailView(AdminRequiredMixin, ApiView):
    def get_user(self, pk):
        return user_queryset().filter(pk=pk).first()

    def get(self, request, pk):
        user = self.get_user(pk)
        if user is None:
            return api_error("User not found.", status=404)

        data = serialize_account(user)
        recent = Post.objects.filter(author=user).order_by("-created_at", "-pk")
        data["recent_posts"] = [
            {
                "id": post.pk,
                "title": post.title,
                "slug": post.slug,
                "is_published": post.is_published,
                "created_at": post.created_at.isoformat(),
            }
            for post in recent[:5]
        ]
        return api_response(data, "User retrieved successfully.")

    def put(self, request, pk):
        user = self.get_user(pk)
        if user is None:
            return api_error("User not found.", status=404)

        error = update_account(user, parse_payload(request), UserUpdateForm, ProfileRoleForm)
        if error is not None:
            return error

        logger.info("User %s updated by %s", user.pk, request.user)
        return api_response(serialize_account(self.get_user(pk)), "User updated successfully.")

    patch = put

    def delete(self, request, pk):
        user = self.get_user(pk)
        if user is None:
            return api_error("User not found.", status=404)

        profile = getattr(user, "blog_profile", None)
        if profile is not None and profile.is_admin:
            admins = AuthorProfile.objects.filter(role=AuthorProfile.ROLE_ADMIN).count()
            if admins <= 1:
                return api_error("Cannot delete the last administrator.", status=403)
        if user.pk == request.user.pk:
            return api_error("You cannot delete your own account.", status=403)

        user.delete()
        logger.info("User %s deleted by %s", pk, request.user)
        return api_response(message="User deleted successfully.")


class UserStatsView(AdminRequiredMixin, ApiView):
    def get(self, request):
        return api_response(user_stats(), "User statistics retrieved successfully.")


class UserStatusView(AdminRequiredMixin, ApiView):
    def put(self, request, pk):
        User = get_user_model()
        user = User.objects.filter(pk=pk).first()
        if user is None:
            return api_error("User not found.", status=404)

        form = StatusForm(parse_payload(request))
        if not form.is_valid():
            return validation_error(form)

        profile, _ = AuthorProfile.objects.get_or_create(user=user)
        try:
            profile.set_status(form.cleaned_data["status"])
        except ValidationError as exc:
            return api_error(exc.messages[0], status=422)

        logger.info("User %s status set to %s by %s", user.pk, profile.status, request.user)
        user.refresh_from_db()
        return api_response(serialize_user(user), "User status updated successfully.")

    patch = put


class ProfileView(ApiLoginRequiredMixin, ApiView):
    """The signed-in user's own account."""

    def get(self, request):
        user = user_queryset().get(pk=request.user.pk)
        return api_response(serialize_account(user), "User profile retrieved successfully.")

    def put(self, request):
        user = get_user_model().objects.get(pk=request.user.pk)
        error = update_account(user, parse_payload(request), AccountForm, ProfileForm)
        if error is not None:
            return error
        user = user_queryset().get(pk=request.user.pk)
        return api_response(serialize_account(user), "Profile updated successfully.")

    patch = put


class HealthView(ApiView):
    def get(self, request):
        try:
            connection.ensure_connection()
            users_count = get_user_model().objects.count()
        except DatabaseError as exc:
            logger.exception("Health check failed")
            return JsonResponse(
                {"success": False, "status": "unhealthy", "error": str(exc)},
                status=500,
            )
        return JsonResponse({
            "success": True,
            "status": "healthy",
            "database": "connected",
            "users_count": users_count,
        })
