"""
URL configuration for django-kindo-blog.

Include in your project urls.py:

    path('api/v1/', include('kindo_blog.urls')),
"""
from django.urls import path

from . import views

app_name = "kindo_blog"

urlpatterns = [
    # Posts
    path("posts/", views.PostListCreateView.as_view(), name="post_list"),
    path("posts/featured/", views.FeaturedPostsView.as_view(), name="post_featured"),
    path("posts/recent/", views.RecentPostsView.as_view(), name="post_recent"),
    path("posts/search/", views.PostSearchView.as_view(), name="post_search"),
    path("posts/<int:pk>/manage/", views.PostManageView.as_view(), name="post_manage"),
    path("posts/<int:pk>/publish/", views.PostPublishView.as_view(), name="post_publish"),
    path("posts/<int:pk>/unpublish/", views.PostUnpublishView.as_view(), name="post_unpublish"),
    path("posts/<int:post_id>/comments/", views.PostCommentsView.as_view(), name="post_comments"),
    path("posts/<slug:slug>/", views.PostDetailView.as_view(), name="post_detail"),

    # Categories
    path("categories/", views.CategoryListCreateView.as_view(), name="category_list"),
    path("categories/<int:pk>/", views.CategoryDetailView.as_view(), name="category_detail"),
    path("categories/<slug:slug>/posts/", views.CategoryPostsView.as_view(), name="category_posts"),

    # Comments
    path("comments/moderation/", views.CommentModerationView.as_view(), name="comment_moderation"),
    path("comments/<int:pk>/", views.CommentDeleteView.as_view(), name="comment_delete"),
    path("comments/<int:pk>/like/", views.CommentLikeView.as_view(), name="comment_like"),
    path("comments/<int:pk>/approve/", views.CommentApproveView.as_view(), name="comment_approve"),

    # Newsletter
    path("newsletter/subscribe/", views.NewsletterSubscribeView.as_view(), name="newsletter_subscribe"),
    path("newsletter/unsubscribe/", views.NewsletterUnsubscribeView.as_view(), name="newsletter_unsubscribe"),
    path("newsletter/subscribers/", views.NewsletterSubscribersView.as_view(), name="newsletter_subscribers"),
    path("newsletter/stats/", views.NewsletterStatsView.as_view(), name="newsletter_stats"),

    # Dashboard
    path("dashboard/stats/", views.DashboardStatsView.as_view(), name="dashboard_stats"),
    path("dashboard/recent-activity/", views.DashboardRecentActivityView.as_view(), name="dashboard_recent_activity"),
    path("dashboard/monthly-stats/", views.DashboardMonthlyStatsView.as_view(), name="dashboard_monthly_stats"),

    # Users
    path("users/", views.UserListView.as_view(), name="user_list"),
    path("users/stats/", views.UserStatsView.as_view(), name="user_stats"),
    path("users/<int:pk>/", views.UserDetailView.as_view(), name="user_detail"),
    path("users/<int:pk>/status/", views.UserStatusView.as_view(), name="user_status"),
    path("profile/", views.ProfileView.as_view(), name="profile"),

    path("health/", views.HealthView.as_view(), name="health"),
]
