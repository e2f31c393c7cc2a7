"""
Forms used to validate API payloads and admin input.
"""
from django import forms
from django.contrib.auth import get_user_model

from .conf import blog_settings
from .models import AuthorProfile, Category, Comment, Post
from .slugs import SLUG_PATTERN, slugify


def clean_slug_source(value, label="Title"):
    """The text a slug is built from needs at least one letter or digit."""
    if not slugify(value):
        raise forms.ValidationError(f"{label} must contain at least one letter or number.")
    return value


def clean_manual_slug(slug):
    """Hand-set slugs must look like generated ones."""
    if not slug:
        return slug
    if not SLUG_PATTERN.match(slug):
        raise forms.ValidationError(
            "Slugs may only contain lowercase letters, numbers and single hyphens."
        )
    if len(slug) > blog_settings.SLUG_MAX_FINAL_LENGTH:
        raise forms.ValidationError(
            f"Slugs may be at most {blog_settings.SLUG_MAX_FINAL_LENGTH} characters."
        )
    return slug


def bound_data(instance, fields, payload):
    """
    Return form data for a partial update.

    Current values of instance are used for every field missing from
    payload, so clients may send only what changed. Pass an unsaved
    instance to start a new record from model defaults.
    """
    data = {}
    for name in fields:
        field = instance._meta.get_field(name)
        if field.many_to_many:
            if instance.pk is None:
                data[name] = []
            else:
                data[name] = list(getattr(instance, name).values_list("pk", flat=True))
        elif field.is_relation:
            data[name] = getattr(instance, field.attname)
        else:
            data[name] = getattr(instance, name)
    data.update(payload)
    return data


class PostForm(forms.ModelForm):
    class Meta:
        model = Post
        fields = [
            "title",
            "content",
            "excerpt",
            "category",
            "tags",
            "featured_image",
            "image_caption",
            "is_published",
            "is_featured",
            "published_at",
            "meta_title",
            "meta_description",
        ]
        error_messages = {
            "title": {"required": "Title is required."},
            "content": {"required": "Content is required."},
        }

    def clean_title(self):
        return clean_slug_source(self.cleaned_data["title"])


class PostUpdateForm(PostForm):
    """Post edits may also set the slug by hand."""

    class Meta(PostForm.Meta):
        fields = PostForm.Meta.fields + ["slug"]

    def clean_slug(self):
        return clean_manual_slug(self.cleaned_data["slug"])


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ["name", "slug", "description", "color", "icon", "is_active", "order"]
        error_messages = {
            "name": {"required": "Name is required."},
        }

    def clean_name(self):
        return clean_slug_source(self.cleaned_data["name"], label="Name")

    def clean_slug(self):
        return clean_manual_slug(self.cleaned_data["slug"])


class CommentForm(forms.ModelForm):
    class Meta:
        model = Comment
        fields = ["content", "author_name", "author_email", "author_website", "parent"]

    def __init__(self, *args, post, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["parent"].queryset = Comment.objects.filter(post=post)
        self.instance.post = post

    def clean_content(self):
        content = self.cleaned_data["content"]
        limit = blog_settings.COMMENT_MAX_LENGTH
        if len(content) > limit:
            raise forms.ValidationError(
                f"Ensure this value has at most {limit} characters (it has {len(content)})."
            )
        return content


class NewsletterForm(forms.Form):
    email = forms.EmailField(max_length=255)
    source = forms.CharField(max_length=50, required=False)


class StatusForm(forms.Form):
    status = forms.ChoiceField(choices=AuthorProfile.STATUS_CHOICES)


class SlugAdminForm(forms.ModelForm):
    """
    Admin form for models using UniqueSlugMixin.

    Applies the same rules as the API: the slug source must yield a slug
    and a hand-set slug must have the generated shape.
    """

    def clean_slug(self):
        return clean_manual_slug(self.cleaned_data["slug"])

    def clean(self):
        cleaned_data = super().clean()
        source = self._meta.model.slug_source_field
        value = cleaned_data.get(source)
        if value is not None and not slugify(value):
            label = self._meta.model._meta.get_field(source).verbose_name.capitalize()
            self.add_error(source, f"{label} must contain at least one letter or number.")
        return cleaned_data


class AccountForm(forms.ModelForm):
    """Name fields a user may edit on their own account."""

    class Meta:
        model = get_user_model()
        fields = ["first_name", "last_name"]


class UserUpdateForm(AccountForm):
    """Account fields an admin may edit."""

    class Meta(AccountForm.Meta):
        fields = AccountForm.Meta.fields + ["email"]

    def clean_email(self):
        email = self.cleaned_data["email"]
        users = self._meta.model._default_manager.exclude(pk=self.instance.pk)
        if email and users.filter(email__iexact=email).exists():
            raise forms.ValidationError("This email is already in use.")
        return email


class ProfileForm(forms.ModelForm):
    bio = forms.CharField(max_length=500, required=False)

    class Meta:
        model = AuthorProfile
        fields = ["bio", "avatar", "social_facebook", "social_twitter", "social_instagram"]


class ProfileRoleForm(ProfileForm):
    """Profile fields plus role, for admins."""

    class Meta(ProfileForm.Meta):
        fields = ProfileForm.Meta.fields + ["role"]

    def clean_role(self):
        role = self.cleaned_data["role"]
        profile = self.instance
        if profile.is_admin and profile.is_active and role != AuthorProfile.ROLE_ADMIN:
            active_admins = AuthorProfile.objects.filter(
                role=AuthorProfile.ROLE_ADMIN,
                status=AuthorProfile.STATUS_ACTIVE,
            ).count()
            if active_admins <= 1:
                raise forms.ValidationError(
                    "Cannot change role of the last active admin account."
                )
        return role
