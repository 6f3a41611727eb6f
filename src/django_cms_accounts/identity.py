"""Identity helpers: username normalization and slug generation."""

import re

from django.utils.text import slugify

_REPEATED_SPACES = re.compile(r" {2,}")


def downcase_username(username: str | None) -> str | None:
    """Lower-case a username so uniqueness is case-insensitive."""
    if not username:
        return username
    return username.lower()


def strip_username(username: str | None) -> str | None:
    """Trim a username and collapse runs of spaces.

    "admin " and "admin" are the same user, and so are "admin user" and
    "admin    user".
    """
    if not username:
        return username
    return _REPEATED_SPACES.sub(" ", username.strip())


def normalize_username(username: str | None) -> str | None:
    """Apply every username normalization. Idempotent."""
    return strip_username(downcase_username(username))


def normalize_email(email: str | None) -> str | None:
    """Trim and lower-case an email address. Idempotent."""
    if not email:
        return email
    return email.strip().lower()


def unique_slug(model, value: str, slug_field: str = "slug", instance=None, max_length: int = 255) -> str:
    """Return a URL-safe slug for value that is unused in model.

    Appends -2, -3, ... until no other row has the slug. The row being
    saved (instance) is ignored so re-saving keeps its slug.
    """
    base = slugify(value)[:max_length] or model._meta.model_name
    queryset = model._default_manager.all()
    if instance is not None and instance.pk is not None:
        queryset = queryset.exclude(pk=instance.pk)

    candidate = base
    suffix = 2
    while queryset.filter(**{slug_field: candidate}).exists():
        tail = f"-{suffix}"
        candidate = f"{base[: max_length - len(tail)]}{tail}"
        suffix += 1
    return candidate
