"""Password reset tokens.

Only a keyed digest of each token is stored. The raw token is handed to
the caller once (to be mailed to the user) and can later be exchanged
for the user it was issued to.
"""

import logging

from django.contrib.auth import get_user_model
from django.utils import timezone
from django.utils.crypto import get_random_string, salted_hmac

from .conf import get_reset_password_within

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 20
DIGEST_SALT = "django_cms_accounts.tokens.reset_password_token"


def reset_password_token_digest(raw_token: str) -> str:
    """One-way digest of a raw token, keyed with SECRET_KEY."""
    return salted_hmac(DIGEST_SALT, raw_token, algorithm="sha256").hexdigest()


def generate_reset_password_token(user) -> str:
    """Issue a new reset token for user, replacing any earlier one.

    Stores the token digest and the time it was sent.

    Returns:
        The raw token
    """
    raw_token = get_random_string(TOKEN_LENGTH)
    user.reset_password_token = reset_password_token_digest(raw_token)
    user.reset_password_sent_at = timezone.now()
    user.save(update_fields=["reset_password_token", "reset_password_sent_at", "updated_at"])
    logger.info("Reset password token issued for user %s", user.pk)
    return raw_token


def reset_password_period_valid(user) -> bool:
    """Check if the user's reset token was sent recently enough to use."""
    sent_at = user.reset_password_sent_at
    if sent_at is None:
        return False
    return timezone.now() - sent_at < get_reset_password_within()


def find_by_reset_password_token(raw_token: str):
    """Look up the user a raw reset token was issued to.

    Returns:
        The User, or None if the token is unknown or has expired
    """
    if not raw_token:
        return None

    User = get_user_model()
    try:
        user = User.objects.get(reset_password_token=reset_password_token_digest(raw_token))
    except User.DoesNotExist:
        return None

    if not reset_password_period_valid(user):
        return None
    return user


def clear_reset_password_token(user) -> None:
    """Invalidate the user's reset token, e.g. after the password changed."""
    user.reset_password_token = None
    user.reset_password_sent_at = None
    user.save(update_fields=["reset_password_token", "reset_password_sent_at", "updated_at"])
