"""Signal receivers for django-cms-accounts."""

import logging

from django.contrib.auth.signals import user_logged_in
from django.dispatch import receiver
from django.utils import timezone

from .models import User

logger = logging.getLogger(__name__)

TRACKED_FIELDS = [
    "sign_in_count",
    "last_sign_in_at",
    "current_sign_in_at",
    "last_sign_in_ip",
    "current_sign_in_ip",
]


def track_sign_in(user, ip_address=None) -> None:
    """Record a successful sign-in on the user.

    The previous "current" values move to the "last" fields.
    """
    now = timezone.now()
    user.last_sign_in_at = user.current_sign_in_at or now
    user.current_sign_in_at = now
    user.last_sign_in_ip = user.current_sign_in_ip or ip_address
    user.current_sign_in_ip = ip_address
    user.sign_in_count = (user.sign_in_count or 0) + 1
    user.save(update_fields=TRACKED_FIELDS)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    if not isinstance(user, User):
        return
    ip_address = request.META.get("REMOTE_ADDR") if request is not None else None
    track_sign_in(user, ip_address or None)
    logger.debug("Tracked sign in for user %s from %s", user.pk, ip_address)
