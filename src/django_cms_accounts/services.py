"""Services for django-cms-accounts.

Role membership, plugin grants and first-user bootstrap.
"""

import enum
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction

from .conf import get_plugin_catalog
from .exceptions import InvalidRoleArgument
from .models import Role, RoleMembership, UserPlugin
from .plugins import Plugins
from .roles import SystemRole, canonical_title

logger = logging.getLogger(__name__)


class GrantResult(enum.Enum):
    """Non-error outcomes of set_plugins() that mean nothing was applied."""

    NOT_PERSISTED = "can_not_set_plugins_when_not_persisted"


NOT_PERSISTED = GrantResult.NOT_PERSISTED


def is_persisted(user) -> bool:
    return user is not None and user.pk is not None and not user._state.adding


def has_role(user, title) -> bool:
    """Check if the user holds the role named by title.

    The title is compared in canonical form, so "superuser" and
    SystemRole.SUPERUSER are equivalent.

    Raises:
        InvalidRoleArgument: If title is a Role instance
    """
    if isinstance(title, Role):
        raise InvalidRoleArgument(title)

    if not is_persisted(user):
        return False
    return user.roles.filter(title=canonical_title(title)).exists()


def add_role(user, title) -> Role:
    """Give the user the role named by title.

    Does nothing if the user already holds it. The role is created if it
    does not exist yet.

    Args:
        user: A saved user
        title: Role title (any case variant the canonical form accepts)

    Returns:
        The Role

    Raises:
        InvalidRoleArgument: If title is a Role instance
    """
    if isinstance(title, Role):
        raise InvalidRoleArgument(title)

    role = Role.objects.for_title(title)
    _, created = RoleMembership.objects.get_or_create(user=user, role=role)
    if created:
        logger.info("Added role %s to user %s", role.title, user.pk)
    return role


def _next_plugin_position(user) -> int:
    current = user.plugins.aggregate(max_position=models.Max("position"))["max_position"]
    return (current or 0) + 1


def set_plugins(user, plugin_names):
    """Make the user's grants match plugin_names exactly.

    Reconciliation:
    1. Load the user's current grants
    2. Keep grants whose name is requested, delete the others
    3. Create grants for requested names not yet granted, in the order
       given, each positioned after the current last grant

    Entries that are not strings are ignored. Runs in a transaction with
    the user row locked, so concurrent calls for the same user serialize.

    Args:
        user: The user whose grants to replace
        plugin_names: Iterable of plugin names

    Returns:
        The user's grants ordered by position, or GrantResult.NOT_PERSISTED
        if the user has not been saved (nothing is changed).
    """
    if not is_persisted(user):
        return NOT_PERSISTED

    requested = list(dict.fromkeys(name for name in plugin_names if isinstance(name, str)))

    with transaction.atomic():
        type(user)._default_manager.select_for_update().only("pk").get(pk=user.pk)

        assigned = list(UserPlugin.objects.filter(user=user).order_by("position", "pk"))
        revoked = []
        for grant in assigned:
            if grant.name in requested:
                requested.remove(grant.name)
            else:
                revoked.append(grant.name)
                grant.delete()

        for name in requested:
            UserPlugin.objects.create(
                user=user,
                name=name,
                position=_next_plugin_position(user),
            )

    if revoked or requested:
        logger.info(
            "Plugins for user %s: granted %s, revoked %s",
            user.pk,
            requested,
            revoked,
        )
    return list(user.plugins.all())


def create_first(user, catalog: Plugins | None = None) -> bool:
    """Save a new back-office user and give them their starting access.

    The user gets the Refinery role and a grant for every menu plugin in
    the catalog. The very first Refinery user also becomes Superuser.

    Args:
        user: An unsaved (or saved) user with a password set
        catalog: Plugin catalog; defaults to the configured one

    Returns:
        True if the user is valid and was saved; False otherwise, in which
        case nothing is persisted.
    """
    if catalog is None:
        catalog = get_plugin_catalog()

    try:
        user.full_clean()
    except ValidationError as e:
        logger.debug("User %r rejected: %s", user.username, e.message_dict)
        return False

    was_adding = user._state.adding
    had_slug = bool(user.slug)
    try:
        with transaction.atomic():
            user.save()
            refinery = Role.objects.for_title(SystemRole.REFINERY)
            # Lock the Refinery role so concurrent bootstraps count one at a time
            Role.objects.select_for_update().get(pk=refinery.pk)
            add_role(user, SystemRole.REFINERY)
            if refinery.users.count() == 1:
                add_role(user, SystemRole.SUPERUSER)
                logger.info("User %s bootstrapped as superuser", user.pk)
            set_plugins(user, catalog.in_menu().names)
    except IntegrityError:
        logger.info("User %r rejected by database constraint", user.username)
        if was_adding:
            user.pk = None
            user._state.adding = True
        if not had_slug:
            user.slug = ""
        return False

    return True
