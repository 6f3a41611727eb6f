"""Models for django-cms-accounts.

This module provides:
- Role: a named role, looked up by canonical title
- User: the back-office user (set AUTH_USER_MODEL to it)
- RoleMembership: links users to roles
- UserPlugin: a user's explicit grant for one plugin, ordered by position

Username and email uniqueness are enforced by the database on both the
stored value and its lower-cased form. Normalization in Python keeps stored values
canonical; the constraints keep concurrent writers honest.
"""

from django.contrib.auth import password_validation
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.db import IntegrityError, models, transaction
from django.db.models import Q
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from . import identity
from .exceptions import InvalidRoleArgument
from .mixins import AccountsUserMixin
from .roles import canonical_title


class RoleManager(models.Manager):
    """Manager for Role with lookup by title."""

    def for_title(self, title) -> "Role":
        """Find or create the role named by title.

        Handles race conditions via IntegrityError retry.

        Raises:
            InvalidRoleArgument: If title is a Role instance
        """
        if isinstance(title, Role):
            raise InvalidRoleArgument(title)

        canonical = canonical_title(title)
        try:
            with transaction.atomic():
                role, _ = self.get_or_create(title=canonical)
                return role
        except IntegrityError:
            # Another process created it
            return self.get(title=canonical)


class Role(models.Model):
    """A named role such as "Refinery" or "Superuser".

    Titles are stored camelized; see roles.canonical_title().
    """

    title = models.CharField(_("title"), max_length=100, unique=True)

    objects = RoleManager()

    class Meta:
        verbose_name = _("role")
        verbose_name_plural = _("roles")
        ordering = ["title"]

    def __str__(self):
        return self.title


class UserManager(BaseUserManager):
    """Manager for User."""

    use_in_migrations = True

    def _create_user(self, username, email, password, **extra_fields):
        if not username:
            raise ValueError("The username must be set")
        user = self.model(
            username=self.model.normalize_username(username),
            email=self.normalize_email(email),
            **extra_fields,
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, username, email, password=None, **extra_fields):
        """Create and save a user with no roles or plugins."""
        return self._create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email, password=None, **extra_fields):
        """Create a user holding Refinery and Superuser with every menu plugin.

        Used by Django's createsuperuser command.
        """
        from .conf import get_plugin_catalog
        from .roles import SystemRole
        from .services import add_role, set_plugins

        with transaction.atomic(using=self._db):
            user = self._create_user(username, email, password, **extra_fields)
            add_role(user, SystemRole.REFINERY)
            add_role(user, SystemRole.SUPERUSER)
            set_plugins(user, get_plugin_catalog().in_menu().names)
        return user

    def get_by_natural_key(self, username):
        return self.get(username=self.model.normalize_username(username))

    def find_for_authentication(self, login):
        """Find the single user matching a login identifier.

        The login is compared against each field named in
        CMS_ACCOUNTS_AUTHENTICATION_KEYS: the normalized username and the
        email address (case-insensitively).

        Returns:
            The matching User, or None
        """
        from .conf import get_authentication_keys

        if not login or not isinstance(login, str):
            return None

        conditions = Q()
        for key in get_authentication_keys():
            if key == "username":
                conditions |= Q(username=self.model.normalize_username(login))
            elif key == "email":
                conditions |= Q(email__iexact=login.strip())
        return self.filter(conditions).order_by("pk").first()


class User(AccountsUserMixin, AbstractBaseUser):
    """Back-office user.

    Attributes:
        username: Unique, stored lower-cased with spaces trimmed and collapsed
        email: Unique email address, also accepted as a login
        full_name: Optional display name
        slug: URL-safe identifier generated from the username
        roles: Roles held, through RoleMembership
        plugins: Explicit plugin grants (UserPlugin), ordered by position
        login: Username or email given at sign-in; never persisted
    """

    username = models.CharField(_("username"), max_length=255, unique=True)
    email = models.EmailField(_("email address"), max_length=255, unique=True)
    full_name = models.CharField(_("full name"), max_length=255, blank=True)
    slug = models.SlugField(_("slug"), max_length=255, unique=True, blank=True)
    is_active = models.BooleanField(_("active"), default=True)

    roles = models.ManyToManyField(
        Role,
        through="RoleMembership",
        related_name="users",
        blank=True,
        verbose_name=_("roles"),
    )

    # Sign-in tracking
    sign_in_count = models.PositiveIntegerField(_("sign in count"), default=0)
    current_sign_in_at = models.DateTimeField(_("current sign in at"), null=True, blank=True)
    last_sign_in_at = models.DateTimeField(_("last sign in at"), null=True, blank=True)
    current_sign_in_ip = models.GenericIPAddressField(_("current sign in IP"), null=True, blank=True)
    last_sign_in_ip = models.GenericIPAddressField(_("last sign in IP"), null=True, blank=True)

    # Password recovery (digest only, never the raw token)
    reset_password_token = models.CharField(
        _("reset password token"),
        max_length=128,
        unique=True,
        null=True,
        blank=True,
    )
    reset_password_sent_at = models.DateTimeField(_("reset password sent at"), null=True, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    login = None

    objects = UserManager()

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["username"]
        constraints = [
            models.UniqueConstraint(
                Lower("username"),
                name="unique_user_username_lower",
            ),
            models.UniqueConstraint(
                Lower("email"),
                name="unique_user_email_lower",
            ),
        ]

    def __str__(self):
        return (self.full_name or "").strip() or self.username or ""

    @classmethod
    def normalize_username(cls, username):
        """Unicode-normalize, lower-case, trim and collapse spaces."""
        return identity.normalize_username(super().normalize_username(username))

    def full_clean(self, *args, **kwargs):
        # Normalize before field validation so uniqueness checks see the stored form
        self.username = self.normalize_username(self.username)
        self.email = identity.normalize_email(self.email)
        super().full_clean(*args, **kwargs)

    def clean(self):
        super().clean()
        self.validate_raw_password()

    def validate_raw_password(self):
        """Check a password set with set_password() since the last save.

        Runs the CMS_ACCOUNTS_PASSWORD_VALIDATORS followed by the project's
        AUTH_PASSWORD_VALIDATORS. Users whose password was not changed, or
        was made unusable, are not checked.

        Raises:
            ValidationError: Keyed by "password"
        """
        from .conf import get_password_validators

        raw_password = self._password
        if raw_password is None:
            return
        try:
            password_validation.validate_password(
                raw_password, self, password_validators=get_password_validators()
            )
        except ValidationError as e:
            raise ValidationError({"password": e.messages})

    def save(self, *args, **kwargs):
        self.username = self.normalize_username(self.username)
        self.email = identity.normalize_email(self.email)
        if not self.slug and self.username:
            self.slug = identity.unique_slug(type(self), self.username, instance=self)
        super().save(*args, **kwargs)

    def get_full_name(self):
        return str(self)

    def get_short_name(self):
        return self.username


class RoleMembership(models.Model):
    """Links a user to a role."""

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="role_memberships",
        verbose_name=_("user"),
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name="memberships",
        verbose_name=_("role"),
    )
    assigned_at = models.DateTimeField(_("assigned at"), auto_now_add=True)

    class Meta:
        verbose_name = _("role membership")
        verbose_name_plural = _("role memberships")
        constraints = [
            models.UniqueConstraint(
                fields=["user", "role"],
                name="unique_user_role_membership",
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.role}"


class UserPlugin(models.Model):
    """A user's explicit grant for one plugin.

    Plugins are referenced by name, not by foreign key: a grant for a
    plugin that is no longer in the catalog is kept but has no effect.
    Position orders the user's menu.
    """

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="plugins",
        verbose_name=_("user"),
    )
    name = models.CharField(_("name"), max_length=255)
    position = models.PositiveIntegerField(_("position"), default=0)

    class Meta:
        verbose_name = _("user plugin")
        verbose_name_plural = _("user plugins")
        ordering = ["position", "pk"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "name"],
                name="unique_user_plugin_name",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "position"], name="user_plugin_position_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.position})"
