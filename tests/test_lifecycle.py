"""Tests for first-user bootstrap (create_first)."""

import pytest

from django_cms_accounts.models import Role, RoleMembership, User, UserPlugin
from django_cms_accounts.services import create_first


def plugin_names(user):
    return [grant.name for grant in user.plugins.all()]


@pytest.mark.django_db
class TestCreateFirst:
    """Tests for create_first service."""

    def test_first_user_becomes_superuser(self, new_user, catalog):
        """The first Refinery user gets Refinery and Superuser."""
        user = new_user("Admin")

        assert create_first(user, catalog) is True

        user.refresh_from_db()
        assert user.username == "admin"
        assert user.has_role("refinery")
        assert user.has_role("superuser")

    def test_first_user_granted_menu_plugins(self, new_user, catalog):
        """Grants equal the catalog's menu plugins, in order."""
        user = new_user("admin")
        create_first(user, catalog)

        assert plugin_names(user) == ["dashboard", "pages", "images"]

    def test_uses_configured_catalog_by_default(self, new_user):
        """Without a catalog argument the settings catalog is used."""
        user = new_user("admin")
        create_first(user)

        assert plugin_names(user) == ["dashboard", "pages", "images", "files", "users"]

    def test_second_user_is_not_superuser(self, new_user, catalog):
        """Only the first Refinery user is promoted."""
        first = new_user("admin")
        second = new_user("editor")
        create_first(first, catalog)

        assert create_first(second, catalog) is True

        assert second.has_role("refinery")
        assert not second.has_role("superuser")
        assert plugin_names(second) == ["dashboard", "pages", "images"]

    def test_existing_refinery_user_blocks_promotion(self, refinery_user, new_user, catalog):
        """An existing Refinery user, even without Superuser, blocks promotion."""
        user = new_user("latecomer")
        create_first(user, catalog)

        assert not user.has_role("superuser")

    def test_invalid_user_not_saved(self, make_user, new_user, catalog):
        """A duplicate username returns False and persists nothing."""
        make_user("admin")
        user = new_user("ADMIN", email="other@example.com")

        assert create_first(user, catalog) is False

        assert user.pk is None
        assert User.objects.count() == 1
        assert not RoleMembership.objects.exists()
        assert not UserPlugin.objects.exists()

    def test_missing_email_not_saved(self, catalog):
        """Validation failures leave the user unsaved."""
        user = User(username="nomail", email="")
        user.set_password("s3cret-pass")

        assert create_first(user, catalog) is False
        assert user.pk is None

    def test_database_rejection_rolls_back(self, make_user, new_user, catalog, monkeypatch):
        """An IntegrityError on save returns False and rolls everything back."""
        make_user("admin")
        user = new_user("admin", email="other@example.com")
        monkeypatch.setattr(user, "full_clean", lambda *args, **kwargs: None)

        assert create_first(user, catalog) is False

        assert user.pk is None
        assert user._state.adding is True
        assert user.slug == ""
        assert User.objects.count() == 1
        assert not Role.objects.filter(title="Refinery").exists()

    def test_user_method_delegates(self, new_user, catalog):
        """User.create_first uses the service."""
        user = new_user("admin")
        assert user.create_first(catalog) is True
        assert user.has_role("superuser")

    def test_email_case_variant_rejected(self, new_user, catalog):
        """A second user whose email differs only by case is not saved."""
        first = new_user("alice", email="Bob@Example.com")
        second = new_user("bob", email="bob@example.com")

        assert create_first(first, catalog) is True
        assert create_first(second, catalog) is False

        assert second.pk is None
        assert User.objects.count() == 1
        assert User.objects.find_for_authentication("bob@example.com") == first

    @pytest.mark.parametrize("password", ["", "x", "12345", "p" * 129])
    def test_invalid_password_not_saved(self, new_user, catalog, password):
        """Passwords outside 6 to 128 characters are rejected."""
        user = new_user("shorty", password=password)

        assert create_first(user, catalog) is False
        assert user.pk is None
        assert not User.objects.exists()

    @pytest.mark.parametrize("password", ["123456", "p" * 128])
    def test_password_length_bounds_accepted(self, new_user, catalog, password):
        """Passwords of exactly 6 or 128 characters are accepted."""
        assert create_first(new_user("bounds", password=password), catalog) is True
