"""Tests for plugin grants (set_plugins)."""

import pytest

from django_cms_accounts.models import UserPlugin
from django_cms_accounts.services import NOT_PERSISTED, GrantResult, set_plugins


def grants(user):
    return [(grant.name, grant.position) for grant in user.plugins.all()]


@pytest.mark.django_db
class TestSetPlugins:
    """Tests for set_plugins service."""

    def test_unsaved_user_returns_sentinel(self, new_user):
        """Unsaved users get the NOT_PERSISTED sentinel and nothing is written."""
        user = new_user("ghost")
        result = set_plugins(user, ["pages"])

        assert result is NOT_PERSISTED
        assert result is GrantResult.NOT_PERSISTED
        assert UserPlugin.objects.count() == 0

    def test_creates_grants_in_order(self, make_user):
        """New grants get positions 1..n in the order given."""
        user = make_user("alice")
        set_plugins(user, ["pages", "images", "files"])

        assert grants(user) == [("pages", 1), ("images", 2), ("files", 3)]

    def test_returns_grants_by_position(self, make_user):
        """The return value is the user's grants ordered by position."""
        user = make_user("alice")
        result = set_plugins(user, ["pages", "images"])

        assert [grant.name for grant in result] == ["pages", "images"]

    def test_reconciles_existing_grants(self, make_user):
        """{A@1, B@2} set to [B, C] gives {B@2, C@3}; A is removed."""
        user = make_user("alice")
        set_plugins(user, ["a", "b"])
        b_grant = user.plugins.get(name="b")

        set_plugins(user, ["b", "c"])

        assert grants(user) == [("b", 2), ("c", 3)]
        assert user.plugins.get(name="b").pk == b_grant.pk
        assert not user.plugins.filter(name="a").exists()

    def test_final_set_matches_request(self, make_user):
        """After any call the granted names equal the requested names."""
        user = make_user("alice")
        set_plugins(user, ["pages", "images", "files"])
        set_plugins(user, ["files", "users"])

        assert {grant.name for grant in user.plugins.all()} == {"files", "users"}

    def test_empty_list_revokes_everything(self, make_user):
        """An empty request removes every grant."""
        user = make_user("alice")
        set_plugins(user, ["pages", "images"])
        set_plugins(user, [])

        assert grants(user) == []

    def test_same_request_is_a_no_op(self, make_user):
        """Repeating a request keeps the same grants and positions."""
        user = make_user("alice")
        set_plugins(user, ["pages", "images"])
        before = list(user.plugins.values_list("pk", "name", "position"))

        set_plugins(user, ["images", "pages"])

        assert list(user.plugins.values_list("pk", "name", "position")) == before

    def test_non_string_entries_ignored(self, make_user):
        """Entries that are not strings are dropped silently."""
        user = make_user("alice")
        set_plugins(user, ["pages", None, 42, {"name": "x"}, "images"])

        assert grants(user) == [("pages", 1), ("images", 2)]

    def test_duplicate_names_granted_once(self, make_user):
        """Repeated names create a single grant."""
        user = make_user("alice")
        set_plugins(user, ["pages", "pages", "images"])

        assert grants(user) == [("pages", 1), ("images", 2)]

    def test_positions_continue_after_current_max(self, make_user):
        """New grants are positioned after the highest existing position."""
        user = make_user("alice")
        UserPlugin.objects.create(user=user, name="pages", position=10)

        set_plugins(user, ["pages", "images"])

        assert grants(user) == [("pages", 10), ("images", 11)]

    def test_accepts_any_iterable(self, make_user):
        """Generators and tuples work as input."""
        user = make_user("alice")
        set_plugins(user, (name for name in ("pages", "images")))

        assert [name for name, _ in grants(user)] == ["pages", "images"]

    def test_unknown_plugin_names_are_stored(self, make_user):
        """Grants may name plugins missing from the catalog."""
        user = make_user("alice")
        set_plugins(user, ["retired_plugin"])

        assert grants(user) == [("retired_plugin", 1)]

    def test_other_users_untouched(self, make_user):
        """Grants are per user."""
        alice = make_user("alice")
        bob = make_user("bob")
        set_plugins(alice, ["pages"])
        set_plugins(bob, ["images"])
        set_plugins(alice, [])

        assert grants(bob) == [("images", 1)]

    def test_user_method_delegates(self, make_user):
        """User.set_plugins uses the service."""
        user = make_user("alice")
        user.set_plugins(["pages"])

        assert grants(user) == [("pages", 1)]
