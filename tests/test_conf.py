"""Tests for settings access."""

from datetime import timedelta

import pytest
from django.test import override_settings

from django_cms_accounts.conf import (
    get_authentication_keys,
    get_reset_password_within,
    get_setting,
)
from django_cms_accounts.exceptions import AccountsConfigError


class TestSettings:
    """Tests for CMS_ACCOUNTS_* settings."""

    def test_get_setting_uses_prefix(self):
        """get_setting reads CMS_ACCOUNTS_<name>."""
        with override_settings(CMS_ACCOUNTS_SOMETHING="value"):
            assert get_setting("SOMETHING") == "value"
        assert get_setting("SOMETHING", "fallback") == "fallback"

    def test_authentication_keys_default(self):
        """Username and email are matched by default."""
        assert get_authentication_keys() == ("username", "email")

    def test_authentication_keys_override(self):
        """A subset of the default keys is accepted."""
        with override_settings(CMS_ACCOUNTS_AUTHENTICATION_KEYS=["email"]):
            assert get_authentication_keys() == ("email",)

    @pytest.mark.parametrize("keys", [[], ["phone"], ["username", "slug"]])
    def test_authentication_keys_invalid(self, keys):
        """Empty or unknown keys raise AccountsConfigError."""
        with override_settings(CMS_ACCOUNTS_AUTHENTICATION_KEYS=keys):
            with pytest.raises(AccountsConfigError):
                get_authentication_keys()

    def test_reset_password_within_default(self):
        """Reset tokens last six hours by default."""
        assert get_reset_password_within() == timedelta(hours=6)

    @pytest.mark.parametrize("value", [3600, timedelta(0), timedelta(hours=-1)])
    def test_reset_password_within_invalid(self, value):
        """Non-timedelta or non-positive values raise AccountsConfigError."""
        with override_settings(CMS_ACCOUNTS_RESET_PASSWORD_WITHIN=value):
            with pytest.raises(AccountsConfigError):
                get_reset_password_within()
