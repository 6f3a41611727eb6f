"""Exceptions for django-cms-accounts."""


class AccountsError(Exception):
    """Base exception for account errors."""

    pass


class InvalidRoleArgument(AccountsError, TypeError):
    """Raised when a Role instance is passed where a role title is expected."""

    def __init__(self, value=None):
        self.value = value
        super().__init__("Role should be the title of the role not a role object.")


class AccountsConfigError(AccountsError):
    """Raised when accounts configuration is invalid."""

    pass


class PluginRegistryError(AccountsError):
    """Base exception for plugin registry errors."""

    pass


class DuplicatePluginError(PluginRegistryError):
    """Raised when a plugin name is registered twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Plugin '{name}' is already registered")


class PluginRegistryFrozen(PluginRegistryError):
    """Raised when registering into a registry that has been frozen."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot register plugin '{name}': registry is frozen")
