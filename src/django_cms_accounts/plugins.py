"""Plugin catalog for the back office.

A plugin is a named feature module of the CMS (pages, images, files...).
The catalog is built once at startup and is read-only afterwards; user
grants refer to plugins by name only.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from .exceptions import DuplicatePluginError, PluginRegistryFrozen


@dataclass(frozen=True)
class PluginDescriptor:
    """Definition of a back-office plugin.

    Attributes:
        name: Unique identifier, referenced by user grants
        title: Human-readable name (defaults to the name)
        url: Admin URL the menu entry points to, if any
        show_in_menu: Whether the plugin appears in the navigation menu
        always_allow_access: Accessible to every user regardless of grants
        description: Optional description for admin screens
    """

    name: str
    title: str = ""
    url: str | None = None
    show_in_menu: bool = True
    always_allow_access: bool = False
    description: str = ""

    def __post_init__(self):
        if not self.title:
            object.__setattr__(self, "title", self.name.replace("_", " ").title())


class Plugins:
    """Immutable, ordered collection of plugin descriptors.

    Order is registration order and is preserved by every filter.
    """

    __slots__ = ("_plugins",)

    def __init__(self, plugins: Iterable[PluginDescriptor] = ()):
        self._plugins = tuple(plugins)

    def __iter__(self) -> Iterator[PluginDescriptor]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def __getitem__(self, index):
        return self._plugins[index]

    def __contains__(self, item) -> bool:
        if isinstance(item, PluginDescriptor):
            return item in self._plugins
        return item in self.names

    def __eq__(self, other):
        if isinstance(other, Plugins):
            return self._plugins == other._plugins
        return NotImplemented

    def __hash__(self):
        return hash(self._plugins)

    def __repr__(self):
        return f"Plugins({list(self.names)!r})"

    @property
    def names(self) -> list[str]:
        """Plugin names in catalog order."""
        return [plugin.name for plugin in self._plugins]

    def filter(self, predicate: Callable[[PluginDescriptor], bool]) -> "Plugins":
        return Plugins(plugin for plugin in self._plugins if predicate(plugin))

    def in_menu(self) -> "Plugins":
        """Plugins flagged for display in the navigation menu."""
        return self.filter(lambda plugin: plugin.show_in_menu)

    def always_allowed(self) -> "Plugins":
        """Plugins every user may access."""
        return self.filter(lambda plugin: plugin.always_allow_access)

    def find_by_name(self, name: str) -> PluginDescriptor | None:
        for plugin in self._plugins:
            if plugin.name == name:
                return plugin
        return None

    def first_url_in_menu(self) -> str | None:
        """URL of the first menu plugin that has one, or None."""
        for plugin in self._plugins:
            if plugin.show_in_menu and plugin.url:
                return plugin.url
        return None


class PluginRegistry:
    """Collects plugin descriptors during startup.

    Register plugins, then call freeze() to obtain the immutable catalog.
    Registration after freezing is rejected.

    Example:
        registry = PluginRegistry()
        registry.register(PluginDescriptor(name="pages", url="/admin/pages/"))
        catalog = registry.freeze()
    """

    def __init__(self, plugins: Iterable[PluginDescriptor] = ()):
        self._plugins: dict[str, PluginDescriptor] = {}
        self._frozen: Plugins | None = None
        for plugin in plugins:
            self.register(plugin)

    @property
    def is_frozen(self) -> bool:
        return self._frozen is not None

    def register(self, plugin: PluginDescriptor) -> PluginDescriptor:
        """Register a plugin descriptor.

        Raises:
            PluginRegistryFrozen: If freeze() has been called
            DuplicatePluginError: If the name is already registered
        """
        if self.is_frozen:
            raise PluginRegistryFrozen(plugin.name)
        if plugin.name in self._plugins:
            raise DuplicatePluginError(plugin.name)
        self._plugins[plugin.name] = plugin
        return plugin

    def unregister(self, name: str) -> None:
        """Unregister a plugin by name (startup only)."""
        if self.is_frozen:
            raise PluginRegistryFrozen(name)
        self._plugins.pop(name, None)

    def freeze(self) -> Plugins:
        """Stop accepting registrations and return the catalog."""
        if self._frozen is None:
            self._frozen = Plugins(self._plugins.values())
        return self._frozen

    def registered(self) -> Plugins:
        """All registered plugins in registration order."""
        if self._frozen is not None:
            return self._frozen
        return Plugins(self._plugins.values())

    def always_allowed(self) -> Plugins:
        return self.registered().always_allowed()

    def in_menu(self) -> Plugins:
        return self.registered().in_menu()
