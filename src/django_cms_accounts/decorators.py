"""
Plugin access decorator for function-based views.

Usage:
    @require_plugin('pages')
    def page_list(request):
        ...
"""

from functools import wraps

from django.core.exceptions import PermissionDenied

from .middleware import get_plugin_access


def require_plugin(name: str):
    """Decorator to require access to a plugin for function-based views.

    Uses ``request.plugin_access`` when PluginAccessMiddleware is
    installed, otherwise computes access for ``request.user``.

    Args:
        name: The plugin name (e.g., 'pages', 'images')

    Raises:
        PermissionDenied: If the user is anonymous or cannot open the plugin.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                raise PermissionDenied('Authentication required')

            if not get_plugin_access(request).has_plugin(name):
                raise PermissionDenied(f'Plugin not available: {name}')

            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
