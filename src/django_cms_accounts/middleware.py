"""Middleware attaching plugin access to each request."""

from django.utils.functional import SimpleLazyObject

from .access import PluginAccess


def get_plugin_access(request) -> PluginAccess:
    """Return the request's PluginAccess, computing it if the middleware is absent."""
    access = getattr(request, "plugin_access", None)
    if access is None:
        access = PluginAccess.for_user(getattr(request, "user", None))
        request.plugin_access = access
    return access


class PluginAccessMiddleware:
    """Set ``request.plugin_access`` to a lazily built PluginAccess.

    Must come after AuthenticationMiddleware. The snapshot lives only as
    long as the request, so role and grant changes show on the next one.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.plugin_access = SimpleLazyObject(
            lambda: PluginAccess.for_user(getattr(request, "user", None))
        )
        return self.get_response(request)
