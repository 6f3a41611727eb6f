"""
View mixins for class-based views.

Usage:
    class PageListView(PluginRequiredMixin, ListView):
        required_plugin = 'pages'
        model = Page

    class UserEditView(UserEditPermissionMixin, UpdateView):
        model = User
"""

from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin

from .middleware import get_plugin_access


class PluginRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Mixin to require access to a plugin for class-based views.

    Attributes:
        required_plugin: The plugin name. If None, any signed-in user passes.
    """

    required_plugin = None

    def test_func(self):
        if not self.required_plugin:
            return True
        return get_plugin_access(self.request).has_plugin(self.required_plugin)


class UserEditPermissionMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Mixin allowing users to edit themselves and superusers to edit anyone.

    Override get_target_user() if the view's object is not the user.
    """

    def get_target_user(self):
        return self.get_object()

    def test_func(self):
        if not hasattr(self.request.user, 'can_edit'):
            return False
        return self.request.user.can_edit(self.get_target_user())


class UserDeletePermissionMixin(UserEditPermissionMixin):
    """Mixin refusing deletion of superusers and of the requesting user."""

    def test_func(self):
        if not hasattr(self.request.user, 'can_delete'):
            return False
        return self.request.user.can_delete(self.get_target_user())
