"""Authentication backend accepting a username or an email address."""

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class LoginBackend(ModelBackend):
    """Authenticate with ``login`` (username or email) and password.

    Add to settings:

        AUTHENTICATION_BACKENDS = ["django_cms_accounts.backends.LoginBackend"]

    Then:

        authenticate(request, login="admin@example.com", password="...")

    A plain ``username=`` keyword, as sent by Django's login form, is
    treated as a login too.
    """

    def authenticate(self, request, login=None, password=None, **kwargs):
        UserModel = get_user_model()
        if login is None:
            login = kwargs.get(UserModel.USERNAME_FIELD)
        if login is None or password is None:
            return None

        user = UserModel._default_manager.find_for_authentication(login)
        if user is None:
            # Run the hasher anyway to reduce the timing difference
            UserModel().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            user.login = login
            return user
        return None
