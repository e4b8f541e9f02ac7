# store/auth_backends.py
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class UsernameOrEmailBackend(ModelBackend):
    """
    The storefront login form sends an email; older clients send a username.
    ``username`` carries whichever one the client typed.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        login = (kwargs.get("email") or username or "").strip()
        if not login or password is None:
            return None

        users = get_user_model()._default_manager
        user = users.filter(email__iexact=login).order_by("id").first() or users.filter(username=login).first()
        if user is None:
            # hash anyway so unknown logins cost the same as wrong passwords
            get_user_model()().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
