from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailAuthenticationBackend(ModelBackend):
    """Let staff sign in with their email address instead of a username."""

    def authenticate(self, request, username=None, password=None, email=None,
                     **kwargs):
        email = email or username
        if not email or password is None:
            return None
        user = find_user_by_email(email)
        if user is None:
            get_user_model()().set_password(password)
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None


def find_user_by_email(email):
    user_model = get_user_model()
    return (user_model.objects.filter(email__iexact=email).order_by("pk").first()
            or user_model.objects.filter(username__iexact=email).first())
