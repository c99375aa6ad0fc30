import logging

from django.contrib.auth.backends import BaseBackend
from django.contrib.auth import get_user_model

logger = logging.getLogger("quiz_portal")

User = get_user_model()


class CustomBackend(BaseBackend):
    """
    Log staff in with either their username or their email address.
    Inactive accounts authenticate so the login form can say why they are refused.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None:
            return None

        user = User.objects.filter(username=username).first()

        if user is None:
            user = User.objects.filter(email__iexact=username).order_by('pk').first()

        if user is None:
            logger.warning(f"Login attempt for unknown user {username}")
            return None

        if user.check_password(password):
            return user

        logger.warning(f"Wrong password for user {user.username}")
        return None

    def get_user(self, user_id):
        user = User.objects.filter(pk=user_id).first()

        if user is None:
            return None

        return user if self.user_can_authenticate(user) else None

    def user_can_authenticate(self, user):
        return getattr(user, 'is_active', False)
