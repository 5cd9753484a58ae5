"""
DRF authentication for Stockroom bearer tokens.

Header format:
    Authorization: Bearer <token>
"""

from django.contrib.auth import get_user_model
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from accounts.authenticator import Authenticator
from stockroom.exceptions import AuthError


class BearerTokenAuthentication(BaseAuthentication):
    """Resolve `Authorization: Bearer <token>` to an active user."""

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()

        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None

        if len(auth) != 2:
            raise exceptions.AuthenticationFailed(
                'Authorization header format must be Bearer {token}'
            )

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid token')

        try:
            user_id = Authenticator.authenticate(token)
        except AuthError as exc:
            raise exceptions.AuthenticationFailed(exc.message)

        user = get_user_model().objects.filter(pk=user_id, is_active=True).first()
        if user is None:
            raise exceptions.AuthenticationFailed('Invalid token')

        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
