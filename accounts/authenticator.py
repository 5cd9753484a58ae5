"""
Authenticator: Credentials and bearer tokens.

The stock engine never sees credentials; it receives the user id this
module resolves from a token.

Usage:
    from accounts.authenticator import Authenticator

    user, token = Authenticator.login('ana', 's3cret')
    Authenticator.authenticate(token)  # user.pk

Tokens are django.core.signing timestamped signatures over {"user_id": pk},
keyed with STOCKROOM['TOKEN_SECRET'] and valid for TOKEN_TTL_SECONDS.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import update_last_login
from django.core import signing
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from stockroom.conf import stockroom_settings
from stockroom.exceptions import AuthError

logger = logging.getLogger('accounts')


class Authenticator:
    """Password verification, login and token issuing."""

    @classmethod
    def _signer(cls) -> signing.TimestampSigner:
        return signing.TimestampSigner(
            key=stockroom_settings.TOKEN_SECRET or settings.SECRET_KEY,
            salt=stockroom_settings.TOKEN_SALT,
        )

    @classmethod
    def issue_token(cls, user_id: int) -> str:
        return cls._signer().sign_object({'user_id': user_id})

    @classmethod
    def authenticate(cls, token: str) -> int:
        """
        Resolve a bearer token to a user id.

        Raises:
            AuthError('TOKEN_EXPIRED'): Older than TOKEN_TTL_SECONDS
            AuthError('INVALID_TOKEN'): Bad signature or payload
        """
        try:
            payload = cls._signer().unsign_object(
                token, max_age=stockroom_settings.TOKEN_TTL_SECONDS
            )
        except signing.SignatureExpired:
            raise AuthError('TOKEN_EXPIRED')
        except signing.BadSignature:
            raise AuthError('INVALID_TOKEN')

        user_id = payload.get('user_id') if isinstance(payload, dict) else None
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            raise AuthError('INVALID_TOKEN')
        return user_id

    @classmethod
    def verify_password(cls, hashed: str, plaintext: str) -> bool:
        return check_password(plaintext, hashed)

    @classmethod
    def register(cls, username: str, password: str, email: str):
        """
        Create a user with a hashed password.

        Raises:
            AuthError('INVALID_REGISTRATION'): Missing field or invalid email
            AuthError('USERNAME_TAKEN' | 'EMAIL_TAKEN')
        """
        User = get_user_model()
        username = (username or '').strip()
        email = (email or '').strip()

        if not username or not password or not email:
            raise AuthError('INVALID_REGISTRATION')
        try:
            validate_email(email)
        except ValidationError:
            raise AuthError('INVALID_REGISTRATION', email=email)

        if User.objects.filter(username=username).exists():
            raise AuthError('USERNAME_TAKEN', username=username)
        if User.objects.filter(email__iexact=email).exists():
            raise AuthError('EMAIL_TAKEN', email=email)

        try:
            with transaction.atomic():
                user = User.objects.create_user(username=username, email=email, password=password)
        except IntegrityError as exc:
            raise AuthError('USERNAME_TAKEN', username=username) from exc

        logger.info("auth.registered", extra={"user_id": user.pk})
        return user

    @classmethod
    def login(cls, username: str, password: str):
        """
        Verify credentials and issue a token.

        Returns:
            (user, token)

        Raises:
            AuthError('INVALID_CREDENTIALS'): Same error whether the username
                or the password is wrong
        """
        User = get_user_model()
        user = User.objects.filter(username=(username or '').strip()).first()

        if user is None:
            # Hash anyway so unknown users take as long as wrong passwords
            make_password(password)
            logger.info("auth.login.failed")
            raise AuthError('INVALID_CREDENTIALS')

        if not user.is_active or not cls.verify_password(user.password, password or ''):
            logger.info("auth.login.failed")
            raise AuthError('INVALID_CREDENTIALS')

        update_last_login(None, user)
        logger.info("auth.login", extra={"user_id": user.pk})
        return user, cls.issue_token(user.pk)
