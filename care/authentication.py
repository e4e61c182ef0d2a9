"""
Bearer token authentication.

Every protected route runs through :class:`BearerTokenAuthentication`:

* no ``Authorization`` header: the request stays anonymous and the
  ``IsAuthenticated`` permission answers 401;
* a header that is not ``Bearer <token>``: 401;
* a token whose signature, expiry or claims do not check out: 403;
* a valid token: ``request.user`` becomes an :class:`Identity` built
  from the token claims.

The claims are trusted as issued; the account row is not re-read.
"""
from __future__ import annotations

from django.utils.functional import cached_property
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.models import TokenUser
from rest_framework_simplejwt.settings import api_settings

from .permissions import ADMIN_ROLES


class Identity(TokenUser):
    """The caller, as described by a verified access token."""

    @cached_property
    def id(self) -> int:
        return int(self.token[api_settings.USER_ID_CLAIM])

    @cached_property
    def pk(self) -> int:
        return self.id

    @cached_property
    def email(self) -> str:
        return self.token.get('email', '')

    @cached_property
    def name(self) -> str:
        return self.token.get('name', '')

    @cached_property
    def role(self) -> str:
        return self.token.get('role', '')

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    def __str__(self) -> str:
        return f"Identity {self.id} ({self.role})"


class BearerTokenAuthentication(JWTStatelessUserAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        parts = header.split()
        if len(parts) != 2 or parts[0].decode('latin-1').lower() != self.keyword.lower():
            raise exceptions.NotAuthenticated()

        try:
            validated_token = self.get_validated_token(parts[1])
            return self.get_user(validated_token), validated_token
        except (InvalidToken, TokenError):
            raise exceptions.PermissionDenied()

    def authenticate_header(self, request) -> str:
        return f'{self.keyword} realm="{self.www_authenticate_realm}"'
