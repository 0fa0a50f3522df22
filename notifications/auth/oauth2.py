"""OAuth2 bearer authentication for Django REST Framework.

The identity provider is an opaque token issuer. Tokens are validated in one
of two ways, selected by ``OAUTH2_INTROSPECTION_ENABLED``:

1. Token introspection against the provider (results cached briefly).
2. Local JWT validation with the shared ``JWT_SECRET``.

Either way the token subject becomes the notification owner id.
"""

from typing import Any, cast

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from notifications.constants import ADMIN_SCOPE

logger = structlog.get_logger(__name__)


def _normalize_scopes(raw: Any) -> list[str]:
    """Accept scopes as a list or as an RFC 7662 space-delimited string."""
    if not raw:
        return []
    if isinstance(raw, str):
        return raw.split()
    return [str(scope) for scope in raw]


class OAuth2User:
    """Token claims of an authenticated caller.

    Not a Django user model; the notification service keys everything on
    ``user_id`` (the token subject).
    """

    def __init__(self, user_id: str, client_id: str, scopes: list[str]):
        """Initialize the caller.

        Args:
            user_id: Token subject, used as the notification owner id
            client_id: OAuth2 client the token was issued to
            scopes: Granted scopes
        """
        self.id = user_id
        self.user_id = user_id
        self.client_id = client_id
        self.scopes = scopes
        self.is_authenticated = True

    def has_scope(self, scope: str) -> bool:
        """Return True when ``scope`` was granted.

        The admin scope implies every notification scope.
        """
        return scope in self.scopes or ADMIN_SCOPE in self.scopes

    def __str__(self):
        return f"OAuth2User(user_id={self.user_id}, client_id={self.client_id})"


class OAuth2Authentication(authentication.BaseAuthentication):
    """Bearer token authentication from the ``Authorization`` header."""

    def authenticate(self, request):
        """Authenticate the request.

        Args:
            request: Django request object

        Returns:
            ``(OAuth2User, token)``, or None when no credentials were sent

        Raises:
            AuthenticationFailed: If the header is malformed or the token invalid
        """
        if not settings.OAUTH2_SERVICE_ENABLED:
            return None

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]

        if settings.OAUTH2_INTROSPECTION_ENABLED:
            claims = self._validate_via_introspection(token)
        else:
            claims = self._validate_via_jwt(token)

        subject = claims.get("sub") or claims.get("user_id")
        if not subject:
            logger.warning("token_missing_subject", client_id=claims.get("client_id"))
            raise exceptions.AuthenticationFailed("Token has no subject")

        user = OAuth2User(
            user_id=str(subject),
            client_id=claims.get("client_id") or "unknown",
            scopes=_normalize_scopes(claims.get("scopes") or claims.get("scope")),
        )
        return (user, token)

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Validate ``token`` with the provider's introspection endpoint.

        Raises:
            AuthenticationFailed: If the token is inactive or the provider
                cannot be reached
        """
        cache_key = f"{settings.OAUTH2_TOKEN_CACHE_PREFIX}{token[:16]}"
        cached_claims = cache.get(cache_key)
        if cached_claims:
            return cast("dict[str, Any]", cached_claims)

        try:
            response = requests.post(
                settings.OAUTH2_INTROSPECT_URL,
                data={"token": token, "token_type_hint": "access_token"},
                auth=(settings.OAUTH2_CLIENT_ID, settings.OAUTH2_CLIENT_SECRET),
                timeout=5,
            )
        except requests.RequestException as e:
            logger.error("token_introspection_unreachable", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "token_introspection_failed", status_code=response.status_code
            )
            raise exceptions.AuthenticationFailed("Token introspection failed")

        claims = response.json()
        if not claims.get("active", False):
            raise exceptions.AuthenticationFailed("Token is not active")

        cache.set(cache_key, claims, timeout=settings.OAUTH2_TOKEN_CACHE_TTL)
        return cast("dict[str, Any]", claims)

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate ``token`` as an HMAC-signed JWT access token.

        Raises:
            AuthenticationFailed: If the signature, expiry or token type is wrong
        """
        if not settings.JWT_SECRET:
            logger.error("jwt_secret_missing")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256", "HS384", "HS512"],
                options={"verify_signature": True, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError as e:
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("jwt_invalid", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        token_type = payload.get("type", "access_token")
        if token_type != "access_token":
            logger.warning("jwt_wrong_token_type", token_type=token_type)
            raise exceptions.AuthenticationFailed(f"Invalid token type: {token_type}")

        return cast("dict[str, Any]", payload)

    def authenticate_header(self, _request):
        """Value of ``WWW-Authenticate`` on 401 responses."""
        return "Bearer"
