"""
JWT creation and verification.

Tokens are standard JWTs signed with HMAC-SHA256 (``HS256``) through
``python-jose``.  The signing key comes from ``Settings.jwt_secret``
(env var: ``JWT_SECRET``); issuance and validation share the same key.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from config.settings import Settings
from utils.errors import AuthError, ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _require_signing_key(settings: Settings) -> str:
    key = settings.jwt_secret
    if not key or not key.strip():
        raise ConfigurationError(
            "jwt_secret", "JWT signing key is not configured. Set JWT_SECRET.",
        )
    return key


class TokenIssuer:
    """Builds and signs access tokens for authenticated users."""

    def __init__(self, settings: Settings) -> None:
        self._key = _require_signing_key(settings)
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._ttl_seconds = settings.jwt_expiry_minutes * 60

    def issue(
        self,
        user_id: uuid.UUID | str,
        email: str,
        name: str,
        *,
        issued_at: Optional[int] = None,
    ) -> str:
        """Create a signed token for ``user_id`` expiring after the configured TTL."""
        iat = int(time.time()) if issued_at is None else issued_at
        claims: Dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "name": name,
            "jti": str(uuid.uuid4()),
            "iat": iat,
            "exp": iat + self._ttl_seconds,
        }
        if self._issuer:
            claims["iss"] = self._issuer
        if self._audience:
            claims["aud"] = self._audience
        return jwt.encode(claims, self._key, algorithm=ALGORITHM)


class TokenValidator:
    """Checks signature, expiry, issuer and audience of incoming tokens."""

    def __init__(self, settings: Settings) -> None:
        self._key = _require_signing_key(settings)
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience

    def validate(self, token: str) -> Dict[str, Any]:
        """
        Verify ``token`` and return its claims.

        Raises ``AuthError`` on any invalid or expired token.
        """
        try:
            return jwt.decode(
                token,
                self._key,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise AuthError("Invalid or expired token") from exc
