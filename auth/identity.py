"""Resolve the caller's user id from validated token claims."""

from __future__ import annotations

import uuid
from typing import Any, Mapping

from utils.errors import IdentityError


def extract_owner_id(claims: Mapping[str, Any]) -> uuid.UUID:
    """
    Return the ``sub`` claim as a UUID.

    The token has already passed signature and expiry checks, so a missing
    or malformed subject means it was minted by an incompatible issuer.
    That is a server fault, hence ``IdentityError`` rather than ``AuthError``.
    """
    subject = claims.get("sub")
    if not subject:
        raise IdentityError("Token has no subject claim")
    try:
        return uuid.UUID(str(subject))
    except ValueError as exc:
        raise IdentityError("Token subject is not a valid user id") from exc
