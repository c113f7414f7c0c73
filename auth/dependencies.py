"""
FastAPI dependencies for authentication.

Provides ``db_session``, the service factories and ``get_current_user_id``
used across all protected routes.  Components are read from ``app.state``,
where ``create_app`` puts them at startup.
"""

from __future__ import annotations

import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.identity import extract_owner_id
from auth.jwt import TokenValidator
from auth.service import AuthService
from database.session import get_db_session
from utils.errors import AuthError

_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_auth_service(
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> AuthService:
    state = request.app.state
    return AuthService(session, state.password_hasher, state.token_issuer)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> uuid.UUID:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id.
    """
    if credentials is None:
        raise AuthError("Missing Bearer token")

    validator: TokenValidator = request.app.state.token_validator
    claims = validator.validate(credentials.credentials)
    return extract_owner_id(claims)
