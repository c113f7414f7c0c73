"""
Register and login orchestration.

``AuthService`` ties together the user table, the password hasher and the
token issuer.  It raises domain errors only; the HTTP layer translates them.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from database.models import User
from utils.errors import AuthError, ConflictError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class AuthResult:
    token: str
    user_id: uuid.UUID
    email: str
    name: str


class AuthService:
    def __init__(
        self,
        session: AsyncSession,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ) -> None:
        self.session = session
        self.hasher = hasher
        self.issuer = issuer

    async def _find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    def _result_for(self, user: User) -> AuthResult:
        token = self.issuer.issue(user.user_id, user.email, user.display_name)
        return AuthResult(
            token=token,
            user_id=user.user_id,
            email=user.email,
            name=user.display_name,
        )

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create a user and return a fresh token for it."""
        if await self._find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User(
            user_id=uuid.uuid4(),
            email=email,
            display_name=name,
            password_hash=self.hasher.hash(password),
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            raise ConflictError("Email already registered") from exc

        logger.info("Registered user %s (%s)", name, user.user_id)
        return self._result_for(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token."""
        user = await self._find_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        logger.info("Login: %s (%s)", user.display_name, user.user_id)
        return self._result_for(user)
