"""
Auth API routes — register, login.

Route prefix: {api_prefix}/auth
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from auth.dependencies import get_auth_service
from auth.password import MAX_PASSWORD_BYTES
from auth.service import AuthResult, AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=4, max_length=MAX_PASSWORD_BYTES)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    name: str


class AuthResponse(BaseModel):
    token: str
    user: UserOut


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        token=result.token,
        user=UserOut(id=result.user_id, email=result.email, name=result.name),
    )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user."""
    result = await service.register(req.email, req.password, req.name)
    return _to_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    return _to_response(result)
