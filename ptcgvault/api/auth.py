"""
Account endpoints and the bearer-token dependency.

Protected routes depend on `get_current_user_id`.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ptcgvault.db import create_user, get_user, get_user_by_email
from ptcgvault.db.database import get_session
from ptcgvault.services.auth import (
    InvalidTokenError,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


class CredentialsRequest(BaseModel):
    """Email and password for registration or login."""

    email: str = Field(..., min_length=3, max_length=255, examples=["ash@example.com"])
    password: str = Field(..., min_length=1, max_length=255)


class RegisterResponse(BaseModel):
    id: int
    email: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> int:
    """
    Resolve the bearer token to an existing user id.

    Raises 401 for a missing, invalid or expired token, or a deleted user.
    """
    if credentials is None:
        raise _unauthorized("Unauthorized")

    try:
        user_id = verify_token(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized("Unauthorized") from e

    if await get_user(session, user_id) is None:
        logger.warning("Token for unknown user %d", user_id)
        raise _unauthorized("Unauthorized")

    return user_id


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


def _email_taken() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Email already registered",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: CredentialsRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RegisterResponse:
    """
    Create an account.

    Returns 409 if the email is already registered.
    """
    email = request.email.strip().lower()

    if await get_user_by_email(session, email) is not None:
        raise _email_taken()

    try:
        user = await create_user(session, email, hash_password(request.password))
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await session.rollback()
        raise _email_taken() from e

    logger.info("Registered user %d", user.id)
    return RegisterResponse(id=user.id, email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: CredentialsRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TokenResponse:
    """
    Exchange credentials for a bearer token.

    Returns 401 for an unknown email or wrong password.
    """
    user = await get_user_by_email(session, request.email.strip().lower())

    if user is None or not verify_password(user.password_hash, request.password):
        raise _unauthorized("Invalid credentials")

    return TokenResponse(token=issue_token(user.id))
