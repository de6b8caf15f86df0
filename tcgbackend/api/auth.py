"""
Authentication API endpoints.

Sign-up and sign-in. Both return a bearer token valid for the configured
lifetime (7 days by default).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.api.errors import internal_error_boundary
from tcgbackend.db import create_user, get_user_by_email, get_user_by_email_or_username
from tcgbackend.db.database import get_session
from tcgbackend.models.failure import (
    AuthenticationError,
    ConflictError,
    FailureKind,
    InvalidInputError,
)
from tcgbackend.services.security import (
    TokenService,
    get_token_service,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignUpRequest(BaseModel):
    """Request model for sign-up. Fields are checked by the handler."""

    username: str | None = None
    email: str | None = None
    password: str | None = None


class SignInRequest(BaseModel):
    """Request model for sign-in. Fields are checked by the handler."""

    email: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    id: int | None = None
    name: str
    email: str


class AuthResponse(BaseModel):
    """Response model for a successful sign-up or sign-in."""

    message: str
    token: str
    user: UserSummary


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    request: SignUpRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Register a new user and return a token for it.

    Returns 400 if a field is missing and 409 if the email or username is
    already taken.
    """
    with internal_error_boundary("signing up"):
        if not request.username or not request.email or not request.password:
            raise InvalidInputError(FailureKind.MISSING_FIELDS)

        existing = await get_user_by_email_or_username(session, request.email, request.username)
        if existing is not None:
            raise ConflictError(FailureKind.USER_EXISTS)

        try:
            user = await create_user(
                session,
                username=request.username,
                email=request.email,
                password_hash=hash_password(request.password),
            )
        except IntegrityError as e:
            # Lost a race with a concurrent sign-up for the same email or username
            raise ConflictError(FailureKind.USER_EXISTS) from e

        token = tokens.issue(user.id, user.email)
        logger.info("Registered user %d", user.id)

        return AuthResponse(
            message="User created successfully",
            token=token,
            user=UserSummary(id=user.id, name=user.username, email=user.email),
        )


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    response_model_exclude_none=True,
)
async def sign_in(
    request: SignInRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Exchange an email and password for a token.

    Returns 400 if a field is missing and 401 if the email is unknown or the
    password is wrong; the two cases are indistinguishable to the caller.
    """
    with internal_error_boundary("signing in"):
        if not request.email or not request.password:
            raise InvalidInputError(FailureKind.MISSING_FIELDS)

        user = await get_user_by_email(session, request.email)
        if user is None or not verify_password(request.password, user.password):
            raise AuthenticationError(FailureKind.INVALID_CREDENTIALS)

        token = tokens.issue(user.id, user.email)
        logger.info("User %d signed in", user.id)

        return AuthResponse(
            message="Signed in successfully",
            token=token,
            user=UserSummary(name=user.username, email=user.email),
        )
