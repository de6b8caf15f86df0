"""
Bearer tokens and password hashing.

TokenService signs and verifies the JWTs handed out at sign-up and sign-in.
It is built from explicit arguments so the signing secret never has to be
read from ambient state by the code that checks a token.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from tcgbackend.config import Settings, settings
from tcgbackend.models.failure import AuthenticationError, FailureKind
from tcgbackend.models.token import TokenClaims

logger = logging.getLogger(__name__)

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class TokenService:
    """Issue and verify signed bearer tokens carrying {userId, email}."""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime: timedelta | None = None):
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = lifetime or timedelta(days=7)

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            lifetime=timedelta(days=config.jwt_expires_days),
        )

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Create a token for a user, valid for the configured lifetime."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> TokenClaims:
        """
        Verify a token and return the identity it carries.

        Raises:
            AuthenticationError: If the token is missing, malformed, expired,
                badly signed, or lacks the identity claims.
        """
        if not token:
            raise AuthenticationError(FailureKind.MISSING_TOKEN)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "userId", "email"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.debug("Rejected expired token")
            raise AuthenticationError(FailureKind.INVALID_TOKEN) from e
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid token: %s", type(e).__name__)
            raise AuthenticationError(FailureKind.INVALID_TOKEN) from e

        user_id = payload["userId"]
        email = payload["email"]
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
            raise AuthenticationError(FailureKind.INVALID_TOKEN)

        return TokenClaims(user_id=user_id, email=email)


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES], salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES],
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


_token_service = TokenService.from_settings(settings)


def get_token_service() -> TokenService:
    """Dependency providing the process-wide token service."""
    return _token_service
