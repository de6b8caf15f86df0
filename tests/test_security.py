"""Tests for token verification and password hashing."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from tcgbackend.models.failure import AuthenticationError, FailureKind
from tcgbackend.models.token import TokenClaims
from tcgbackend.services.security import (
    TokenService,
    get_token_service,
    hash_password,
    verify_password,
)

SECRET = "a-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=SECRET)


class TestTokenIssue:
    def test_round_trip_claims(self, tokens: TokenService) -> None:
        """A freshly issued token verifies to the same identity."""
        token = tokens.issue(7, "red@example.com")

        assert tokens.verify(token) == TokenClaims(user_id=7, email="red@example.com")

    def test_payload_uses_user_id_and_email_claims(self, tokens: TokenService) -> None:
        """Token payload carries userId and email."""
        token = tokens.issue(7, "red@example.com")

        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["userId"] == 7
        assert payload["email"] == "red@example.com"

    def test_default_lifetime_is_seven_days(self, tokens: TokenService) -> None:
        """Tokens expire seven days after issue."""
        now = datetime(2025, 1, 1, tzinfo=UTC)
        token = tokens.issue(1, "a@example.com", now=now)

        payload = jwt.decode(
            token, SECRET, algorithms=["HS256"], options={"verify_exp": False}
        )
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_process_wide_service_verifies_its_own_tokens(self) -> None:
        """The configured service accepts what it issues."""
        service = get_token_service()

        claims = service.verify(service.issue(3, "blue@example.com"))

        assert claims.user_id == 3


class TestTokenVerify:
    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, tokens: TokenService, token: str | None) -> None:
        """Missing credential is rejected as missing."""
        with pytest.raises(AuthenticationError) as exc_info:
            tokens.verify(token)

        assert exc_info.value.kind == FailureKind.MISSING_TOKEN
        assert exc_info.value.status_code == 401

    def test_malformed_token(self, tokens: TokenService) -> None:
        """Garbage is rejected as invalid."""
        with pytest.raises(AuthenticationError) as exc_info:
            tokens.verify("not.a.token")

        assert exc_info.value.kind == FailureKind.INVALID_TOKEN

    def test_expired_token(self, tokens: TokenService) -> None:
        """Expired tokens are rejected."""
        token = tokens.issue(1, "a@example.com", now=datetime.now(UTC) - timedelta(days=8))

        with pytest.raises(AuthenticationError) as exc_info:
            tokens.verify(token)

        assert exc_info.value.kind == FailureKind.INVALID_TOKEN

    def test_wrong_signature(self, tokens: TokenService) -> None:
        """Tokens signed with another secret are rejected."""
        other = TokenService(secret="another-secret-that-is-long-enough-too")
        token = other.issue(1, "a@example.com")

        with pytest.raises(AuthenticationError):
            tokens.verify(token)

    def test_missing_identity_claim(self) -> None:
        """Tokens without userId are rejected."""
        token = jwt.encode(
            {"email": "a@example.com", "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            TokenService(secret=SECRET).verify(token)

    def test_non_integer_user_id(self) -> None:
        """A userId claim that is not an integer is rejected."""
        token = jwt.encode(
            {
                "userId": "1",
                "email": "a@example.com",
                "exp": datetime.now(UTC) + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            TokenService(secret=SECRET).verify(token)


class TestPasswords:
    def test_hash_and_verify(self) -> None:
        """A password verifies against its own hash."""
        hashed = hash_password("pw", rounds=4)

        assert hashed != "pw"
        assert verify_password("pw", hashed)

    def test_wrong_password(self) -> None:
        """A different password does not verify."""
        hashed = hash_password("pw", rounds=4)

        assert not verify_password("other", hashed)

    def test_hashes_are_salted(self) -> None:
        """Hashing the same password twice gives different hashes."""
        assert hash_password("pw", rounds=4) != hash_password("pw", rounds=4)

    def test_non_bcrypt_hash_never_verifies(self) -> None:
        """A stored value that is not a bcrypt hash fails verification."""
        assert not verify_password("pw", "plaintext")

    def test_long_password(self) -> None:
        """Passwords beyond bcrypt's 72 byte limit can still be hashed."""
        password = "x" * 100
        hashed = hash_password(password, rounds=4)

        assert verify_password(password, hashed)
