"""
Failure classification for API errors.

Every user-visible failure is one of the ApiError subclasses below. Each
carries the HTTP status it maps to and a FailureKind naming what went wrong.
The HTTP layer renders all of them the same way: {"error": <message>}.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    MISSING_NAME = "missing_name"
    MISSING_FIELDS = "missing_fields"
    INVALID_CARD_COUNT = "invalid_card_count"
    UNKNOWN_CARDS = "unknown_cards"
    INVALID_OR_UNKNOWN_CARDS = "invalid_or_unknown_cards"
    INVALID_INPUT = "invalid_input"

    # Credential failures
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"
    INVALID_CREDENTIALS = "invalid_credentials"

    # Resource failures
    DECK_NOT_FOUND = "deck_not_found"
    FORBIDDEN = "forbidden"
    USER_EXISTS = "user_exists"

    # Internal errors
    INTERNAL = "internal"


STANDARD_MESSAGES: dict[FailureKind, str] = {
    FailureKind.MISSING_NAME: "Deck name is required",
    FailureKind.MISSING_FIELDS: "Missing required fields",
    FailureKind.INVALID_CARD_COUNT: "A deck must contain exactly 10 cards",
    FailureKind.UNKNOWN_CARDS: "All cards must exist in the catalog",
    FailureKind.INVALID_OR_UNKNOWN_CARDS: "Some cards are invalid or do not exist",
    FailureKind.INVALID_INPUT: "Invalid request",
    FailureKind.MISSING_TOKEN: "Missing token",
    FailureKind.INVALID_TOKEN: "Invalid or expired token",
    FailureKind.INVALID_CREDENTIALS: "Invalid email or password",
    FailureKind.DECK_NOT_FOUND: "Deck not found",
    FailureKind.FORBIDDEN: "Access to this deck is forbidden",
    FailureKind.USER_EXISTS: "User already exists",
    FailureKind.INTERNAL: "Internal server error",
}


class ApiError(Exception):
    """
    Base class for failures that reach the caller.

    Subclasses fix the HTTP status; the kind selects the message unless
    one is given explicitly.
    """

    status_code: int = 500

    def __init__(self, kind: FailureKind, message: str | None = None):
        self.kind = kind
        self.message = message or STANDARD_MESSAGES[kind]
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Body returned to the client."""
        return {"error": self.message}


class InvalidInputError(ApiError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(ApiError):
    """Missing, invalid or expired credential, or bad sign-in."""

    status_code = 401


class AuthorizationError(ApiError):
    """Authenticated, but not the owner of the resource."""

    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    """A unique field is already taken."""

    status_code = 409


class InternalError(ApiError):
    """Persistence or otherwise unexpected failure."""

    status_code = 500

    def __init__(self, message: str | None = None):
        super().__init__(FailureKind.INTERNAL, message)
