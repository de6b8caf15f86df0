from tcgbackend.models.db import (
    Base,
    CardDB,
    DeckCardDB,
    DeckDB,
    PokemonType,
    UserDB,
)
from tcgbackend.models.failure import (
    STANDARD_MESSAGES,
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    FailureKind,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from tcgbackend.models.token import TokenClaims

__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "Base",
    "CardDB",
    "ConflictError",
    "DeckCardDB",
    "DeckDB",
    "FailureKind",
    "InternalError",
    "InvalidInputError",
    "NotFoundError",
    "PokemonType",
    "STANDARD_MESSAGES",
    "TokenClaims",
    "UserDB",
]
