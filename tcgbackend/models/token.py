from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Identity carried by a verified bearer token.

    Attributes:
        user_id: Primary key of the authenticated user
        email: Email address the token was issued for
    """

    user_id: int
    email: str
