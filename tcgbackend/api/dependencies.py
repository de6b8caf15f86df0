"""Request-scoped dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tcgbackend.models.token import TokenClaims
from tcgbackend.services.security import TokenService, get_token_service

# auto_error=False: a missing header must produce our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """
    Authenticate the request from its `Authorization: Bearer <token>` header.

    Runs before anything else in a protected route. Raises
    AuthenticationError (401) if the header is absent or not a bearer
    credential, or if the token does not verify.
    """
    token = credentials.credentials if credentials else None
    return tokens.verify(token)


CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]
