"""
Card catalog API endpoints.

The catalog is public and read-only.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.api.errors import internal_error_boundary
from tcgbackend.db import list_cards
from tcgbackend.db.database import get_session
from tcgbackend.models.db import PokemonType

router = APIRouter(prefix="/api/cards", tags=["cards"])


class CardResponse(BaseModel):
    """Response model for a catalog card."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    hp: int
    attack: int
    type: PokemonType
    pokedex_number: int
    img_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@router.get("", response_model=list[CardResponse])
async def get_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[CardResponse]:
    """Get every card, ordered by pokedex number ascending."""
    with internal_error_boundary("listing cards"):
        cards = await list_cards(session)
        return [CardResponse.model_validate(card) for card in cards]
