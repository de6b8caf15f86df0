"""
Deck API endpoints.

Every route requires a bearer token. Decks are visible and mutable only by
their owner; see services.deck_workflow for the checks and their order.
"""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.api.cards import CardResponse
from tcgbackend.api.dependencies import CurrentUser
from tcgbackend.api.errors import internal_error_boundary
from tcgbackend.db.database import get_session
from tcgbackend.models.db import DeckDB
from tcgbackend.services import deck_workflow

router = APIRouter(prefix="/api/decks", tags=["decks"])


class DeckCreateRequest(BaseModel):
    """
    Request model for creating a deck.

    Fields are loosely typed so that the workflow, not request parsing,
    decides which check fails first.
    """

    name: Any = None
    cards: Any = Field(
        default=None,
        description="Exactly 10 catalog card ids; repeats allowed",
        examples=[[1, 2, 3, 4, 5, 6, 7, 8, 9, 10]],
    )


class DeckPatchRequest(BaseModel):
    """Request model for updating a deck. Omitted fields are left unchanged."""

    name: Any = None
    cards: Any = Field(
        default=None,
        description="Replacement set of exactly 10 catalog card ids",
    )


class DeckCardResponse(BaseModel):
    """One card slot of a deck, with the catalog card expanded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    deck_id: int
    card_id: int
    card: CardResponse


class DeckResponse(BaseModel):
    """Response model for a single deck."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deck_cards: list[DeckCardResponse] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


def deck_to_response(deck: DeckDB) -> DeckResponse:
    """Convert a database deck (cards loaded) to its response model."""
    return DeckResponse.model_validate(deck)


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    caller: CurrentUser,
    request: DeckCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Create a deck of exactly 10 catalog cards owned by the caller.

    Returns 400 if the name is missing, the card count is not 10, or any
    card id is not in the catalog (checked in that order).
    """
    with internal_error_boundary("creating a deck"):
        deck = await deck_workflow.create_deck(session, caller, request.name, request.cards)
        return deck_to_response(deck)


@router.get("/mine", response_model=list[DeckResponse])
async def get_my_decks(
    caller: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[DeckResponse]:
    """Get every deck owned by the caller, with cards expanded."""
    with internal_error_boundary("listing decks"):
        decks = await deck_workflow.list_my_decks(session, caller)
        return [deck_to_response(deck) for deck in decks]


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck_by_id(
    caller: CurrentUser,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Get one of the caller's decks.

    Returns 404 if no deck has this id, 403 if it belongs to someone else.
    """
    with internal_error_boundary("fetching a deck"):
        deck = await deck_workflow.get_my_deck(session, caller, deck_id)
        return deck_to_response(deck)


@router.patch("/{deck_id}", response_model=DeckResponse)
async def patch_deck(
    caller: CurrentUser,
    deck_id: int,
    request: DeckPatchRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Rename a deck and/or replace its cards.

    Returns 404/403 like GET, then 400 if a supplied card list is not 10
    catalog cards.
    """
    with internal_error_boundary("updating a deck"):
        deck = await deck_workflow.patch_deck(
            session, caller, deck_id, name=request.name, cards=request.cards
        )
        return deck_to_response(deck)


@router.delete("/{deck_id}", response_model=MessageResponse)
async def delete_deck(
    caller: CurrentUser,
    deck_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> MessageResponse:
    """Delete one of the caller's decks. Returns 404/403 like GET."""
    with internal_error_boundary("deleting a deck"):
        await deck_workflow.delete_deck(session, caller, deck_id)
        return MessageResponse(message="Deck deleted successfully")
