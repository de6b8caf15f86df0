"""
Deck authorization and validation workflow.

Every deck operation runs the same fail-fast pipeline:

    authenticated caller
      -> existence check          (id-scoped operations)  NotFoundError
      -> ownership check          (id-scoped operations)  AuthorizationError
      -> payload validation       (write operations)      InvalidInputError
      -> persistence

Each step runs only if the previous one passed. Existence is checked before
ownership, so a caller can tell "no such deck" (404) from "someone else's
deck" (403). Nothing is written until every check has passed.

The caller's identity comes in as TokenClaims; authenticating the request
is the HTTP layer's job.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.config import DECK_SIZE, MAX_ID
from tcgbackend.db import operations as store
from tcgbackend.models.db import DeckDB
from tcgbackend.models.failure import (
    AuthorizationError,
    FailureKind,
    InvalidInputError,
    NotFoundError,
)
from tcgbackend.models.token import TokenClaims

logger = logging.getLogger(__name__)


# --- Validation steps ---


def validate_deck_name(name: Any) -> str:
    """A deck name must be a non-empty string."""
    if not isinstance(name, str) or not name:
        raise InvalidInputError(FailureKind.MISSING_NAME)
    return name


def validate_card_count(cards: Any) -> list[Any]:
    """The card list must be a list of exactly DECK_SIZE entries."""
    if not isinstance(cards, list) or len(cards) != DECK_SIZE:
        raise InvalidInputError(FailureKind.INVALID_CARD_COUNT)
    return cards


def _is_storable_id(value: Any) -> bool:
    """True for integers an id column can actually hold."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_ID


async def ensure_cards_exist(
    session: AsyncSession, cards: list[Any], failure: FailureKind
) -> list[int]:
    """
    Check every supplied card id against the catalog.

    Counts how many of the supplied ids resolve to a catalog card, position
    by position, so repeated ids count once per occurrence. The count must
    equal DECK_SIZE; entries that are not integers, or lie outside the
    range an id column can hold, never resolve.

    Raises:
        InvalidInputError: With the given failure kind if any id is unknown.
    """
    card_ids = [card for card in cards if _is_storable_id(card)]
    found = await store.find_cards_by_ids(session, card_ids)
    found_ids = {card.id for card in found}

    resolved = sum(1 for card_id in card_ids if card_id in found_ids)
    if resolved != DECK_SIZE:
        raise InvalidInputError(failure)
    return card_ids


async def get_owned_deck(session: AsyncSession, caller: TokenClaims, deck_id: int) -> DeckDB:
    """
    Load a deck the caller owns.

    Raises:
        NotFoundError: If no deck has this id (checked first).
        AuthorizationError: If the deck belongs to another user.
    """
    if not _is_storable_id(deck_id):
        raise NotFoundError(FailureKind.DECK_NOT_FOUND)

    deck = await store.get_deck(session, deck_id)
    if deck is None:
        raise NotFoundError(FailureKind.DECK_NOT_FOUND)

    if deck.user_id != caller.user_id:
        logger.warning(
            "User %d denied access to deck %d owned by user %d",
            caller.user_id,
            deck_id,
            deck.user_id,
        )
        raise AuthorizationError(FailureKind.FORBIDDEN)

    return deck


# --- Operations ---


async def create_deck(
    session: AsyncSession, caller: TokenClaims, name: Any, cards: Any
) -> DeckDB:
    """
    Create a deck owned by the caller.

    Checks, in order: name present, exactly DECK_SIZE cards, every card in
    the catalog. Duplicate ids are kept as duplicate associations.
    """
    deck_name = validate_deck_name(name)
    card_list = validate_card_count(cards)
    card_ids = await ensure_cards_exist(session, card_list, FailureKind.UNKNOWN_CARDS)

    deck = await store.create_deck(session, caller.user_id, deck_name, card_ids)
    logger.info("User %d created deck %d", caller.user_id, deck.id)
    return deck


async def list_my_decks(session: AsyncSession, caller: TokenClaims) -> list[DeckDB]:
    """Every deck the caller owns."""
    return await store.get_decks_by_owner(session, caller.user_id)


async def get_my_deck(session: AsyncSession, caller: TokenClaims, deck_id: int) -> DeckDB:
    """A single deck, if it exists and the caller owns it."""
    return await get_owned_deck(session, caller, deck_id)


async def patch_deck(
    session: AsyncSession,
    caller: TokenClaims,
    deck_id: int,
    name: Any = None,
    cards: Any = None,
) -> DeckDB:
    """
    Rename a deck and/or replace its whole card set.

    An omitted (None) or empty name leaves the name unchanged; any other
    non-string name is rejected. An omitted card list leaves the cards
    unchanged. A new card list must pass the same count and catalog checks
    as on creation, and replaces every existing association.
    """
    deck = await get_owned_deck(session, caller, deck_id)

    if name is not None and not isinstance(name, str):
        raise InvalidInputError(FailureKind.INVALID_INPUT)

    card_ids: list[int] | None = None
    if cards is not None:
        card_list = validate_card_count(cards)
        card_ids = await ensure_cards_exist(
            session, card_list, FailureKind.INVALID_OR_UNKNOWN_CARDS
        )

    new_name = name or None

    updated = await store.update_deck(session, deck, name=new_name, card_ids=card_ids)
    logger.info(
        "User %d updated deck %d (name=%s, cards=%s)",
        caller.user_id,
        deck_id,
        new_name is not None,
        card_ids is not None,
    )
    return updated


async def delete_deck(session: AsyncSession, caller: TokenClaims, deck_id: int) -> None:
    """Delete a deck the caller owns, with its card associations."""
    deck = await get_owned_deck(session, caller, deck_id)
    await store.delete_deck(session, deck)
    logger.info("User %d deleted deck %d", caller.user_id, deck_id)
