"""
Database CRUD operations.

Provides async functions for reading the card catalog, registering users,
and creating, reading, updating, and deleting decks with their card
associations.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tcgbackend.models.db import CardDB, DeckCardDB, DeckDB, PokemonType, UserDB

# --- User Operations ---


async def get_user_by_email(session: AsyncSession, email: str) -> UserDB | None:
    """Get a user by email. Returns None if no such user exists."""
    result = await session.execute(select(UserDB).where(UserDB.email == email))
    return result.scalar_one_or_none()


async def get_user_by_email_or_username(
    session: AsyncSession, email: str, username: str
) -> UserDB | None:
    """Get the first user holding either the email or the username."""
    result = await session.execute(
        select(UserDB).where(or_(UserDB.email == email, UserDB.username == username)).limit(1)
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession, username: str, email: str, password_hash: str
) -> UserDB:
    """
    Create a new user.

    Raises IntegrityError if the email or username is already taken.
    """
    user = UserDB(username=username, email=email, password=password_hash)
    session.add(user)
    await session.flush()
    return user


# --- Card Catalog Operations ---


async def list_cards(session: AsyncSession) -> list[CardDB]:
    """Get the whole catalog, ordered by pokedex number ascending."""
    result = await session.execute(select(CardDB).order_by(CardDB.pokedex_number.asc()))
    return list(result.scalars().all())


async def find_cards_by_ids(session: AsyncSession, card_ids: Iterable[int]) -> list[CardDB]:
    """
    Get the catalog cards matching the given ids.

    Ids with no matching card are silently left out; each card appears once
    however many times its id was given.
    """
    ids = set(card_ids)
    if not ids:
        return []
    result = await session.execute(select(CardDB).where(CardDB.id.in_(ids)))
    return list(result.scalars().all())


async def count_cards(session: AsyncSession) -> int:
    """Number of cards in the catalog."""
    result = await session.execute(select(func.count()).select_from(CardDB))
    return int(result.scalar_one())


async def create_card(
    session: AsyncSession,
    name: str,
    hp: int,
    attack: int,
    card_type: PokemonType,
    pokedex_number: int,
    img_url: str | None = None,
) -> CardDB:
    """Add a card to the catalog."""
    card = CardDB(
        name=name,
        hp=hp,
        attack=attack,
        type=card_type,
        pokedex_number=pokedex_number,
        img_url=img_url,
    )
    session.add(card)
    await session.flush()
    return card


# --- Deck Operations ---


def _deck_query() -> Select[tuple[DeckDB]]:
    """Select decks with their card associations and cards eagerly loaded."""
    return (
        select(DeckDB)
        .options(selectinload(DeckDB.deck_cards).selectinload(DeckCardDB.card))
        # Refresh objects already in the session so writes are visible
        .execution_options(populate_existing=True)
    )


async def get_deck(session: AsyncSession, deck_id: int) -> DeckDB | None:
    """
    Get a deck by id with its cards expanded.

    Returns None if no deck has this id.
    """
    result = await session.execute(_deck_query().where(DeckDB.id == deck_id))
    return result.scalar_one_or_none()


async def get_decks_by_owner(session: AsyncSession, user_id: int) -> list[DeckDB]:
    """Get every deck owned by a user, with cards expanded."""
    result = await session.execute(
        _deck_query().where(DeckDB.user_id == user_id).order_by(DeckDB.id)
    )
    return list(result.scalars().all())


async def create_deck(
    session: AsyncSession, user_id: int, name: str, card_ids: Sequence[int]
) -> DeckDB:
    """
    Create a deck and one association row per given card id.

    Duplicate ids produce duplicate rows. Returns the deck re-fetched with
    its cards expanded.
    """
    deck = DeckDB(
        name=name,
        user_id=user_id,
        deck_cards=[DeckCardDB(card_id=card_id) for card_id in card_ids],
    )
    session.add(deck)
    await session.flush()

    # Always re-fetch with eager loading to avoid async lazy load issues
    loaded = await get_deck(session, deck.id)
    if loaded is None:
        msg = f"Deck {deck.id} not found after creation"
        raise RuntimeError(msg)
    return loaded


async def update_deck(
    session: AsyncSession,
    deck: DeckDB,
    name: str | None = None,
    card_ids: Sequence[int] | None = None,
) -> DeckDB:
    """
    Update a deck's name and/or replace its whole card set.

    None leaves the corresponding field unchanged. A new card set replaces
    every existing association row; the old rows are deleted.
    The deck must have been loaded with get_deck.
    """
    if name is not None:
        deck.name = name

    if card_ids is not None:
        # delete-orphan cascade removes the previous rows on flush
        deck.deck_cards = [DeckCardDB(card_id=card_id) for card_id in card_ids]

    await session.flush()

    loaded = await get_deck(session, deck.id)
    if loaded is None:
        msg = f"Deck {deck.id} not found after update"
        raise RuntimeError(msg)
    return loaded


async def delete_deck(session: AsyncSession, deck: DeckDB) -> None:
    """Delete a deck together with its card associations."""
    await session.delete(deck)
    await session.flush()
