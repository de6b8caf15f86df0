"""
Seed the database with demo users, the card catalog and starter decks.

Creates the tables if needed, two users (red and blue), one card per entry
of the bundled pokemon.json, and a starter deck of random cards for each
user. Does nothing if the catalog already holds cards.

Run as a standalone script: python -m tcgbackend.jobs.seed_database
"""

import asyncio
import json
import logging
import random
from dataclasses import dataclass
from importlib import resources

from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.config import DECK_SIZE
from tcgbackend.db.database import async_session_factory, init_db
from tcgbackend.db.operations import count_cards, create_card, create_deck, create_user
from tcgbackend.models.db import CardDB, PokemonType
from tcgbackend.services.security import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_USERS = (("red", "red@example.com"), ("blue", "blue@example.com"))
IMAGE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/"
    "other/official-artwork/{number}.png"
)


@dataclass(frozen=True, slots=True)
class CardSeed:
    """One catalog entry as stored in pokemon.json."""

    name: str
    hp: int
    attack: int
    type: PokemonType
    pokedex_number: int


def load_card_seeds() -> list[CardSeed]:
    """Read the bundled card list."""
    raw = resources.files("tcgbackend.data").joinpath("pokemon.json").read_text("utf-8")
    return [
        CardSeed(
            name=entry["name"],
            hp=int(entry["hp"]),
            attack=int(entry["attack"]),
            type=PokemonType(entry["type"]),
            pokedex_number=int(entry["pokedexNumber"]),
        )
        for entry in json.loads(raw)
    ]


def pick_starter_cards(cards: list[CardDB], rng: random.Random) -> list[int]:
    """Choose DECK_SIZE distinct cards at random."""
    if len(cards) < DECK_SIZE:
        msg = f"Need at least {DECK_SIZE} cards to build a starter deck, have {len(cards)}"
        raise ValueError(msg)
    return [card.id for card in rng.sample(cards, DECK_SIZE)]


async def seed_database(
    session: AsyncSession,
    seeds: list[CardSeed] | None = None,
    rng: random.Random | None = None,
) -> dict[str, int]:
    """
    Populate an empty database.

    Returns:
        Counts of created users, cards and decks (all zero when skipped)
    """
    if await count_cards(session) > 0:
        logger.info("Card catalog already populated, skipping seed")
        return {"users": 0, "cards": 0, "decks": 0}

    seeds = seeds if seeds is not None else load_card_seeds()
    rng = rng or random.Random()

    password_hash = hash_password(DEMO_PASSWORD)
    users = [
        await create_user(session, username, email, password_hash)
        for username, email in DEMO_USERS
    ]
    logger.info("Created users: %s", ", ".join(user.username for user in users))

    cards = [
        await create_card(
            session,
            name=seed.name,
            hp=seed.hp,
            attack=seed.attack,
            card_type=seed.type,
            pokedex_number=seed.pokedex_number,
            img_url=IMAGE_URL_TEMPLATE.format(number=seed.pokedex_number),
        )
        for seed in seeds
    ]
    logger.info("Created %d cards", len(cards))

    for user in users:
        deck_name = f"Starter Deck {user.username.capitalize()}"
        await create_deck(session, user.id, deck_name, pick_starter_cards(cards, rng))
        logger.info("Created %s with %d cards", deck_name, DECK_SIZE)

    return {"users": len(users), "cards": len(cards), "decks": len(users)}


async def run_seed() -> dict[str, int]:
    """Create tables and seed them in one transaction."""
    await init_db()

    async with async_session_factory() as session:
        try:
            counts = await seed_database(session)
            await session.commit()
        except Exception as e:
            logger.error("Error seeding database: %s", e)
            raise

    logger.info("Database seeding completed: %s", counts)
    return counts


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_seed())


if __name__ == "__main__":
    main()
