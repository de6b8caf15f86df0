"""Tests for the database seeding job."""

import random

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tcgbackend.config import DECK_SIZE
from tcgbackend.db.operations import get_decks_by_owner, get_user_by_email, list_cards
from tcgbackend.jobs.seed_database import (
    DEMO_PASSWORD,
    CardSeed,
    load_card_seeds,
    pick_starter_cards,
    seed_database,
)
from tcgbackend.models.db import CardDB, PokemonType
from tcgbackend.services.security import verify_password


class TestLoadCardSeeds:
    def test_bundled_catalog(self) -> None:
        """Bundled data holds enough unique cards for starter decks."""
        seeds = load_card_seeds()

        assert len(seeds) >= DECK_SIZE
        numbers = [seed.pokedex_number for seed in seeds]
        assert len(numbers) == len(set(numbers))
        assert all(isinstance(seed.type, PokemonType) for seed in seeds)


class TestPickStarterCards:
    def test_distinct_cards(self) -> None:
        cards = [CardDB(id=i, name=str(i), hp=1, attack=1) for i in range(1, 21)]

        picked = pick_starter_cards(cards, random.Random(0))

        assert len(picked) == DECK_SIZE
        assert len(set(picked)) == DECK_SIZE

    def test_too_few_cards(self) -> None:
        cards = [CardDB(id=i, name=str(i), hp=1, attack=1) for i in range(3)]

        with pytest.raises(ValueError):
            pick_starter_cards(cards, random.Random(0))


class TestSeedDatabase:
    async def test_seeds_users_cards_and_decks(self, session: AsyncSession) -> None:
        seeds = load_card_seeds()

        counts = await seed_database(session, rng=random.Random(1))
        await session.commit()

        assert counts == {"users": 2, "cards": len(seeds), "decks": 2}
        red = await get_user_by_email(session, "red@example.com")
        assert red is not None
        assert verify_password(DEMO_PASSWORD, red.password)

        cards = await list_cards(session)
        assert cards[0].img_url.endswith(f"/{cards[0].pokedex_number}.png")

        decks = await get_decks_by_owner(session, red.id)
        assert [deck.name for deck in decks] == ["Starter Deck Red"]
        assert len(decks[0].deck_cards) == DECK_SIZE

    async def test_skips_populated_catalog(self, session: AsyncSession) -> None:
        """Running twice does not duplicate anything."""
        seeds = [
            CardSeed(f"Card {n}", 50, 50, PokemonType.NORMAL, n) for n in range(1, DECK_SIZE + 1)
        ]
        await seed_database(session, seeds=seeds)
        await session.commit()

        counts = await seed_database(session, seeds=seeds)

        assert counts == {"users": 0, "cards": 0, "decks": 0}
        result = await session.execute(select(CardDB))
        assert len(result.scalars().all()) == DECK_SIZE
