from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tcgbackend.db.database import get_session
from tcgbackend.main import app
from tcgbackend.models.db import Base, CardDB, PokemonType, UserDB
from tcgbackend.models.token import TokenClaims
from tcgbackend.services.security import get_token_service

CATALOG = [
    ("Bulbasaur", 45, 49, PokemonType.GRASS, 1),
    ("Ivysaur", 60, 62, PokemonType.GRASS, 2),
    ("Venusaur", 80, 82, PokemonType.GRASS, 3),
    ("Charmander", 39, 52, PokemonType.FIRE, 4),
    ("Charmeleon", 58, 64, PokemonType.FIRE, 5),
    ("Charizard", 78, 84, PokemonType.FIRE, 6),
    ("Squirtle", 44, 48, PokemonType.WATER, 7),
    ("Wartortle", 59, 63, PokemonType.WATER, 8),
    ("Blastoise", 79, 83, PokemonType.WATER, 9),
    ("Caterpie", 45, 30, PokemonType.BUG, 10),
    ("Pikachu", 35, 55, PokemonType.ELECTRIC, 25),
    ("Mew", 100, 100, PokemonType.PSYCHIC, 151),
]


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def catalog(session_factory) -> list[CardDB]:
    """Seed the card catalog, inserted in reverse pokedex order."""
    cards = [
        CardDB(name=name, hp=hp, attack=attack, type=card_type, pokedex_number=number)
        for name, hp, attack, card_type, number in reversed(CATALOG)
    ]
    async with session_factory() as session:
        session.add_all(cards)
        await session.commit()
    return cards


@pytest.fixture
async def users(session_factory) -> dict[str, UserDB]:
    """Seed two users, red and blue (password hashes are placeholders)."""
    red = UserDB(username="red", email="red@example.com", password="not-a-hash")
    blue = UserDB(username="blue", email="blue@example.com", password="not-a-hash")
    async with session_factory() as session:
        session.add_all([red, blue])
        await session.commit()
    return {"red": red, "blue": blue}


@pytest.fixture
def red_claims(users) -> TokenClaims:
    return TokenClaims(user_id=users["red"].id, email=users["red"].email)


@pytest.fixture
def blue_claims(users) -> TokenClaims:
    return TokenClaims(user_id=users["blue"].id, email=users["blue"].email)


def bearer(claims: TokenClaims) -> dict[str, str]:
    """Authorization header for a user."""
    token = get_token_service().issue(claims.user_id, claims.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def red_headers(red_claims) -> dict[str, str]:
    return bearer(red_claims)


@pytest.fixture
def blue_headers(blue_claims) -> dict[str, str]:
    return bearer(blue_claims)


@pytest.fixture
def card_ids(catalog) -> list[int]:
    """Ten valid catalog ids, in pokedex order 1-10."""
    by_number = {card.pokedex_number: card.id for card in catalog}
    return [by_number[number] for number in range(1, 11)]


@pytest.fixture
def auth_headers():
    """Build an Authorization header for arbitrary claims."""
    return bearer


@pytest.fixture
async def broken_client():
    """Provide a test client whose database session fails on every query."""

    async def override_get_session_broken():
        mock_session = AsyncMock()
        mock_session.execute.side_effect = Exception("Database connection failed")
        yield mock_session

    app.dependency_overrides[get_session] = override_get_session_broken

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
