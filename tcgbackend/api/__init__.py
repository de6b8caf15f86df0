from tcgbackend.api.auth import router as auth_router
from tcgbackend.api.cards import router as cards_router
from tcgbackend.api.decks import router as decks_router
from tcgbackend.api.health import router as health_router

__all__ = [
    "auth_router",
    "cards_router",
    "decks_router",
    "health_router",
]
