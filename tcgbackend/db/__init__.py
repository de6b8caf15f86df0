from tcgbackend.db.database import get_session, init_db
from tcgbackend.db.operations import (
    count_cards,
    create_card,
    create_deck,
    create_user,
    delete_deck,
    find_cards_by_ids,
    get_deck,
    get_decks_by_owner,
    get_user_by_email,
    get_user_by_email_or_username,
    list_cards,
    update_deck,
)

__all__ = [
    "count_cards",
    "create_card",
    "create_deck",
    "create_user",
    "delete_deck",
    "find_cards_by_ids",
    "get_deck",
    "get_decks_by_owner",
    "get_session",
    "get_user_by_email",
    "get_user_by_email_or_username",
    "init_db",
    "list_cards",
    "update_deck",
]
