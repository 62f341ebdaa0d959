from ptcgvault.db.database import get_session, init_db, session_scope
from ptcgvault.db.operations import (
    add_inventory,
    create_deck,
    create_user,
    find_card,
    get_card,
    get_deck,
    get_deck_cards,
    get_expansion_by_code,
    get_owned_cards,
    get_user,
    get_user_by_email,
    list_decks,
    list_expansions,
    list_inventory,
    save_auto_built_deck,
    search_cards,
    set_deck_card,
    upsert_card,
    upsert_expansion,
)

__all__ = [
    "add_inventory",
    "create_deck",
    "create_user",
    "find_card",
    "get_card",
    "get_deck",
    "get_deck_cards",
    "get_expansion_by_code",
    "get_owned_cards",
    "get_session",
    "get_user",
    "get_user_by_email",
    "init_db",
    "list_decks",
    "list_expansions",
    "list_inventory",
    "save_auto_built_deck",
    "search_cards",
    "session_scope",
    "set_deck_card",
    "upsert_card",
    "upsert_expansion",
]
