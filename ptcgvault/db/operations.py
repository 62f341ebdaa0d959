"""
Database CRUD operations.

Async functions for users, the card catalog, inventory and decks, plus
the inventory lookup and deck persistence used by auto-build.
"""

import dataclasses
import logging
from datetime import date
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ptcgvault.models.card import CardType, OwnedCard
from ptcgvault.models.db import (
    CardDB,
    DeckCardDB,
    DeckDB,
    ExpansionDB,
    InventoryDB,
    UserDB,
)
from ptcgvault.models.deck import DeckAssemblyResult
from ptcgvault.services.auto_build import copy_limit

logger = logging.getLogger(__name__)

# --- User Operations ---


async def get_user(session: AsyncSession, user_id: int) -> UserDB | None:
    return await session.get(UserDB, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> UserDB | None:
    result = await session.execute(select(UserDB).where(UserDB.email == email))
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, email: str, password_hash: str) -> UserDB:
    """
    Create a user account.

    Raises IntegrityError if the email is already registered.
    """
    user = UserDB(email=email, password_hash=password_hash)
    session.add(user)
    await session.flush()
    return user


# --- Catalog Operations ---


async def list_expansions(session: AsyncSession) -> list[ExpansionDB]:
    """All expansions, newest first."""
    result = await session.execute(
        select(ExpansionDB).order_by(ExpansionDB.release_date.desc().nulls_last(), ExpansionDB.id)
    )
    return list(result.scalars().all())


async def get_expansion_by_code(session: AsyncSession, set_code: str) -> ExpansionDB | None:
    result = await session.execute(select(ExpansionDB).where(ExpansionDB.set_code == set_code))
    return result.scalar_one_or_none()


async def upsert_expansion(
    session: AsyncSession,
    set_code: str,
    name: str,
    series: str | None = None,
    release_date: date | None = None,
    total_cards: int | None = None,
    official_url: str | None = None,
) -> ExpansionDB:
    """
    Insert or update an expansion keyed by set code.
    """
    expansion = await get_expansion_by_code(session, set_code)

    if expansion is None:
        expansion = ExpansionDB(set_code=set_code, name=name)
        session.add(expansion)

    expansion.name = name
    expansion.series = series
    expansion.release_date = release_date
    expansion.total_cards = total_cards
    expansion.official_url = official_url

    await session.flush()
    return expansion


async def search_cards(
    session: AsyncSession, query: str | None = None, limit: int = 100
) -> list[CardDB]:
    """Catalog cards, optionally filtered by a case-insensitive name substring."""
    stmt = select(CardDB)
    if query:
        stmt = stmt.where(CardDB.name.ilike(f"%{query}%"))
    result = await session.execute(stmt.order_by(CardDB.name, CardDB.id).limit(limit))
    return list(result.scalars().all())


async def get_card(session: AsyncSession, card_id: int) -> CardDB | None:
    return await session.get(CardDB, card_id)


async def find_card(session: AsyncSession, set_code: str, card_number: str) -> CardDB | None:
    """Look up a card by its printed set code and collector number."""
    result = await session.execute(
        select(CardDB)
        .join(ExpansionDB, CardDB.expansion_id == ExpansionDB.id)
        .where(ExpansionDB.set_code == set_code, CardDB.card_number == card_number)
    )
    return result.scalar_one_or_none()


async def upsert_card(
    session: AsyncSession,
    expansion_id: int,
    card_number: str,
    fields: dict[str, Any],
) -> CardDB:
    """
    Insert or update a card keyed by (expansion, card number).

    fields holds the remaining CardDB column values.
    """
    result = await session.execute(
        select(CardDB).where(
            CardDB.expansion_id == expansion_id,
            CardDB.card_number == card_number,
        )
    )
    card = result.scalar_one_or_none()

    if card is None:
        card = CardDB(expansion_id=expansion_id, card_number=card_number, **fields)
        session.add(card)
    else:
        for key, value in fields.items():
            setattr(card, key, value)

    await session.flush()
    return card


# --- Inventory Operations ---


async def list_inventory(session: AsyncSession, user_id: int) -> list[tuple[InventoryDB, str]]:
    """A user's inventory rows with card names."""
    result = await session.execute(
        select(InventoryDB, CardDB.name)
        .join(CardDB, InventoryDB.card_id == CardDB.id)
        .where(InventoryDB.user_id == user_id)
        .order_by(CardDB.name, InventoryDB.id)
    )
    return [(row[0], row[1]) for row in result.all()]


async def add_inventory(
    session: AsyncSession, user_id: int, card_id: int, count: int = 1
) -> InventoryDB:
    """
    Add copies of a card to a user's inventory.

    Existing rows are incremented rather than replaced.
    """
    result = await session.execute(
        select(InventoryDB).where(InventoryDB.user_id == user_id, InventoryDB.card_id == card_id)
    )
    row = result.scalar_one_or_none()

    if row is None:
        row = InventoryDB(user_id=user_id, card_id=card_id, count=count)
        session.add(row)
    else:
        row.count += count

    await session.flush()
    return row


async def get_owned_cards(session: AsyncSession, user_id: int) -> list[OwnedCard]:
    """
    Snapshot a user's inventory for auto-build.

    Each owned physical copy becomes one OwnedCard entry, capped at the
    per-card copy limit. times_in_decks counts deck associations across
    all decks. Rows are returned in ascending card id order.
    """
    usage = (
        select(DeckCardDB.card_id, func.count(DeckCardDB.id).label("times_in_decks"))
        .group_by(DeckCardDB.card_id)
        .subquery()
    )

    result = await session.execute(
        select(InventoryDB.count, CardDB, func.coalesce(usage.c.times_in_decks, 0))
        .join(CardDB, InventoryDB.card_id == CardDB.id)
        .outerjoin(usage, usage.c.card_id == CardDB.id)
        .where(InventoryDB.user_id == user_id)
        .order_by(CardDB.id)
    )

    owned: list[OwnedCard] = []
    for count, card, times_in_decks in result.all():
        try:
            card_type = CardType(card.card_type)
        except ValueError:
            logger.warning(
                "Skipping card %d with unknown card type %r", card.id, card.card_type
            )
            continue

        entry = OwnedCard(
            card_id=card.id,
            card_type=card_type,
            is_basic_energy=bool(card.is_basic_energy),
            legal_standard=bool(card.legal_standard),
            legal_expanded=bool(card.legal_expanded),
            times_in_decks=times_in_decks,
            meta_win_rate=card.meta_win_rate,
        )
        owned.extend([entry] * max(0, min(count, copy_limit(entry))))

    return owned


# --- Deck Operations ---


async def create_deck(
    session: AsyncSession, user_id: int, name: str, format_name: str = "Standard"
) -> DeckDB:
    deck = DeckDB(user_id=user_id, name=name, format=format_name)
    session.add(deck)
    await session.flush()
    return deck


async def list_decks(session: AsyncSession, user_id: int) -> list[DeckDB]:
    result = await session.execute(
        select(DeckDB).where(DeckDB.user_id == user_id).order_by(DeckDB.id)
    )
    return list(result.scalars().all())


async def get_deck(session: AsyncSession, user_id: int, deck_id: int) -> DeckDB | None:
    """
    Get a deck owned by a user.

    Returns None when the deck does not exist or belongs to someone else.
    """
    result = await session.execute(
        select(DeckDB)
        .where(DeckDB.id == deck_id, DeckDB.user_id == user_id)
        .options(selectinload(DeckDB.cards))
    )
    return result.scalar_one_or_none()


async def get_deck_cards(session: AsyncSession, deck_id: int) -> list[tuple[DeckCardDB, str]]:
    """Deck-card rows with card names, in insertion order."""
    result = await session.execute(
        select(DeckCardDB, CardDB.name)
        .join(CardDB, DeckCardDB.card_id == CardDB.id)
        .where(DeckCardDB.deck_id == deck_id)
        .order_by(DeckCardDB.id)
    )
    return [(row[0], row[1]) for row in result.all()]


async def set_deck_card(
    session: AsyncSession, deck_id: int, card_id: int, count: int
) -> DeckCardDB | None:
    """
    Set how many copies of a card a deck holds.

    The last write wins. A count of zero removes the card and returns None.
    """
    result = await session.execute(
        select(DeckCardDB).where(DeckCardDB.deck_id == deck_id, DeckCardDB.card_id == card_id)
    )
    row = result.scalar_one_or_none()

    if count <= 0:
        if row is not None:
            await session.delete(row)
            await session.flush()
        return None

    if row is None:
        row = DeckCardDB(deck_id=deck_id, card_id=card_id, count=count)
        session.add(row)
    else:
        row.count = count

    await session.flush()
    return row


async def save_auto_built_deck(
    session: AsyncSession, user_id: int, result: DeckAssemblyResult
) -> DeckAssemblyResult:
    """
    Persist an auto-build result as a new deck.

    Repeated selections of the same card are stored as one row with the
    summed count. Returns the result with deck_id filled in.
    """
    deck = await create_deck(session, user_id, result.deck_name, result.format)

    for card_id, count in result.card_counts().items():
        session.add(DeckCardDB(deck_id=deck.id, card_id=card_id, count=count))

    await session.flush()
    return dataclasses.replace(result, deck_id=deck.id)
