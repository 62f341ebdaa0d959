"""
Deck API endpoints.

Create, list and edit decks, and auto-build a deck from the caller's
inventory. All routes require a bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ptcgvault.api.auth import CurrentUserId
from ptcgvault.db import (
    create_deck,
    get_card,
    get_deck,
    get_deck_cards,
    get_owned_cards,
    list_decks,
    save_auto_built_deck,
    set_deck_card,
)
from ptcgvault.db.database import get_session
from ptcgvault.filtering.eligibility import STANDARD_FORMAT
from ptcgvault.services.auto_build import DEFAULT_DECK_NAME, auto_build

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    format: str = Field(default=STANDARD_FORMAT, max_length=50)


class DeckSummary(BaseModel):
    """Response model for a deck without its cards."""

    id: int
    name: str
    format: str


class DeckCardEntry(BaseModel):
    card_id: int
    card_name: str | None = None
    count: int


class DeckDetail(DeckSummary):
    """Response model for a deck with its card list."""

    cards: list[DeckCardEntry] = Field(default_factory=list)
    total_cards: int = 0


class DeckCardUpdateRequest(BaseModel):
    card_id: int
    count: int = Field(..., ge=0, description="0 removes the card from the deck")


class AutoBuildRequest(BaseModel):
    """Parameters for auto-build."""

    format: str = Field(
        default=STANDARD_FORMAT,
        max_length=50,
        description='"Expanded" uses expanded legality; any other value uses Standard',
    )
    name: str = Field(default=DEFAULT_DECK_NAME, min_length=1, max_length=255)


class AutoBuildResponse(BaseModel):
    """Response model for auto-build."""

    deck_id: int
    name: str
    format: str
    cards_added: int
    type_counts: dict[str, int] = Field(default_factory=dict)
    cards: list[DeckCardEntry] = Field(default_factory=list)


async def _deck_detail(
    session: AsyncSession, deck_id: int, name: str, format_name: str
) -> DeckDetail:
    rows = await get_deck_cards(session, deck_id)
    cards = [
        DeckCardEntry(card_id=row.card_id, card_name=card_name, count=row.count)
        for row, card_name in rows
    ]
    return DeckDetail(
        id=deck_id,
        name=name,
        format=format_name,
        cards=cards,
        total_cards=sum(c.count for c in cards),
    )


@router.post("", response_model=DeckSummary, status_code=status.HTTP_201_CREATED)
async def create_user_deck(
    request: DeckCreateRequest,
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckSummary:
    """Create an empty deck."""
    deck = await create_deck(session, user_id, request.name, request.format)
    return DeckSummary(id=deck.id, name=deck.name, format=deck.format)


@router.get("", response_model=list[DeckSummary])
async def get_user_decks(
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[DeckSummary]:
    """List the caller's decks."""
    decks = await list_decks(session, user_id)
    return [DeckSummary(id=d.id, name=d.name, format=d.format) for d in decks]


@router.post("/auto-build", response_model=AutoBuildResponse, status_code=status.HTTP_201_CREATED)
async def auto_build_deck(
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
    request: AutoBuildRequest | None = None,
) -> AutoBuildResponse:
    """
    Build a deck from the caller's inventory.

    Picks up to 60 legal cards by score, within type quotas of
    18 Pokemon / 30 Trainer / 12 Energy and a 4-copy limit for
    everything except basic energy. A small inventory yields a smaller
    deck; an empty one yields an empty deck.
    """
    request = request or AutoBuildRequest()

    owned_cards = await get_owned_cards(session, user_id)
    result = auto_build(owned_cards, request.format, request.name)
    saved = await save_auto_built_deck(session, user_id, result)

    return AutoBuildResponse(
        deck_id=saved.deck_id,
        name=saved.deck_name,
        format=saved.format,
        cards_added=saved.total_added,
        type_counts={card_type.value: count for card_type, count in saved.type_counts.items()},
        cards=[
            DeckCardEntry(card_id=int(card_id), count=count)
            for card_id, count in saved.card_counts().items()
        ],
    )


@router.get("/{deck_id}", response_model=DeckDetail)
async def get_user_deck(
    deck_id: int,
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckDetail:
    """
    Get a deck with its cards.

    Returns 404 if the deck does not exist or belongs to another user.
    """
    deck = await get_deck(session, user_id, deck_id)

    if deck is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Deck {deck_id} not found",
        )

    return await _deck_detail(session, deck.id, deck.name, deck.format)


@router.put("/{deck_id}/cards", response_model=DeckDetail)
async def update_deck_card(
    deck_id: int,
    request: DeckCardUpdateRequest,
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckDetail:
    """
    Set the count of one card in a deck.

    Overwrites any existing count; a count of 0 removes the card.
    """
    deck = await get_deck(session, user_id, deck_id)

    if deck is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Deck {deck_id} not found",
        )

    if await get_card(session, request.card_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {request.card_id} not found",
        )

    await set_deck_card(session, deck.id, request.card_id, request.count)
    return await _deck_detail(session, deck.id, deck.name, deck.format)
