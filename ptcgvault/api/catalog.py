"""
Catalog API endpoints.

Read-only access to expansions and card definitions.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from ptcgvault.db import get_card, list_expansions, search_cards
from ptcgvault.db.database import get_session

router = APIRouter(tags=["catalog"])


class ExpansionResponse(BaseModel):
    """Response model for an expansion."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    series: str | None = None
    set_code: str
    release_date: date | None = None
    total_cards: int | None = None
    official_url: str | None = None


class CardResponse(BaseModel):
    """Response model for a catalog card."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    expansion_id: int
    card_number: str | None = None
    rarity: str | None = None
    card_type: str | None = None
    subtype: str | None = None
    hp: int | None = None
    retreat_cost: int | None = None
    weakness: str | None = None
    resistance: str | None = None
    illustrator: str | None = None
    image_url: str | None = None
    legal_standard: bool = False
    legal_expanded: bool = False
    is_basic_energy: bool = False
    meta_win_rate: float | None = None


@router.get("/expansions", response_model=list[ExpansionResponse])
async def get_expansions(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[ExpansionResponse]:
    """List all expansions, newest release first."""
    expansions = await list_expansions(session)
    return [ExpansionResponse.model_validate(e) for e in expansions]


@router.get("/cards", response_model=list[CardResponse])
async def get_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    q: str | None = None,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
) -> list[CardResponse]:
    """
    Search the catalog.

    `q` matches any part of the card name, case-insensitively.
    """
    cards = await search_cards(session, q, limit=limit)
    return [CardResponse.model_validate(c) for c in cards]


@router.get("/cards/{card_id}", response_model=CardResponse)
async def get_card_by_id(
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Get one card. Returns 404 if it does not exist."""
    card = await get_card(session, card_id)

    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {card_id} not found",
        )

    return CardResponse.model_validate(card)
