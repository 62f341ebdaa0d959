"""
Inventory API endpoints.

Per-user card counts. All routes require a bearer token.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ptcgvault.api.auth import CurrentUserId
from ptcgvault.db import add_inventory, find_card, get_card, list_inventory
from ptcgvault.db.database import get_session
from ptcgvault.parsers.inventory_csv import parse_inventory_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["inventory"])


class InventoryItem(BaseModel):
    """One inventory row."""

    card_id: int
    card_name: str
    count: int


class InventoryResponse(BaseModel):
    items: list[InventoryItem]
    total_cards: int = 0
    unique_cards: int = 0


class InventoryAddRequest(BaseModel):
    card_id: int
    count: int = Field(default=1, ge=1)


class InventoryImportRequest(BaseModel):
    """Request model for bulk CSV import."""

    text: str = Field(
        ...,
        description="CSV with header row: set_code,card_number,count",
        examples=["set_code,card_number,count\nSVI,25,3"],
    )


class ImportResponse(BaseModel):
    added: int = Field(..., description="Rows matched to catalog cards and added")
    skipped: int = Field(default=0, description="Rows with no matching catalog card")


@router.get("", response_model=InventoryResponse)
async def get_inventory(
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> InventoryResponse:
    """Get the caller's inventory."""
    rows = await list_inventory(session, user_id)

    items = [
        InventoryItem(card_id=row.card_id, card_name=name, count=row.count) for row, name in rows
    ]

    return InventoryResponse(
        items=items,
        total_cards=sum(item.count for item in items),
        unique_cards=len(items),
    )


@router.post("", response_model=InventoryItem)
async def add_to_inventory(
    request: InventoryAddRequest,
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> InventoryItem:
    """
    Add copies of a card.

    Adds to the existing count. Returns 404 for an unknown card.
    """
    card = await get_card(session, request.card_id)

    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {request.card_id} not found",
        )

    row = await add_inventory(session, user_id, card.id, request.count)
    return InventoryItem(card_id=card.id, card_name=card.name, count=row.count)


@router.post("/import-csv", response_model=ImportResponse)
async def import_inventory(
    request: InventoryImportRequest,
    user_id: CurrentUserId,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Bulk-add inventory from CSV text.

    Each row is matched by set code and card number. Rows with no
    matching card are skipped and counted.
    """
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import text cannot be empty",
        )

    added = 0
    skipped = 0

    for row in parse_inventory_csv(request.text):
        card = await find_card(session, row.set_code, row.card_number)
        if card is None:
            skipped += 1
            continue

        await add_inventory(session, user_id, card.id, row.count)
        added += 1

    logger.info("Inventory import for user %d: added=%d, skipped=%d", user_id, added, skipped)
    return ImportResponse(added=added, skipped=skipped)
