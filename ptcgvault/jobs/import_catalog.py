"""
Import expansions and cards into the catalog.

Reads two JSON arrays (sets and cards) from local files or http(s) URLs
and upserts them. Expansions are keyed by set code, cards by
(expansion, card number).

Usage:
    python -m ptcgvault.jobs.import_catalog sets.json cards.json
"""

import argparse
import asyncio
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from ptcgvault.db.database import session_scope
from ptcgvault.db.operations import get_expansion_by_code, upsert_card, upsert_expansion

logger = logging.getLogger(__name__)

CARD_TEXT_FIELDS = (
    "rarity",
    "card_type",
    "subtype",
    "weakness",
    "resistance",
    "illustrator",
    "image_url",
)
CARD_INT_FIELDS = ("hp", "retreat_cost")
CARD_FLAG_FIELDS = ("legal_standard", "legal_expanded", "is_basic_energy")


def load_json_source(source: str) -> list[dict[str, Any]]:
    """
    Load a JSON array from a file path or http(s) URL.

    Raises:
        httpx.HTTPError: If fetching a URL fails
        OSError: If reading a file fails
        ValueError: If the document is not a JSON array
    """
    if source.startswith(("http://", "https://")):
        response = httpx.get(
            source,
            headers={"User-Agent": "PTCGVault/1.0"},
            follow_redirects=True,
            timeout=30.0,
        )
        response.raise_for_status()
        data = response.json()
    else:
        data = json.loads(Path(source).read_text(encoding="utf-8"))

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {source}")
    return data


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_date(value: Any) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning("Ignoring unparseable release date %r", value)
        return None


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def card_fields(record: dict[str, Any]) -> dict[str, Any]:
    """Map a card JSON record to CardDB column values (minus the key columns)."""
    fields: dict[str, Any] = {"name": str(record["name"])}
    for key in CARD_TEXT_FIELDS:
        fields[key] = _optional_text(record.get(key))
    for key in CARD_INT_FIELDS:
        fields[key] = _optional_int(record.get(key))
    for key in CARD_FLAG_FIELDS:
        fields[key] = bool(record.get(key))
    fields["meta_win_rate"] = _optional_float(record.get("meta_win_rate"))
    return fields


async def import_catalog(
    session: AsyncSession,
    sets: list[dict[str, Any]],
    cards: list[dict[str, Any]],
) -> dict[str, int]:
    """
    Upsert expansions, then cards.

    Cards with an unknown set code or missing name/number are skipped.

    Returns:
        Counts of imported expansions, imported cards and skipped cards
    """
    expansion_ids: dict[str, int] = {}

    for record in sets:
        set_code = record.get("set_code")
        name = record.get("name")
        if not set_code or not name:
            logger.warning("Skipping expansion without set_code/name: %s", record)
            continue

        expansion = await upsert_expansion(
            session,
            set_code=str(set_code),
            name=str(name),
            series=_optional_text(record.get("series")),
            release_date=_optional_date(record.get("release_date")),
            total_cards=_optional_int(record.get("total_cards")),
            official_url=_optional_text(record.get("official_url")),
        )
        expansion_ids[expansion.set_code] = expansion.id

    imported_expansions = len(expansion_ids)
    imported = 0
    skipped = 0

    for record in cards:
        set_code = _optional_text(record.get("set_code"))
        if set_code is not None and set_code not in expansion_ids:
            # Cards may reference expansions imported in an earlier run
            existing = await get_expansion_by_code(session, set_code)
            if existing is not None:
                expansion_ids[set_code] = existing.id

        expansion_id = expansion_ids.get(set_code)
        card_number = _optional_text(record.get("card_number"))

        if expansion_id is None or card_number is None or not record.get("name"):
            skipped += 1
            continue

        await upsert_card(session, expansion_id, card_number, card_fields(record))
        imported += 1

    if skipped:
        logger.warning("Skipped %d cards with unknown set or missing name/number", skipped)

    return {"expansions": imported_expansions, "cards": imported, "skipped": skipped}


async def run_import(sets_source: str, cards_source: str) -> dict[str, int]:
    """Load both sources and import them in one transaction."""
    logger.info("Loading catalog from %s and %s", sets_source, cards_source)

    try:
        sets = load_json_source(sets_source)
        cards = load_json_source(cards_source)
    except (httpx.HTTPError, OSError, ValueError) as e:
        logger.error("Failed to load catalog sources: %s", e)
        raise

    async with session_scope() as session:
        results = await import_catalog(session, sets, cards)

    logger.info(
        "Import complete. expansions=%d, cards=%d, skipped=%d",
        results["expansions"],
        results["cards"],
        results["skipped"],
    )
    return results


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Import expansions and cards into the catalog")
    parser.add_argument("sets", help="Path or URL of the sets JSON array")
    parser.add_argument("cards", help="Path or URL of the cards JSON array")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_import(args.sets, args.cards))


if __name__ == "__main__":
    main()
