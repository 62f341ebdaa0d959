"""
Parser for bulk inventory CSV uploads.

Expected layout (header row required, columns by position):

    set_code,card_number,count
    SVI,25,3
    PAL,185,1

A missing count means one copy.
"""

import csv
import logging
from dataclasses import dataclass
from io import StringIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InventoryRow:
    """One CSV line identifying a printed card and how many were added."""

    set_code: str
    card_number: str
    count: int = 1


def _parse_count(value: str) -> int | None:
    value = value.strip()
    if not value:
        return 1
    try:
        count = int(value)
    except ValueError:
        return None
    return count if count > 0 else None


def parse_inventory_csv(text: str) -> list[InventoryRow]:
    """
    Parse inventory CSV text.

    The first line is treated as a header and skipped. Rows missing a set
    code or card number, or with a non-positive or non-integer count, are
    skipped.

    Returns:
        Parsed rows in file order. Duplicates are kept; the caller adds them up.
    """
    rows: list[InventoryRow] = []

    reader = csv.reader(StringIO(text.strip()))
    next(reader, None)

    for line_number, fields in enumerate(reader, start=2):
        if not fields or not any(f.strip() for f in fields):
            continue

        set_code = fields[0].strip()
        card_number = fields[1].strip() if len(fields) > 1 else ""
        count = _parse_count(fields[2]) if len(fields) > 2 else 1

        if not set_code or not card_number or count is None:
            logger.warning("Skipping malformed inventory row %d: %s", line_number, fields)
            continue

        rows.append(InventoryRow(set_code=set_code, card_number=card_number, count=count))

    return rows
