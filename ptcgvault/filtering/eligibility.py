"""
Format eligibility filter.

Only the exact format name "Expanded" selects expanded legality. Every
other value, including unrecognized names, falls back to Standard rules.
Format names are not validated here.
"""

from collections.abc import Iterable

from ptcgvault.models.card import OwnedCard

EXPANDED_FORMAT = "Expanded"
STANDARD_FORMAT = "Standard"


def is_expanded_format(format_name: str) -> bool:
    """True only for the case-sensitive name "Expanded"."""
    return format_name == EXPANDED_FORMAT


def is_legal(card: OwnedCard, format_name: str) -> bool:
    """Check a single card against the format's legality flag."""
    if is_expanded_format(format_name):
        return card.legal_expanded
    return card.legal_standard


def filter_eligible(owned_cards: Iterable[OwnedCard], format_name: str) -> list[OwnedCard]:
    """
    Narrow owned cards to those legal in the requested format.

    Input order is preserved.
    """
    return [card for card in owned_cards if is_legal(card, format_name)]
