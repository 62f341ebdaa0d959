"""
Auto-build deck assembly.

Builds a deck of up to 60 cards from a user's owned cards:
1. Keep cards legal in the requested format
2. Score each card by frequency, win rate and role bonus
3. Walk cards by descending score once, adding one copy per entry while
   type quotas and per-card copy limits allow
4. Stop as soon as the deck reaches 60 cards

Pure computation; persistence is the caller's job.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ptcgvault.filtering.eligibility import filter_eligible
from ptcgvault.filtering.scored_pool import ScoredCard, score_cards
from ptcgvault.models.card import CardType, OwnedCard
from ptcgvault.models.deck import ChosenEntry, DeckAssemblyResult

logger = logging.getLogger(__name__)

DECK_SIZE = 60

# Per-type targets for a 60-card deck
TYPE_QUOTAS: dict[CardType, int] = {
    CardType.POKEMON: 18,
    CardType.TRAINER: 30,
    CardType.ENERGY: 12,
}

MAX_COPIES = 4
MAX_BASIC_ENERGY_COPIES = 60

DEFAULT_DECK_NAME = "Auto Deck"


@dataclass(frozen=True)
class Selection:
    """Selector output: chosen entries plus per-type totals."""

    chosen: tuple[ChosenEntry, ...]
    type_counts: dict[CardType, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.type_counts.values())


def copy_limit(card: OwnedCard) -> int:
    """Maximum copies of a card allowed in one deck."""
    return MAX_BASIC_ENERGY_COPIES if card.is_basic_energy else MAX_COPIES


def select_cards(scored_cards: Iterable[ScoredCard]) -> Selection:
    """
    Greedily choose cards in descending score order.

    Single pass, no backtracking. The sort is stable so equal scores keep
    their input order, which makes the result a pure function of the input.
    """
    ranked = sorted(scored_cards, key=lambda scored: scored.score, reverse=True)

    type_counts = {card_type: 0 for card_type in CardType}
    copies: dict[int | str, int] = {}
    chosen: list[ChosenEntry] = []

    for scored in ranked:
        card = scored.card

        if type_counts[card.card_type] >= TYPE_QUOTAS[card.card_type]:
            continue

        if copies.get(card.card_id, 0) >= copy_limit(card):
            continue

        chosen.append(ChosenEntry(card_id=card.card_id, count=1))
        copies[card.card_id] = copies.get(card.card_id, 0) + 1
        type_counts[card.card_type] += 1

        if sum(type_counts.values()) >= DECK_SIZE:
            break

    return Selection(chosen=tuple(chosen), type_counts=type_counts)


def auto_build(
    owned_cards: Sequence[OwnedCard],
    format_name: str,
    deck_name: str = DEFAULT_DECK_NAME,
) -> DeckAssemblyResult:
    """
    Assemble a deck from owned cards for a format.

    Args:
        owned_cards: Owned cards with legality flags and statistics
        format_name: "Expanded" selects expanded legality; anything else is Standard
        deck_name: Label passed through to storage

    Returns:
        DeckAssemblyResult with deck_id unset. Small or empty pools give
        a short or empty deck rather than an error.
    """
    eligible = filter_eligible(owned_cards, format_name)
    selection = select_cards(score_cards(eligible))

    logger.info(
        "AUTO_BUILD: format=%s, owned=%d, eligible=%d, chosen=%d, by_type=%s",
        format_name,
        len(owned_cards),
        len(eligible),
        selection.total,
        {card_type.value: count for card_type, count in selection.type_counts.items()},
    )

    return DeckAssemblyResult(
        deck_name=deck_name,
        format=format_name,
        chosen=selection.chosen,
        type_counts=dict(selection.type_counts),
    )
