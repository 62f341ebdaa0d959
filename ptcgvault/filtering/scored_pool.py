"""
Card scoring for auto-build.

score = 0.5 * times_in_decks + 0.3 * meta_win_rate + 0.2 * synergy

Synergy is a small fixed bonus by card role. Scores carry no secondary
sort key; ordering of equal scores is left to the selector.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ptcgvault.models.card import CardType, OwnedCard

FREQUENCY_WEIGHT = 0.5
WIN_RATE_WEIGHT = 0.3
SYNERGY_WEIGHT = 0.2

TRAINER_BONUS = 0.15
BASIC_ENERGY_BONUS = 0.05
POKEMON_BONUS = 0.03


@dataclass(frozen=True, slots=True)
class ScoredCard:
    """An owned card with its desirability score."""

    card: OwnedCard
    score: float

    @property
    def card_id(self) -> int | str:
        return self.card.card_id

    @property
    def card_type(self) -> CardType:
        return self.card.card_type


def synergy_bonus(card: OwnedCard) -> float:
    """
    Role bonus for a card.

    Returns:
        0.15 - Trainer
        0.05 - Basic energy
        0.03 - Pokemon (never basic energy)
        0.0  - Special energy
    """
    if card.card_type is CardType.TRAINER:
        return TRAINER_BONUS
    if card.card_type is CardType.ENERGY:
        return BASIC_ENERGY_BONUS if card.is_basic_energy else 0.0
    if card.card_type is CardType.POKEMON:
        return 0.0 if card.is_basic_energy else POKEMON_BONUS
    raise ValueError(f"Unhandled card type: {card.card_type!r}")


def score_card(card: OwnedCard) -> float:
    """Compute the weighted score for one card."""
    return (
        FREQUENCY_WEIGHT * card.times_in_decks
        + WIN_RATE_WEIGHT * card.meta_win_rate
        + SYNERGY_WEIGHT * synergy_bonus(card)
    )


def score_cards(cards: Iterable[OwnedCard]) -> list[ScoredCard]:
    """Annotate each card with its score, keeping input order."""
    return [ScoredCard(card=card, score=score_card(card)) for card in cards]
