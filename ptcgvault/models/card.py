import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CardType(str, Enum):
    """Top-level card category. Values match the catalog's stored strings."""

    POKEMON = "Pokemon"
    TRAINER = "Trainer"
    ENERGY = "Energy"


def coerce_signal(value: Any) -> float:
    """
    Convert a statistics signal to a float.

    Missing, non-numeric and NaN values become 0.0 so scoring degrades
    to the synergy bonus alone when statistics are unavailable.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


@dataclass(frozen=True, slots=True)
class OwnedCard:
    """
    One owned card as seen by the auto-builder.

    Attributes:
        card_id: Catalog identifier of the card definition
        card_type: Pokemon, Trainer or Energy
        is_basic_energy: Basic energy may be played in unlimited copies
        legal_standard: Card is legal in the Standard format
        legal_expanded: Card is legal in the Expanded format
        times_in_decks: How often the card appears in decks (0 when unknown)
        meta_win_rate: Historical win rate in [0, 1] (0 when unknown)
    """

    card_id: int | str
    card_type: CardType
    is_basic_energy: bool = False
    legal_standard: bool = False
    legal_expanded: bool = False
    times_in_decks: float = field(default=0.0)
    meta_win_rate: float = field(default=0.0)

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "card_type", CardType(self.card_type))
        object.__setattr__(self, "times_in_decks", coerce_signal(self.times_in_decks))
        object.__setattr__(self, "meta_win_rate", coerce_signal(self.meta_win_rate))
