from ptcgvault.models.card import CardType, OwnedCard, coerce_signal
from ptcgvault.models.deck import ChosenEntry, DeckAssemblyResult

__all__ = [
    "CardType",
    "ChosenEntry",
    "DeckAssemblyResult",
    "OwnedCard",
    "coerce_signal",
]
