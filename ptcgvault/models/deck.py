from dataclasses import dataclass, field

from ptcgvault.models.card import CardType


@dataclass(frozen=True, slots=True)
class ChosenEntry:
    """A single selection made by the auto-builder."""

    card_id: int | str
    count: int = 1


@dataclass(frozen=True)
class DeckAssemblyResult:
    """
    Output of an auto-build run, ready to be persisted.

    deck_id stays None until the storage layer creates the deck record.
    """

    deck_name: str
    format: str
    chosen: tuple[ChosenEntry, ...] = ()
    type_counts: dict[CardType, int] = field(default_factory=dict)
    deck_id: int | None = None

    @property
    def total_added(self) -> int:
        """Number of selections made."""
        return len(self.chosen)

    def card_counts(self) -> dict[int | str, int]:
        """Sum counts per card, in order of first selection."""
        counts: dict[int | str, int] = {}
        for entry in self.chosen:
            counts[entry.card_id] = counts.get(entry.card_id, 0) + entry.count
        return counts
