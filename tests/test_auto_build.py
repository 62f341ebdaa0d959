"""Tests for the auto-build selector and assembly."""

import random

import pytest

from ptcgvault.filtering.scored_pool import ScoredCard, score_cards
from ptcgvault.models.card import CardType, OwnedCard
from ptcgvault.services.auto_build import (
    DECK_SIZE,
    MAX_COPIES,
    TYPE_QUOTAS,
    auto_build,
    copy_limit,
    select_cards,
)


def _random_pool(seed: int, size: int) -> list[OwnedCard]:
    """Mixed pool with duplicates, basic energy and partial legality."""
    rng = random.Random(seed)
    definitions: list[OwnedCard] = []
    for i in range(size // 2 + 1):
        card_type = rng.choice(list(CardType))
        definitions.append(
            OwnedCard(
                card_id=i,
                card_type=card_type,
                is_basic_energy=card_type is CardType.ENERGY and rng.random() < 0.5,
                legal_standard=rng.random() < 0.7,
                legal_expanded=rng.random() < 0.9,
                times_in_decks=rng.choice([0, 1, 2, 5, 10]),
                meta_win_rate=round(rng.random(), 2),
            )
        )
    # Repeated entries stand for multiple owned copies of one card
    return [rng.choice(definitions) for _ in range(size)]


def _per_card(chosen) -> dict:
    counts: dict = {}
    for entry in chosen:
        counts[entry.card_id] = counts.get(entry.card_id, 0) + entry.count
    return counts


SEEDS = list(range(12))


class TestDeckRules:
    @pytest.mark.parametrize("seed", SEEDS)
    def test_type_quotas_never_exceeded(self, seed: int) -> None:
        result = auto_build(_random_pool(seed, 200), "Standard", "Quota")

        for card_type, quota in TYPE_QUOTAS.items():
            assert result.type_counts[card_type] <= quota

    @pytest.mark.parametrize("seed", SEEDS)
    def test_copy_caps_respected(self, seed: int) -> None:
        pool = _random_pool(seed, 200)
        by_id = {card.card_id: card for card in pool}

        result = auto_build(pool, "Expanded", "Caps")

        for card_id, count in _per_card(result.chosen).items():
            assert count <= copy_limit(by_id[card_id])
            if not by_id[card_id].is_basic_energy:
                assert count <= MAX_COPIES

    @pytest.mark.parametrize("seed", SEEDS)
    def test_total_never_exceeds_deck_size(self, seed: int) -> None:
        result = auto_build(_random_pool(seed, 400), "Standard", "Total")

        assert result.total_added <= DECK_SIZE
        assert sum(result.type_counts.values()) == result.total_added

    @pytest.mark.parametrize("seed", SEEDS)
    @pytest.mark.parametrize("format_name", ["Standard", "Expanded", "expanded", "Unlimited"])
    def test_only_legal_cards_chosen(self, seed: int, format_name: str) -> None:
        pool = _random_pool(seed, 150)
        by_id = {card.card_id: card for card in pool}

        result = auto_build(pool, format_name, "Legal")

        for entry in result.chosen:
            card = by_id[entry.card_id]
            if format_name == "Expanded":
                assert card.legal_expanded
            else:
                assert card.legal_standard

    @pytest.mark.parametrize("seed", SEEDS)
    def test_deterministic(self, seed: int) -> None:
        pool = _random_pool(seed, 200)

        first = auto_build(pool, "Standard", "A")
        second = auto_build(list(pool), "Standard", "A")

        assert first.chosen == second.chosen
        assert first.type_counts == second.type_counts

    def test_every_entry_has_count_one(self) -> None:
        result = auto_build(_random_pool(3, 200), "Expanded", "Ones")

        assert result.chosen
        assert all(entry.count == 1 for entry in result.chosen)


class TestSelectionOrder:
    def test_higher_score_wins_quota_slot(self, make_card) -> None:
        """When only one slot is left, the higher-scoring card takes it."""
        fillers = [make_card(f"t{i}", times=10) for i in range(29)]
        low = make_card("low", times=1)
        high = make_card("high", times=2)

        result = auto_build([low, *fillers, high], "Standard", "Order")
        chosen_ids = [entry.card_id for entry in result.chosen]

        assert "high" in chosen_ids
        assert "low" not in chosen_ids
        assert result.type_counts[CardType.TRAINER] == TYPE_QUOTAS[CardType.TRAINER]

    def test_ties_keep_input_order(self, make_card) -> None:
        cards = [make_card(name) for name in ("c", "a", "b")]

        result = auto_build(cards, "Standard", "Ties")

        assert [entry.card_id for entry in result.chosen] == ["c", "a", "b"]

    def test_chosen_in_descending_score_order(self, make_card) -> None:
        cards = [
            make_card("mid", times=2),
            make_card("top", times=5),
            make_card("bottom", times=0),
        ]

        result = auto_build(cards, "Standard", "Sorted")

        assert [entry.card_id for entry in result.chosen] == ["top", "mid", "bottom"]

    def test_full_type_skipped_without_blocking_others(self, make_card) -> None:
        energy = [make_card(f"e{i}", CardType.ENERGY, times=9) for i in range(15)]
        pokemon = [make_card(f"p{i}", CardType.POKEMON) for i in range(3)]

        result = auto_build(energy + pokemon, "Standard", "Mixed")

        assert result.type_counts[CardType.ENERGY] == 12
        assert result.type_counts[CardType.POKEMON] == 3
        assert result.total_added == 15

    def test_stops_at_sixty(self, make_card) -> None:
        pool = (
            [make_card(f"p{i}", CardType.POKEMON) for i in range(30)]
            + [make_card(f"t{i}") for i in range(40)]
            + [make_card(f"e{i}", CardType.ENERGY, basic=True) for i in range(20)]
        )

        result = auto_build(pool, "Standard", "Full")

        assert result.total_added == DECK_SIZE
        assert result.type_counts == {
            CardType.POKEMON: 18,
            CardType.TRAINER: 30,
            CardType.ENERGY: 12,
        }


class TestScenarios:
    def test_empty_pool(self) -> None:
        result = auto_build([], "Standard", "Empty")

        assert result.total_added == 0
        assert result.chosen == ()
        assert result.deck_id is None

    def test_undersized_pool(self, make_card) -> None:
        trainers = [make_card(f"t{i}", times=i) for i in range(5)]

        result = auto_build(trainers, "Standard", "Small")

        assert result.total_added == 5
        assert {entry.card_id for entry in result.chosen} == {f"t{i}" for i in range(5)}

    def test_no_eligible_cards(self, make_card) -> None:
        cards = [make_card("x", standard=False)]

        result = auto_build(cards, "Standard", "None")

        assert result.total_added == 0

    def test_duplicate_entries_capped_at_four(self, make_card) -> None:
        pikachu = make_card("pikachu", CardType.POKEMON, times=3)

        result = auto_build([pikachu] * 5, "Standard", "Cap")

        assert result.total_added == 4
        assert result.card_counts() == {"pikachu": 4}

    def test_single_entry_yields_single_copy(self, make_card) -> None:
        result = auto_build([make_card("solo", CardType.POKEMON)], "Standard", "Solo")

        assert result.card_counts() == {"solo": 1}

    def test_basic_energy_exceeds_four_copies(self, make_card) -> None:
        energy = make_card("fire", CardType.ENERGY, basic=True)

        result = auto_build([energy] * 10, "Standard", "Fire")

        assert result.card_counts() == {"fire": 10}

    def test_basic_energy_limited_by_energy_quota(self, make_card) -> None:
        energy = make_card("water", CardType.ENERGY, basic=True)

        result = auto_build([energy] * 20, "Standard", "Water")

        assert result.card_counts() == {"water": 12}

    def test_result_carries_name_and_format(self) -> None:
        result = auto_build([], "Expanded", "My Deck")

        assert result.deck_name == "My Deck"
        assert result.format == "Expanded"


class TestSelectCards:
    def test_returns_type_counts_for_every_type(self) -> None:
        selection = select_cards([])

        assert selection.chosen == ()
        assert selection.type_counts == {card_type: 0 for card_type in CardType}
        assert selection.total == 0

    def test_pure_function_of_input(self, make_card) -> None:
        scored = score_cards([make_card(i, times=i % 3) for i in range(40)])

        assert select_cards(scored) == select_cards(list(scored))

    def test_uses_precomputed_scores(self, make_card) -> None:
        a = ScoredCard(card=make_card("a"), score=1.0)
        b = ScoredCard(card=make_card("b"), score=2.0)

        selection = select_cards([a, b])

        assert [entry.card_id for entry in selection.chosen] == ["b", "a"]
