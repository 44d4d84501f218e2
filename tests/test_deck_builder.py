"""Tests for deck construction and shuffling."""

import random
from collections import Counter

import pytest

from combo_sim.models.card_models import COMBO_PIECE, LAND, NON_LAND, Card, CardKind
from combo_sim.models.simulation_models import SimulationConfig
from combo_sim.services.deck_builder import build_deck, shuffle_deck
from combo_sim.services.rng import trial_rng


def deck_composition(deck: list[Card]) -> dict[str, int]:
    """Count lands, combo pieces and plain non-lands in a deck."""
    counts = Counter(
        "land" if card.is_land else "combo" if card.is_combo else "non_land" for card in deck
    )
    return {
        "land": counts["land"],
        "combo": counts["combo"],
        "non_land": counts["non_land"],
    }


class TestCard:
    """Tests for the Card value type."""

    def test_land_cannot_be_combo(self):
        """Constructing a combo land is rejected."""
        with pytest.raises(ValueError):
            Card(kind=CardKind.LAND, is_combo=True)

    def test_cards_are_immutable(self):
        """Cards cannot be modified after creation."""
        with pytest.raises(AttributeError):
            LAND.is_combo = True

    def test_shared_instances(self):
        """Shared card constants have the expected attributes."""
        assert LAND.is_land and not LAND.is_combo
        assert not NON_LAND.is_land and not NON_LAND.is_combo
        assert not COMBO_PIECE.is_land and COMBO_PIECE.is_combo


class TestBuildDeck:
    """Tests for build_deck."""

    def test_sixty_card_deck_composition(self):
        """A 60-card deck has 24 lands and 4 combo pieces."""
        config = SimulationConfig(
            deck_size=60,
            land_count=24,
            combo_piece_count=4,
            required_combo_pieces=2,
            trial_count=1,
            base_seed=1,
        )
        deck = build_deck(config, random.Random(1))

        assert len(deck) == 60
        assert sum(1 for card in deck if card.kind is CardKind.LAND) == 24
        assert sum(1 for card in deck if card.is_combo) == 4

    @pytest.mark.parametrize(
        "deck_size,lands,combos",
        [(7, 0, 1), (7, 3, 4), (40, 17, 0), (99, 37, 4), (100, 0, 100), (60, 60, 0)],
    )
    def test_composition_invariant(self, deck_size, lands, combos):
        """Every deck has exactly the configured composition."""
        config = SimulationConfig(
            deck_size=deck_size,
            land_count=lands,
            combo_piece_count=combos,
            required_combo_pieces=1,
            trial_count=1,
            base_seed=0,
        )
        for trial_index in range(20):
            deck = build_deck(config, trial_rng(config.base_seed, trial_index))
            assert len(deck) == deck_size
            assert deck_composition(deck) == {
                "land": lands,
                "combo": combos,
                "non_land": deck_size - lands - combos,
            }

    def test_no_combo_lands(self, commander_config):
        """Lands in a built deck are never combo pieces."""
        deck = build_deck(commander_config, random.Random(3))
        assert not any(card.is_land and card.is_combo for card in deck)

    def test_same_stream_same_order(self, commander_config):
        """Same stream state gives the same permutation."""
        first = build_deck(commander_config, trial_rng(42, 9))
        second = build_deck(commander_config, trial_rng(42, 9))
        assert first == second

    def test_deck_is_shuffled(self, commander_config):
        """Lands are not all left at the top of the deck."""
        deck = build_deck(commander_config, trial_rng(42, 0))
        assert deck[: commander_config.land_count] != [LAND] * commander_config.land_count

    def test_fresh_deck_per_call(self, commander_config):
        """Each call returns a new list."""
        rng = random.Random(5)
        assert build_deck(commander_config, rng) is not build_deck(commander_config, rng)


class TestShuffleDeck:
    """Tests for shuffle_deck."""

    def test_preserves_multiset(self):
        """Shuffling only reorders cards."""
        deck = [LAND] * 5 + [NON_LAND] * 3 + [COMBO_PIECE] * 2
        shuffled = shuffle_deck(list(deck), random.Random(11))
        assert deck_composition(shuffled) == deck_composition(deck)

    def test_does_not_use_global_random(self):
        """Reseeding the global generator does not change the result."""
        deck = [LAND] * 10 + [COMBO_PIECE] * 10
        random.seed(1)
        first = shuffle_deck(list(deck), random.Random(99))
        random.seed(2)
        second = shuffle_deck(list(deck), random.Random(99))
        assert first == second

    def test_all_positions_reachable(self):
        """A combo piece can land in every position of a small deck."""
        positions = set()
        for seed in range(500):
            deck = shuffle_deck([COMBO_PIECE] + [LAND] * 7, random.Random(seed))
            positions.add(deck.index(COMBO_PIECE))
        assert positions == set(range(8))
