"""Deck construction and shuffling."""

import random

from combo_sim.models.card_models import COMBO_PIECE, LAND, NON_LAND, Deck
from combo_sim.models.simulation_models import SimulationConfig


def build_deck(config: SimulationConfig, rng: random.Random) -> Deck:
    """Build a fresh deck for one trial and shuffle it.

    The deck holds exactly ``land_count`` lands, ``combo_piece_count``
    combo pieces and non-combo non-lands for the rest. Construction order
    does not matter since the deck is shuffled before it is returned.

    Args:
        config: Validated simulation configuration
        rng: The trial's own random stream

    Returns:
        Shuffled deck, top card first
    """
    deck = (
        [LAND] * config.land_count
        + [NON_LAND] * config.plain_non_land_count
        + [COMBO_PIECE] * config.combo_piece_count
    )
    return shuffle_deck(deck, rng)


def shuffle_deck(deck: Deck, rng: random.Random) -> Deck:
    """Shuffle a deck in place with the given stream and return it."""
    rng.shuffle(deck)
    return deck

