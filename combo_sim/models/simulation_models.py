"""Models for the Monte Carlo combo draw simulation.

This module defines the configuration, per-trial result and final
result schemas for the simulator. The configuration and final result
are pydantic models so they can be validated and serialized by the CLI
and HTTP front ends; the per-trial result is a small frozen dataclass
because millions of them cross process boundaries per run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# Cards dealt before the first draw step
OPENING_HAND_SIZE = 7

DEFAULT_DECK_SIZE = 99
DEFAULT_LAND_COUNT = 37
DEFAULT_COMBO_PIECE_COUNT = 4
DEFAULT_REQUIRED_COMBO_PIECES = 2
DEFAULT_TRIAL_COUNT = 10_000_000


def seed_from_clock() -> int:
    """Return a base seed derived from the current time."""
    return time.time_ns()


class SimulationConfig(BaseModel):
    """Immutable parameters for a simulation run.

    Only types are enforced here. Semantic checks (deck too small,
    overcommitted deck, ...) live in ConfigValidator so each failure
    maps to a named error.
    """

    model_config = ConfigDict(frozen=True)

    deck_size: int = Field(default=DEFAULT_DECK_SIZE, description="Total cards per simulated deck")
    land_count: int = Field(default=DEFAULT_LAND_COUNT, description="Lands in the deck")
    combo_piece_count: int = Field(
        default=DEFAULT_COMBO_PIECE_COUNT,
        description="Combo pieces among the non-lands",
    )
    required_combo_pieces: int = Field(
        default=DEFAULT_REQUIRED_COMBO_PIECES,
        description="Combo pieces needed in hand to win",
    )
    trial_count: int = Field(default=DEFAULT_TRIAL_COUNT, description="Number of independent trials")
    base_seed: int = Field(
        default_factory=seed_from_clock,
        description="Seed for every trial's random stream",
    )

    @property
    def plain_non_land_count(self) -> int:
        return self.deck_size - self.land_count - self.combo_piece_count

    @property
    def library_size(self) -> int:
        """Cards left in the library after the opening hand is dealt."""
        return self.deck_size - OPENING_HAND_SIZE


@dataclass(frozen=True)
class TrialResult:
    """Outcome of a single simulated game.

    Attributes:
        draws_to_win: Draws after the opening hand needed to assemble the
            combo, or the full library size if it was never assembled.
        opening_hand_win: True if the opening hand already held the combo.
        opening_hand_lands: Lands among the opening hand.
    """

    draws_to_win: int
    opening_hand_win: bool
    opening_hand_lands: int


class SimulationResult(BaseModel):
    """Finalized aggregate statistics from a simulation run."""

    trials: int = Field(ge=0, description="Number of trials aggregated")
    draws_to_win_total: int = Field(ge=0, description="Sum of draws-to-win over all trials")
    opening_hand_wins: int = Field(ge=0, description="Trials won in the opening hand")
    opening_lands_total: int = Field(ge=0, description="Sum of opening hand lands over all trials")
    mean_draws_to_win: float = Field(ge=0.0, description="Average draws after the opening hand")
    opening_hand_win_rate: float = Field(
        ge=0.0,
        le=1.0,
        description="Share of trials won in the opening hand",
    )
    mean_opening_lands: float = Field(
        ge=0.0,
        le=float(OPENING_HAND_SIZE),
        description="Average lands in the opening hand",
    )
    base_seed: int | None = Field(default=None, description="Base seed the run used")
    config: SimulationConfig | None = Field(
        default=None,
        description="Configuration the run used",
    )
