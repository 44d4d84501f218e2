"""Streaming aggregation of trial results.

The aggregator is the single consumer of the trial stream. Only it
touches the running totals, so no locking is needed even though the
results come from many worker processes.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from combo_sim.models.simulation_models import SimulationConfig, SimulationResult, TrialResult


@dataclass
class AggregateResults:
    """Running totals for a simulation run.

    Attributes:
        trials: Trials consumed so far.
        draws_to_win_total: Sum of draws-to-win.
        opening_hand_wins: Trials won in the opening hand.
        opening_lands_total: Sum of lands in opening hands.
    """

    trials: int = 0
    draws_to_win_total: int = 0
    opening_hand_wins: int = 0
    opening_lands_total: int = 0

    def mean_draws_to_win(self) -> float:
        return self.draws_to_win_total / self.trials if self.trials else 0.0

    def opening_hand_win_rate(self) -> float:
        return self.opening_hand_wins / self.trials if self.trials else 0.0

    def mean_opening_lands(self) -> float:
        return self.opening_lands_total / self.trials if self.trials else 0.0


class ResultAggregator:
    """Accumulates TrialResults in arrival order and finalizes statistics."""

    def __init__(self) -> None:
        self.totals = AggregateResults()

    def add(self, result: TrialResult) -> None:
        """Fold a single trial into the running totals."""
        totals = self.totals
        totals.trials += 1
        totals.draws_to_win_total += result.draws_to_win
        totals.opening_lands_total += result.opening_hand_lands
        if result.opening_hand_win:
            totals.opening_hand_wins += 1

    def consume(self, results: Iterable[TrialResult]) -> "ResultAggregator":
        """Fold every result from a stream into the totals."""
        for result in results:
            self.add(result)
        return self

    def finalize(self, config: SimulationConfig | None = None) -> SimulationResult:
        """Compute derived statistics from the totals.

        All means are zero when no trials were consumed.

        Args:
            config: Configuration of the run, echoed into the result

        Returns:
            SimulationResult for the run
        """
        totals = self.totals
        return SimulationResult(
            trials=totals.trials,
            draws_to_win_total=totals.draws_to_win_total,
            opening_hand_wins=totals.opening_hand_wins,
            opening_lands_total=totals.opening_lands_total,
            mean_draws_to_win=totals.mean_draws_to_win(),
            opening_hand_win_rate=totals.opening_hand_win_rate(),
            mean_opening_lands=totals.mean_opening_lands(),
            base_seed=config.base_seed if config else None,
            config=config,
        )
