"""Parallel trial scheduling.

Trial indices are split into contiguous batches and fanned out to a
process pool. At most a few batches per worker are in flight at once;
a new batch is only submitted after an earlier one completes. Results
are streamed back to the caller in completion order, one TrialResult at
a time, so aggregation starts before the run finishes.

Every trial derives its own random stream from (base_seed, index), so
the results do not depend on worker count, batch size or completion
order.
"""

import os
from collections.abc import Iterator
from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait

from combo_sim.core.logging_config import get_logger
from combo_sim.models.simulation_models import SimulationConfig, TrialResult
from combo_sim.services.deck_builder import build_deck
from combo_sim.services.rng import trial_rng
from combo_sim.services.trial_runner import run_trial

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 10_000
# Batches allowed in flight per worker before submission blocks
IN_FLIGHT_PER_WORKER = 2


def run_trial_batch(config: SimulationConfig, start: int, stop: int) -> list[TrialResult]:
    """Run trials ``start`` .. ``stop - 1``.

    This is the function executed inside worker processes.
    """
    results = []
    for trial_index in range(start, stop):
        rng = trial_rng(config.base_seed, trial_index)
        deck = build_deck(config, rng)
        results.append(run_trial(deck, config.required_combo_pieces))
    return results


def resolve_worker_count(max_workers: int | None = None) -> int:
    """Return the pool size, defaulting to the available CPUs."""
    if max_workers is None:
        return os.cpu_count() or 1
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")
    return max_workers


def iter_batches(trial_count: int, batch_size: int) -> Iterator[tuple[int, int]]:
    """Yield (start, stop) index ranges covering 0 .. trial_count - 1 exactly once."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    for start in range(0, trial_count, batch_size):
        yield start, min(start + batch_size, trial_count)


class TrialScheduler:
    """Distributes trials across a pool of worker processes.

    Typical usage:
        scheduler = TrialScheduler(max_workers=4)
        for result in scheduler.iter_results(config):
            aggregator.add(result)
    """

    def __init__(
        self,
        max_workers: int | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.max_workers = resolve_worker_count(max_workers)
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.batch_size = batch_size

    def plan(self, trial_count: int) -> tuple[int, int]:
        """Choose (workers, batch_size) for a run.

        Small runs get smaller batches so every worker has something to
        do, and the pool never has more workers than batches.
        """
        per_worker = -(-trial_count // self.max_workers)
        batch_size = max(1, min(self.batch_size, per_worker))
        batch_count = -(-trial_count // batch_size)
        return max(1, min(self.max_workers, batch_count)), batch_size

    def iter_results(self, config: SimulationConfig) -> Iterator[TrialResult]:
        """Run every trial of a configuration, yielding results as they complete.

        Args:
            config: Validated simulation configuration

        Yields:
            One TrialResult per trial index, in no particular order
        """
        workers, batch_size = self.plan(config.trial_count)
        batches = iter_batches(config.trial_count, batch_size)

        logger.debug(
            f"Scheduling {config.trial_count} trials on {workers} workers",
            extra={"extra_data": {"workers": workers, "batch_size": batch_size}},
        )

        if workers == 1:
            for start, stop in batches:
                results = run_trial_batch(config, start, stop)
                self._log_batch(start, stop, config.trial_count)
                yield from results
            return

        max_in_flight = workers * IN_FLIGHT_PER_WORKER
        with ProcessPoolExecutor(max_workers=workers) as executor:
            pending: dict[Future, tuple[int, int]] = {}
            for start, stop in batches:
                if len(pending) >= max_in_flight:
                    yield from self._drain_completed(pending, config.trial_count)
                future = executor.submit(run_trial_batch, config, start, stop)
                pending[future] = (start, stop)

            while pending:
                yield from self._drain_completed(pending, config.trial_count)

    def _drain_completed(
        self,
        pending: dict[Future, tuple[int, int]],
        trial_count: int,
    ) -> Iterator[TrialResult]:
        """Wait for at least one batch and yield the results of every finished one."""
        done, _ = wait(pending, return_when=FIRST_COMPLETED)
        for future in done:
            start, stop = pending.pop(future)
            results = future.result()
            self._log_batch(start, stop, trial_count)
            yield from results

    def _log_batch(self, start: int, stop: int, trial_count: int) -> None:
        logger.debug(
            f"Batch complete: trials {start}..{stop - 1} of {trial_count}",
            extra={"extra_data": {"batch_start": start, "batch_stop": stop}},
        )
