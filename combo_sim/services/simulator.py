"""Combo draw simulation engine.

Validates a configuration, runs every trial through the scheduler and
folds the results into final statistics.
"""

import time

from combo_sim.core.logging_config import get_logger
from combo_sim.models.simulation_models import SimulationConfig, SimulationResult
from combo_sim.services.aggregator import ResultAggregator
from combo_sim.services.scheduler import DEFAULT_BATCH_SIZE, TrialScheduler
from combo_sim.services.validators.config_validator import validate_config

logger = get_logger(__name__)


def run_simulation(
    config: SimulationConfig,
    max_workers: int | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    scheduler: TrialScheduler | None = None,
) -> SimulationResult:
    """Run a Monte Carlo simulation of draws needed to assemble a combo.

    Args:
        config: Simulation configuration
        max_workers: Worker processes (default: one per CPU)
        batch_size: Trials handed to a worker at a time
        scheduler: Prebuilt scheduler, used instead of max_workers and batch_size

    Returns:
        SimulationResult with aggregate statistics

    Raises:
        ConfigValidationError: If the configuration is invalid. No trial
            is run in that case.
    """
    validate_config(config)

    if scheduler is None:
        scheduler = TrialScheduler(max_workers=max_workers, batch_size=batch_size)
    aggregator = ResultAggregator()

    logger.info(
        f"Starting simulation of {config.trial_count} trials",
        extra={
            "extra_data": {
                "config": config.model_dump(),
                "max_workers": scheduler.max_workers,
            }
        },
    )

    start_time = time.perf_counter()
    for result in scheduler.iter_results(config):
        aggregator.add(result)
    elapsed = time.perf_counter() - start_time

    simulation_result = aggregator.finalize(config)

    logger.info(
        f"Simulation complete: {simulation_result.trials} trials in {elapsed:.2f}s",
        extra={
            "extra_data": {
                "trials": simulation_result.trials,
                "elapsed_seconds": round(elapsed, 3),
                "trials_per_second": round(simulation_result.trials / elapsed, 1)
                if elapsed > 0
                else None,
                "mean_draws_to_win": simulation_result.mean_draws_to_win,
            }
        },
    )

    return simulation_result
