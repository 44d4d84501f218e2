"""Command-line entry point for the combo draw simulator."""

import argparse
import sys

from combo_sim.core.logging_config import get_logger, setup_logging
from combo_sim.core.settings import get_settings
from combo_sim.models.simulation_models import SimulationResult, seed_from_clock
from combo_sim.services.scheduler import TrialScheduler
from combo_sim.services.simulator import run_simulation
from combo_sim.services.validators.config_validator import (
    ConfigValidationError,
    validate_config,
)

logger = get_logger(__name__)

EXIT_INVALID_CONFIG = 2
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="combo-sim",
        description=(
            "Monte Carlo simulation of how many draws it takes to assemble "
            "a combo from a deck of lands and non-lands"
        ),
    )
    parser.add_argument(
        "--deck-size", type=int, default=settings.deck_size, help="number of cards in the deck"
    )
    parser.add_argument(
        "--lands", type=int, default=settings.land_count, help="number of lands in the deck"
    )
    parser.add_argument(
        "--combos",
        type=int,
        default=settings.combo_piece_count,
        help="number of combo pieces in the deck",
    )
    parser.add_argument(
        "--required",
        type=int,
        default=settings.required_combo_pieces,
        help="number of combo pieces required for a win",
    )
    parser.add_argument(
        "--runs", type=int, default=settings.trial_count, help="number of simulations to run"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="random seed (0 uses current time, default: COMBO_SIM_SEED or current time)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.max_workers,
        help="worker processes (default: one per CPU)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.batch_size,
        help="trials handed to a worker at a time",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level.upper(),
        help="logging level",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="also write JSON logs to the log directory",
    )
    parser.add_argument("--json", action="store_true", help="print results as JSON")
    return parser


def format_results(result: SimulationResult) -> str:
    """Render results as human-readable text."""
    lines = [
        "📊 results:",
        f"  trials:                {result.trials:,}",
        f"  avg draws to win:      {result.mean_draws_to_win:.4f}",
        f"  opening hand wins:     {result.opening_hand_wins:,}",
        f"  opening hand win rate: {result.opening_hand_win_rate:.4%}",
        f"  avg opening lands:     {result.mean_opening_lands:.4f}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the simulator from the command line.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(
        log_level=args.log_level,
        enable_file=args.log_file,
        log_dir=settings.log_dir,
    )

    if not args.json:
        print("🔮 combo-sim booting up")

    config = settings.to_config(
        deck_size=args.deck_size,
        land_count=args.lands,
        combo_piece_count=args.combos,
        required_combo_pieces=args.required,
        trial_count=args.runs,
        base_seed=seed_from_clock() if args.seed == 0 else args.seed,
    )

    try:
        validate_config(config)
    except ConfigValidationError as e:
        logger.error(f"Invalid config: {e}", extra={"extra_data": {"code": e.code}})
        print(f"invalid config: {e}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    if not args.json:
        print(f"🎲 RNG seed: {config.base_seed}")

    try:
        scheduler = TrialScheduler(max_workers=args.workers, batch_size=args.batch_size)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    result = run_simulation(config, scheduler=scheduler)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(format_results(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
