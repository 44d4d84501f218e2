"""Environment-based configuration for the combo draw simulator.

Values are read from environment variables (optionally via a .env file)
and fall back to the defaults of the original command-line tool.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from combo_sim.models.simulation_models import (
    DEFAULT_COMBO_PIECE_COUNT,
    DEFAULT_DECK_SIZE,
    DEFAULT_LAND_COUNT,
    DEFAULT_REQUIRED_COMBO_PIECES,
    DEFAULT_TRIAL_COUNT,
    SimulationConfig,
)
from combo_sim.services.scheduler import DEFAULT_BATCH_SIZE

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class SimulatorSettings:
    """Default run parameters and runtime tuning.

    Attributes:
        deck_size: Default total cards per deck.
        land_count: Default lands per deck.
        combo_piece_count: Default combo pieces per deck.
        required_combo_pieces: Default pieces needed to win.
        trial_count: Default number of trials.
        base_seed: Fixed seed, or None to derive one from the clock.
        max_workers: Worker processes, or None for one per CPU.
        batch_size: Trials handed to a worker at a time.
        log_level: Logging level name.
        log_dir: Directory for log files, or None for the default.
    """

    deck_size: int = DEFAULT_DECK_SIZE
    land_count: int = DEFAULT_LAND_COUNT
    combo_piece_count: int = DEFAULT_COMBO_PIECE_COUNT
    required_combo_pieces: int = DEFAULT_REQUIRED_COMBO_PIECES
    trial_count: int = DEFAULT_TRIAL_COUNT
    base_seed: int | None = None
    max_workers: int | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    log_level: str = "INFO"
    log_dir: str | None = None

    def to_config(self, **overrides) -> SimulationConfig:
        """Build a SimulationConfig from these settings.

        Keyword overrides that are None are ignored, so CLI flags that
        were not given fall back to the settings.
        """
        values = {
            "deck_size": self.deck_size,
            "land_count": self.land_count,
            "combo_piece_count": self.combo_piece_count,
            "required_combo_pieces": self.required_combo_pieces,
            "trial_count": self.trial_count,
        }
        if self.base_seed is not None:
            values["base_seed"] = self.base_seed
        values.update({key: value for key, value in overrides.items() if value is not None})
        return SimulationConfig(**values)


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


@lru_cache(maxsize=1)
def get_settings() -> SimulatorSettings:
    """Load simulator settings from environment variables.

    Environment variables:
        COMBO_SIM_DECK_SIZE, COMBO_SIM_LANDS, COMBO_SIM_COMBOS,
        COMBO_SIM_REQUIRED, COMBO_SIM_RUNS: Run parameter defaults
        COMBO_SIM_SEED: Fixed base seed (0 or unset uses the clock)
        COMBO_SIM_WORKERS: Worker processes (default: one per CPU)
        COMBO_SIM_BATCH_SIZE: Trials per worker batch
        COMBO_SIM_LOG_LEVEL: Logging level (default: INFO)
        COMBO_SIM_LOG_DIR: Log file directory

    Returns:
        SimulatorSettings from environment.
    """
    seed = _optional_int("COMBO_SIM_SEED")
    return SimulatorSettings(
        deck_size=int(os.getenv("COMBO_SIM_DECK_SIZE", str(DEFAULT_DECK_SIZE))),
        land_count=int(os.getenv("COMBO_SIM_LANDS", str(DEFAULT_LAND_COUNT))),
        combo_piece_count=int(os.getenv("COMBO_SIM_COMBOS", str(DEFAULT_COMBO_PIECE_COUNT))),
        required_combo_pieces=int(
            os.getenv("COMBO_SIM_REQUIRED", str(DEFAULT_REQUIRED_COMBO_PIECES))
        ),
        trial_count=int(os.getenv("COMBO_SIM_RUNS", str(DEFAULT_TRIAL_COUNT))),
        base_seed=seed or None,
        max_workers=_optional_int("COMBO_SIM_WORKERS"),
        batch_size=int(os.getenv("COMBO_SIM_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
        log_level=os.getenv("COMBO_SIM_LOG_LEVEL", "INFO"),
        log_dir=os.getenv("COMBO_SIM_LOG_DIR") or None,
    )


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
