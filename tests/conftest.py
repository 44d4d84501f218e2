"""Shared pytest fixtures."""

import pytest

from combo_sim.core.settings import clear_settings_cache
from combo_sim.models.simulation_models import SimulationConfig


@pytest.fixture(autouse=True)
def clear_settings():
    """Clear the settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def commander_config():
    """Default 99-card configuration with a fixed seed."""
    return SimulationConfig(
        deck_size=99,
        land_count=37,
        combo_piece_count=4,
        required_combo_pieces=2,
        trial_count=5000,
        base_seed=42,
    )


@pytest.fixture
def small_config():
    """Small configuration that runs quickly."""
    return SimulationConfig(
        deck_size=60,
        land_count=24,
        combo_piece_count=4,
        required_combo_pieces=2,
        trial_count=500,
        base_seed=1,
    )
