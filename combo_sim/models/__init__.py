"""Models for the combo draw simulator."""

from combo_sim.models.card_models import COMBO_PIECE, LAND, NON_LAND, Card, CardKind, Deck
from combo_sim.models.simulation_models import (
    OPENING_HAND_SIZE,
    SimulationConfig,
    SimulationResult,
    TrialResult,
)
from combo_sim.models.validation_models import ConfigValidationResult, ValidationIssue

__all__ = [
    # Cards
    "Card",
    "CardKind",
    "Deck",
    "LAND",
    "NON_LAND",
    "COMBO_PIECE",
    # Simulation
    "OPENING_HAND_SIZE",
    "SimulationConfig",
    "SimulationResult",
    "TrialResult",
    # Validation
    "ConfigValidationResult",
    "ValidationIssue",
]
