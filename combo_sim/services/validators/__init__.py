"""Validators for the combo draw simulator.

Pure Python validation of configurations before any simulation work.
"""

from combo_sim.services.validators.config_validator import (
    ConfigValidationError,
    ConfigValidator,
    DeckOvercommittedError,
    DeckTooSmallError,
    NegativeCountError,
    NonPositiveTrialCountError,
    RequiredBelowOneError,
    RequiredExceedsAvailableError,
    validate_config,
)

__all__ = [
    "ConfigValidator",
    "validate_config",
    "ConfigValidationError",
    "DeckTooSmallError",
    "NegativeCountError",
    "RequiredBelowOneError",
    "RequiredExceedsAvailableError",
    "DeckOvercommittedError",
    "NonPositiveTrialCountError",
]
