"""Validation of simulation configurations.

Every check here runs before any trial is scheduled. A configuration
that fails validation is never simulated; there is no degraded mode.

Typical usage:
    validator = ConfigValidator()
    result = validator.validate(config)
    if not result.valid:
        # Report result.errors

    # Or fail fast on the first problem
    validate_config(config)
"""

from combo_sim.models.simulation_models import OPENING_HAND_SIZE, SimulationConfig
from combo_sim.models.validation_models import ConfigValidationResult, ValidationIssue

# Below this many trials the averages are too noisy to compare decks
LOW_TRIAL_COUNT_WARNING = 1_000


# =============================================================================
# Exceptions
# =============================================================================


class ConfigValidationError(ValueError):
    """Base exception for invalid simulation configurations."""

    code = "INVALID_CONFIG"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_issue(self) -> ValidationIssue:
        return ValidationIssue(code=self.code, message=self.message)


class DeckTooSmallError(ConfigValidationError):
    """Raised when the deck cannot fill an opening hand."""

    code = "DECK_TOO_SMALL"


class NegativeCountError(ConfigValidationError):
    """Raised when a land or combo piece count is negative."""

    code = "NEGATIVE_COUNT"


class RequiredBelowOneError(ConfigValidationError):
    """Raised when fewer than one combo piece is required."""

    code = "REQUIRED_BELOW_ONE"


class RequiredExceedsAvailableError(ConfigValidationError):
    """Raised when more combo pieces are required than the deck holds."""

    code = "REQUIRED_EXCEEDS_AVAILABLE"


class DeckOvercommittedError(ConfigValidationError):
    """Raised when lands plus combo pieces do not fit in the deck."""

    code = "DECK_OVERCOMMITTED"


class NonPositiveTrialCountError(ConfigValidationError):
    """Raised when the run would simulate no trials."""

    code = "NON_POSITIVE_TRIAL_COUNT"


# =============================================================================
# Validator
# =============================================================================


class ConfigValidator:
    """Checks a SimulationConfig against the deck composition rules."""

    def collect_errors(self, config: SimulationConfig) -> list[ConfigValidationError]:
        """Return every violated rule, in the order they are checked."""
        errors: list[ConfigValidationError] = []

        if config.deck_size < OPENING_HAND_SIZE:
            errors.append(
                DeckTooSmallError(
                    f"deck size ({config.deck_size}) must be at least {OPENING_HAND_SIZE}"
                )
            )
        if config.land_count < 0:
            errors.append(NegativeCountError(f"lands ({config.land_count}) cannot be negative"))
        if config.combo_piece_count < 0:
            errors.append(
                NegativeCountError(f"combos ({config.combo_piece_count}) cannot be negative")
            )
        if config.required_combo_pieces < 1:
            errors.append(
                RequiredBelowOneError(
                    f"required combo pieces ({config.required_combo_pieces}) must be at least 1"
                )
            )
        if config.required_combo_pieces > config.combo_piece_count:
            errors.append(
                RequiredExceedsAvailableError(
                    f"required combo pieces ({config.required_combo_pieces}) cannot exceed "
                    f"total combo pieces ({config.combo_piece_count})"
                )
            )
        if config.land_count + config.combo_piece_count > config.deck_size:
            errors.append(
                DeckOvercommittedError(
                    f"lands ({config.land_count}) + combos ({config.combo_piece_count}) "
                    f"cannot exceed deck size ({config.deck_size})"
                )
            )
        if config.trial_count < 1:
            errors.append(
                NonPositiveTrialCountError(f"runs ({config.trial_count}) must be at least 1")
            )

        return errors

    def validate(self, config: SimulationConfig) -> ConfigValidationResult:
        """Validate a configuration and report all errors and warnings.

        Args:
            config: Configuration to check

        Returns:
            ConfigValidationResult with valid flag, errors, and warnings
        """
        errors = [error.to_issue() for error in self.collect_errors(config)]
        warnings: list[ValidationIssue] = []

        if 1 <= config.trial_count < LOW_TRIAL_COUNT_WARNING:
            warnings.append(
                ValidationIssue(
                    code="LOW_TRIAL_COUNT",
                    message=(
                        f"Only {config.trial_count} trials requested, "
                        "averages will be noisy"
                    ),
                    severity="warning",
                )
            )

        return ConfigValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )


def validate_config(config: SimulationConfig) -> None:
    """Raise the first validation error for a configuration, if any.

    Raises:
        ConfigValidationError: The first rule the configuration violates.
    """
    errors = ConfigValidator().collect_errors(config)
    if errors:
        raise errors[0]
