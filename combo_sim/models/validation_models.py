"""Pydantic models for configuration validation results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation finding.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        severity: error blocks the run, warning is advisory
    """

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    severity: Literal["error", "warning"] = Field(
        default="error",
        description="error = blocks run, warning = advisory",
    )


class ConfigValidationResult(BaseModel):
    """Complete validation result for a simulation configuration."""

    valid: bool = Field(description="True if the configuration can be simulated")
    errors: list[ValidationIssue] = Field(
        default_factory=list,
        description="Blocking validation errors",
    )
    warnings: list[ValidationIssue] = Field(
        default_factory=list,
        description="Advisory warnings",
    )
