"""Simulation API endpoints."""

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from combo_sim.core.logging_config import get_logger
from combo_sim.middleware.logging_middleware import BASE_SEED_HEADER, TRIAL_COUNT_HEADER
from combo_sim.models.simulation_models import (
    DEFAULT_COMBO_PIECE_COUNT,
    DEFAULT_DECK_SIZE,
    DEFAULT_LAND_COUNT,
    DEFAULT_REQUIRED_COMBO_PIECES,
    SimulationConfig,
    SimulationResult,
)
from combo_sim.models.validation_models import ConfigValidationResult
from combo_sim.services.simulator import run_simulation
from combo_sim.services.validators.config_validator import (
    ConfigValidationError,
    ConfigValidator,
)

router = APIRouter()
logger = get_logger(__name__)

# Keeps HTTP requests interactive; the CLI defaults to far more trials
API_DEFAULT_TRIAL_COUNT = 100_000


class SimulationRequest(BaseModel):
    """Request model for a simulation run."""

    deck_size: int = DEFAULT_DECK_SIZE
    land_count: int = DEFAULT_LAND_COUNT
    combo_piece_count: int = DEFAULT_COMBO_PIECE_COUNT
    required_combo_pieces: int = DEFAULT_REQUIRED_COMBO_PIECES
    trial_count: int = API_DEFAULT_TRIAL_COUNT
    base_seed: int | None = Field(default=None, description="Omit to seed from the clock")
    max_workers: int | None = Field(default=None, ge=1, description="Worker processes")

    def to_config(self) -> SimulationConfig:
        values = self.model_dump(exclude={"max_workers", "base_seed"})
        if self.base_seed is not None:
            values["base_seed"] = self.base_seed
        return SimulationConfig(**values)


@router.post("/validate")
async def validate_simulation(request: SimulationRequest) -> ConfigValidationResult:
    """Check a configuration without running it."""
    return ConfigValidator().validate(request.to_config())


@router.post("/run")
async def run_simulation_endpoint(
    request: SimulationRequest,
    response: Response,
) -> SimulationResult:
    """Run a simulation and return aggregate statistics."""
    config = request.to_config()
    response.headers[TRIAL_COUNT_HEADER] = str(config.trial_count)
    response.headers[BASE_SEED_HEADER] = str(config.base_seed)
    try:
        # CPU-bound, keep it off the event loop
        return await run_in_threadpool(
            run_simulation, config, max_workers=request.max_workers
        )
    except ConfigValidationError as e:
        logger.warning(
            f"Rejected simulation config: {e}",
            extra={"extra_data": {"code": e.code}},
        )
        raise HTTPException(
            status_code=422,
            detail={"code": e.code, "message": e.message},
        )
