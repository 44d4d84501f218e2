"""Main FastAPI application entry point."""

from fastapi import FastAPI

from combo_sim.api import sim
from combo_sim.middleware.logging_middleware import RequestLoggingMiddleware

app = FastAPI(
    title="Combo Sim API",
    description="Monte Carlo estimates of draws needed to assemble a combo",
    version="0.1.0",
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(sim.router, prefix="/sim", tags=["simulation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Combo Sim API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
