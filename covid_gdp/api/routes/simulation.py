"""
Simulation API Routes
Euler integration of the healthy/infected model
"""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from covid_gdp.domain.models import SimulationParams
from covid_gdp.domain.services.simulation_engine import simulate

router = APIRouter()

_DEFAULTS = SimulationParams()


class SimulationRequest(BaseModel):
    a: float = _DEFAULTS.a
    b: float = _DEFAULTS.b
    c: float = _DEFAULTS.c
    d: float = _DEFAULTS.d
    e: float = _DEFAULTS.e
    healthy0: float = Field(_DEFAULTS.healthy0, ge=0)
    infected0: float = Field(_DEFAULTS.infected0, ge=0)
    steps: int = Field(_DEFAULTS.steps, gt=0, le=100_000)
    dt: float = Field(_DEFAULTS.dt, gt=0)


class SimulationStateOut(BaseModel):
    time: float
    healthy: float
    infected: float


@router.post("", response_model=List[SimulationStateOut])
async def run_simulation(payload: SimulationRequest):
    """Trajectory of `steps` states, index 0 being the initial condition."""
    states = simulate(SimulationParams(**payload.model_dump()))
    return [
        SimulationStateOut(time=s.time, healthy=s.healthy, infected=s.infected)
        for s in states
    ]
