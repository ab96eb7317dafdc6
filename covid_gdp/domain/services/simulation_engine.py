"""
SIMULATION ENGINE
Explicit Euler integration of the healthy/infected model

RULES:
❌ No randomness, no clock
✅ Fixed step, state recorded before each update
✅ State clamped to non-negative values
"""

from typing import List, Tuple

from covid_gdp.domain.models import SimulationParams, SimulationState


def derivatives(params: SimulationParams, healthy: float, infected: float) -> Tuple[float, float]:
    """Right-hand side of the coupled system at one state."""
    d_healthy = params.a * healthy - params.b * healthy * infected + params.e * infected
    d_infected = params.b * healthy * infected + (params.c - params.d - params.e) * infected
    return d_healthy, d_infected


def simulate(params: SimulationParams) -> List[SimulationState]:
    """
    Integrate the system for `params.steps` steps of size `params.dt`.

    Index 0 is the initial condition. Both derivatives are taken from the
    pre-update state, then each variable is clamped at zero.
    """
    healthy = params.healthy0
    infected = params.infected0
    states: List[SimulationState] = []

    for i in range(params.steps):
        states.append(SimulationState(time=i * params.dt, healthy=healthy, infected=infected))

        d_healthy, d_infected = derivatives(params, healthy, infected)
        healthy = healthy + params.dt * d_healthy
        infected = infected + params.dt * d_infected

        # Overflow to inf - inf yields NaN, which compares false against 0
        if not healthy >= 0:
            healthy = 0.0
        if not infected >= 0:
            infected = 0.0

    return states
