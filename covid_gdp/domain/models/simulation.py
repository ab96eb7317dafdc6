from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationParams:
    """
    Inputs of the healthy/infected predator-prey model.

    d(healthy)/dt  = a*healthy - b*healthy*infected + e*infected
    d(infected)/dt = b*healthy*infected + (c - d - e)*infected
    """
    a: float = 0.012
    b: float = 0.01
    c: float = 0.0001
    d: float = 0.02
    e: float = 0.98
    healthy0: float = 100.0
    infected0: float = 60.0
    steps: int = 300
    dt: float = 0.1


@dataclass(frozen=True)
class SimulationState:
    """
    One sample of the integrated trajectory.
    """
    time: float
    healthy: float
    infected: float
