"""Simulation package - the engine and the population it owns.

- engine.py: SimulationEngine and the create_engine host entry point
- population.py: the ordered particle collection
- diagnostics.py: census and stats reporting

Usage:
    from soup.simulation import create_engine

    engine = create_engine(800, 600, seed=7)
    engine.populate_random(100)
    engine.run_headless(max_frames=1000)
"""

from soup.simulation.engine import (
    BodyView,
    RingView,
    SimulationEngine,
    create_engine,
)
from soup.simulation.population import Population

__all__ = [
    "BodyView",
    "Population",
    "RingView",
    "SimulationEngine",
    "create_engine",
]
