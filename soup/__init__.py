"""Molecular soup: a toy chemistry simulation of reacting particles.

Usage:
    from soup import create_engine

    engine = create_engine(800, 600, seed=42)
    engine.populate_random(100)
    engine.update()
    bodies = engine.current_bodies()
"""

from soup.simulation.engine import SimulationEngine, create_engine

__all__ = ["SimulationEngine", "create_engine"]
