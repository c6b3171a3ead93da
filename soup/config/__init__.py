"""Configuration constants and dataclasses for the molecular soup."""

from soup.config.simulation_config import (
    ChemistryConfig,
    DisplayConfig,
    RingConfig,
    SimulationConfig,
)

__all__ = ["ChemistryConfig", "DisplayConfig", "RingConfig", "SimulationConfig"]
