"""Canonical simulation event definitions.

The engine records one event per successful reaction during a step.
All events inherit from SimEvent and include a ``frame`` field.

Event Hierarchy:
    SimEvent (base)
    ├── PairReaction - two particles fused into one
    ├── Autocatalysis - catalysed three-body reaction spawned a product
    └── Replication - a template copied itself from two monomers

Usage:
    engine.update()
    for event in engine.last_step_events:
        if isinstance(event, PairReaction):
            ...
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class SimEvent:
    """Base class for all simulation events."""

    frame: int = field(default=0)
    x: float = field(default=0.0)
    y: float = field(default=0.0)


@dataclass(frozen=True)
class PairReaction(SimEvent):
    reactants: Tuple[str, str] = field(default=("", ""))
    product: str = field(default="")
    energy: float = field(default=0.0)


@dataclass(frozen=True)
class Autocatalysis(SimEvent):
    participants: Tuple[str, str, str] = field(default=("", "", ""))
    product: str = field(default="")


@dataclass(frozen=True)
class Replication(SimEvent):
    template: str = field(default="")
    partners: Tuple[str, str] = field(default=("", ""))
