"""Update phase definitions for explicit execution ordering.

A step runs these phases in declaration order. Phases are separate
engine methods so each can be exercised in isolation by tests.
"""

from enum import Enum, auto

__all__ = ["UpdatePhase"]


class UpdatePhase(Enum):
    """Phases of a simulation step.

    1. FRAME_START: Advance the frame counter, age flashes and rings
    2. MOVEMENT: Move every body and bounce it off the canvas edges
    3. SPATIAL_INDEX: Rebuild the grid from post-move positions
    4. AUTOCATALYSIS: Three-body reactions and replication per cell
    5. COLLISION: Pair reactions and non-reacting contacts per cell
    6. FRAME_END: Clear per-step bookkeeping
    """

    FRAME_START = auto()
    MOVEMENT = auto()
    SPATIAL_INDEX = auto()
    AUTOCATALYSIS = auto()
    COLLISION = auto()
    FRAME_END = auto()
