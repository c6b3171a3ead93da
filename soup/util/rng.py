"""Access to the engine's random stream.

Reaction chances, contact transfers and species picks all consume the
same ``random.Random`` the engine was seeded with, in grid traversal
order. Chemistry helpers take that stream as a parameter and refuse to
run without it, since a private generator would change which draw each
reaction sees and break seeded replays.
"""

import random
from typing import Optional

from soup.exceptions import SimulationError


class MissingRNGError(SimulationError):
    """A chemistry helper was called without the engine's random stream."""


def require_engine_rng(rng: Optional[random.Random], caller: str) -> random.Random:
    """Return ``rng``, or raise MissingRNGError naming ``caller`` if it is None."""
    if rng is None:
        raise MissingRNGError(
            f"{caller} draws from the engine random stream but was given rng=None"
        )
    return rng
