"""Spatial indexing for efficient proximity queries."""

import math
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

from soup.config.chemistry import GRID_CELL_SIZE
from soup.entities.particle import Particle

CellKey = Tuple[int, int]


class SpatialGrid:
    """
    Uniform grid bucketing particles by position.

    The grid is rebuilt from scratch every step. Each particle lands in
    exactly one cell and neighbouring cells are never consulted, so two
    particles within interaction range on either side of a cell border do
    not meet that step. Cells are unbounded: particles slightly outside
    the canvas simply get negative or out-of-range keys.

    Buckets hold particle references rather than population indices, and
    are only valid for the step that built them.
    """

    def __init__(self, cell_size: float = GRID_CELL_SIZE):
        """
        Initialize the spatial grid.

        Args:
            cell_size: Edge length of each square cell in pixels (default 50)
        """
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size

        # Grid storage: (col, row) -> particles in insertion order.
        # Dict order keeps cell traversal deterministic for a given population order.
        self.grid: Dict[CellKey, List[Particle]] = defaultdict(list)

    def cell_key(self, x: float, y: float) -> CellKey:
        """Get the grid cell coordinates for a position."""
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def clear(self) -> None:
        self.grid.clear()

    def add(self, particle: Particle) -> CellKey:
        """Bucket a particle by its current position and return its cell."""
        key = self.cell_key(particle.body.pos.x, particle.body.pos.y)
        self.grid[key].append(particle)
        return key

    def rebuild(self, particles: Iterable[Particle]) -> None:
        """Clear the grid and bucket every particle by current position."""
        self.grid.clear()
        for particle in particles:
            self.add(particle)

    def cells(self) -> Iterator[List[Particle]]:
        """Yield each occupied cell's member list, in the order cells were first filled.

        The lists are the grid's own working lists; callers that consume a
        particle mid-scan remove it from the list they are iterating.
        """
        for members in list(self.grid.values()):
            if members:
                yield members

    def members(self, key: CellKey) -> List[Particle]:
        """Members of one cell (empty list if unoccupied)."""
        return self.grid.get(key, [])

    def occupied_cell_count(self) -> int:
        return sum(1 for members in self.grid.values() if members)

    def __len__(self) -> int:
        """Total particles indexed."""
        return sum(len(members) for members in self.grid.values())
