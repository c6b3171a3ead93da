"""Population ownership for the simulation engine.

Particles are keyed by ``particle_id`` in an insertion-ordered dict.
Insertion order is the traversal order of the spatial grid, which in
turn fixes the order random draws are consumed, so every mutation goes
through here. Removing a consumed reactant is a single key delete and
leaves the order of the survivors untouched.
"""

import logging
from typing import Dict, Iterator, List

from soup.entities.particle import Particle

logger = logging.getLogger(__name__)


class Population:
    """Ordered collection of particles owned by one engine."""

    def __init__(self) -> None:
        self._particles: Dict[int, Particle] = {}
        self.births: int = 0
        self.removals: int = 0

    def add(self, particle: Particle) -> None:
        """Append a particle (seeding or reaction product)."""
        self._particles[particle.particle_id] = particle
        self.births += 1

    def remove(self, particle: Particle) -> None:
        """Remove a consumed particle.

        Raises:
            ValueError: If the particle is not in the population
        """
        if self._particles.get(particle.particle_id) is not particle:
            raise ValueError(f"{particle!r} is not in the population")
        del self._particles[particle.particle_id]
        self.removals += 1

    def clear(self) -> None:
        self._particles.clear()
        self.births = 0
        self.removals = 0

    @property
    def particles(self) -> List[Particle]:
        """Snapshot list in insertion order."""
        return list(self._particles.values())

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles.values())

    def __len__(self) -> int:
        return len(self._particles)

    def __contains__(self, particle: object) -> bool:
        if not isinstance(particle, Particle):
            return False
        return self._particles.get(particle.particle_id) is particle
