"""The population record: one body and its molecule, owned together.

A particle is the only unit the population stores. Bodies and molecules
are never kept in separate containers, so inserting or removing one always
inserts or removes the other.
"""

from itertools import count

from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule

_particle_ids = count(1)


class Particle:
    """A kinetic body paired with the molecule it carries.

    Attributes:
        particle_id: Monotonic id, unique within the process
        body: Position and velocity
        molecule: Chemical identity and energy; replaced in place when the
            particle is the surviving member of a pair reaction
    """

    __slots__ = ("particle_id", "body", "molecule")

    def __init__(self, body: KineticBody, molecule: Molecule) -> None:
        self.particle_id: int = next(_particle_ids)
        self.body = body
        self.molecule = molecule

    @property
    def pos(self):
        return self.body.pos

    @property
    def vel(self):
        return self.body.vel

    @property
    def structure(self) -> str:
        return self.molecule.structure

    def distance_squared_to(self, other: "Particle") -> float:
        return self.body.pos.distance_squared_to(other.body.pos)

    def __repr__(self) -> str:
        return (
            f"Particle(#{self.particle_id}, {self.molecule.structure}, "
            f"pos=({self.body.pos.x:.1f}, {self.body.pos.y:.1f}), "
            f"energy={self.molecule.energy:.2f})"
        )
