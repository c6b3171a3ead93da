"""Simulation entities: kinetic bodies, molecules and the particle record pairing them."""

from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule
from soup.entities.particle import Particle

__all__ = ["KineticBody", "Molecule", "Particle"]
