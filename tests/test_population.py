"""Tests for population ordering and removal."""

import pytest

from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule
from soup.entities.particle import Particle
from soup.exceptions import SimulationError
from soup.simulation.population import Population


def particle(tag="A"):
    return Particle(KineticBody(0, 0), Molecule(tag, "#fff", 10.0))


def test_removal_keeps_survivor_order():
    population = Population()
    members = [particle() for _ in range(5)]
    for p in members:
        population.add(p)
    population.remove(members[1])
    population.remove(members[3])
    assert population.particles == [members[0], members[2], members[4]]
    assert (population.births, population.removals) == (5, 2)


def test_products_append_after_removal():
    population = Population()
    a, b, product = particle("A"), particle("B"), particle("AB")
    population.add(a)
    population.add(b)
    population.remove(a)
    population.add(product)
    assert list(population) == [b, product]


def test_remove_unknown_particle_raises():
    population = Population()
    kept = particle()
    population.add(kept)
    with pytest.raises(ValueError):
        population.remove(particle())
    assert len(population) == 1
    assert population.removals == 0


def test_remove_twice_raises():
    population = Population()
    p = particle()
    population.add(p)
    population.remove(p)
    with pytest.raises(ValueError):
        population.remove(p)
    assert p not in population


def test_particles_is_a_snapshot():
    population = Population()
    p = particle()
    population.add(p)
    snapshot = population.particles
    population.remove(p)
    assert snapshot == [p]
    assert population.particles == []


def test_engine_reports_unknown_particle(simulation_engine):
    with pytest.raises(SimulationError):
        simulation_engine.remove_particle(particle())
