"""Pytest configuration and fixtures for molecular soup tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def registry():
    """The built-in A/B/C reaction network."""
    from soup.chemistry.registry import default_registry

    return default_registry()


@pytest.fixture
def simulation_engine(registry):
    """An empty 400x300 engine with a deterministic seed."""
    from soup.simulation.engine import SimulationEngine

    return SimulationEngine(width=400, height=300, registry=registry, seed=42)
