"""Tests for the reusable reaction ring pool."""

import pytest

from soup.config.simulation_config import RingConfig
from soup.effects.ring_pool import RingPool


class TestRingPool:
    def test_acquire_initialises_ring(self):
        pool = RingPool()
        ring = pool.acquire(5, 7)
        assert (ring.x, ring.y) == (5, 7)
        assert ring.radius == 12.0
        assert ring.alpha == pytest.approx(0.6)
        assert ring.active
        assert pool.active_rings() == [ring]

    def test_advance_grows_and_fades(self):
        pool = RingPool()
        ring = pool.acquire(0, 0)
        radii, alphas = [], []
        for _ in range(5):
            pool.advance()
            radii.append(ring.radius)
            alphas.append(ring.alpha)
        assert radii == sorted(radii) and len(set(radii)) == 5
        assert alphas == sorted(alphas, reverse=True)
        assert ring.radius == pytest.approx(12 + 5 * 1.5)
        assert ring.alpha == pytest.approx(0.6 - 5 * 0.03)

    def test_ring_retires_when_faded(self):
        pool = RingPool(RingConfig(start_alpha=0.1, fade_per_frame=0.05))
        ring = pool.acquire(0, 0)
        pool.advance()
        assert ring.active
        pool.advance()
        pool.advance()
        assert not ring.active
        assert ring.alpha == 0.0
        assert pool.active_rings() == []

    def test_inactive_rings_are_reused(self):
        pool = RingPool(RingConfig(start_alpha=0.05, fade_per_frame=0.1))
        first = pool.acquire(0, 0)
        pool.advance()
        second = pool.acquire(10, 10)
        assert second is first
        assert len(pool) == 1
        assert (second.x, second.y, second.radius) == (10, 10, 12.0)

    def test_pool_grows_only_with_simultaneous_rings(self):
        pool = RingPool()
        pool.acquire(0, 0)
        pool.acquire(1, 1)
        assert len(pool) == 2
        pool.clear()
        assert pool.active_rings() == []
        pool.acquire(2, 2)
        assert len(pool) == 2
        assert pool.get_stats() == {"pool_size": 1, "active_count": 1, "total_capacity": 2}

    def test_advance_ignores_inactive_rings(self):
        pool = RingPool()
        ring = pool.acquire(0, 0)
        pool.clear()
        radius = ring.radius
        pool.advance()
        assert ring.radius == radius
