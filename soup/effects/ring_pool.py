"""Object pooling for reaction rings.

Rings are created on every reaction and live for a few dozen frames.
The pool never frees a ring: a finished ring is flagged inactive and
handed out again by the next ``acquire``.
"""

from typing import List, Optional

from soup.config.simulation_config import RingConfig


class ReactionRing:
    """An expanding, fading marker at the site of a reaction."""

    __slots__ = ("x", "y", "radius", "alpha", "active")

    def __init__(self) -> None:
        self.x: float = 0.0
        self.y: float = 0.0
        self.radius: float = 0.0
        self.alpha: float = 0.0
        self.active: bool = False

    def __repr__(self) -> str:
        return (
            f"ReactionRing(x={self.x:.1f}, y={self.y:.1f}, radius={self.radius:.1f}, "
            f"alpha={self.alpha:.2f}, active={self.active})"
        )


class RingPool:
    """Reuse-not-free pool of ReactionRing objects.

    Rings stay in the pool for the lifetime of the engine. ``acquire``
    reuses the first inactive ring before allocating a new one, so the pool
    only grows to the peak number of simultaneously visible rings.
    """

    def __init__(self, config: Optional[RingConfig] = None):
        """Initialize the ring pool.

        Args:
            config: Ring animation parameters (defaults to RingConfig())
        """
        self.config = config or RingConfig()
        self._rings: List[ReactionRing] = []

    def acquire(self, x: float, y: float) -> ReactionRing:
        """Activate a ring at (x, y), reusing an inactive one when available.

        Args:
            x: Ring origin x
            y: Ring origin y

        Returns:
            The activated ring
        """
        ring = next((r for r in self._rings if not r.active), None)
        if ring is None:
            ring = ReactionRing()
            self._rings.append(ring)

        ring.x = x
        ring.y = y
        ring.radius = self.config.start_radius
        ring.alpha = self.config.start_alpha
        ring.active = True
        return ring

    def advance(self) -> None:
        """Grow and fade every active ring by one frame, retiring faded ones."""
        growth = self.config.growth_per_frame
        fade = self.config.fade_per_frame
        for ring in self._rings:
            if not ring.active:
                continue
            ring.radius += growth
            ring.alpha -= fade
            if ring.alpha <= 0:
                ring.alpha = 0.0
                ring.active = False

    def active_rings(self) -> List[ReactionRing]:
        return [r for r in self._rings if r.active]

    def clear(self) -> None:
        """Deactivate every ring. The objects stay pooled."""
        for ring in self._rings:
            ring.active = False

    def __len__(self) -> int:
        """Total pooled rings, active or not."""
        return len(self._rings)

    def get_stats(self) -> dict:
        """Get pool statistics for monitoring.

        Returns:
            Dictionary with pool size and active count
        """
        active = sum(1 for r in self._rings if r.active)
        return {
            "pool_size": len(self._rings) - active,
            "active_count": active,
            "total_capacity": len(self._rings),
        }
