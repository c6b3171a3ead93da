"""Visual effect records emitted by the engine."""

from soup.effects.ring_pool import ReactionRing, RingPool

__all__ = ["ReactionRing", "RingPool"]
