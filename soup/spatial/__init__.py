"""Spatial indexing for collision candidate lookup."""

from soup.spatial.grid import SpatialGrid

__all__ = ["SpatialGrid"]
