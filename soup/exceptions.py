"""Molecular soup exception hierarchy.

Centralised base classes so callers can catch narrowly. Energy and
probability rejections inside the chemistry layer are not errors and
never raise.
"""


class SoupError(Exception):
    """Root of all molecular soup exceptions."""


class ConfigurationError(SoupError):
    """Invalid configuration or a reaction network referencing undefined species."""


class SimulationError(SoupError):
    """Errors during simulation execution."""
