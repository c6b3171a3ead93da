"""Reaction network and the pure functions that resolve reactions."""

from soup.chemistry.registry import (
    AutocatalyticRule,
    ReactionRule,
    ReplicationRule,
    SpeciesRegistry,
    default_registry,
)

__all__ = [
    "AutocatalyticRule",
    "ReactionRule",
    "ReplicationRule",
    "SpeciesRegistry",
    "default_registry",
]
