"""Simulation event definitions."""

from soup.sim.events import Autocatalysis, PairReaction, Replication, SimEvent

__all__ = ["Autocatalysis", "PairReaction", "Replication", "SimEvent"]
