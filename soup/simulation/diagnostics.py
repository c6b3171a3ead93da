"""Diagnostics and reporting helpers for the simulation engine."""

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from soup.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


def species_census(engine: "SimulationEngine") -> Dict[str, int]:
    """Count particles per species, listing every registered species (zero if absent)."""
    counts = Counter(p.molecule.structure for p in engine.population)
    return {tag: counts.get(tag, 0) for tag in engine.registry.species_tags}


def collect_stats(engine: "SimulationEngine") -> Dict[str, Any]:
    """Snapshot of population, energy and reaction totals."""
    energies = [p.molecule.energy for p in engine.population]
    total_energy = sum(energies)
    return {
        "frame": engine.frame_count,
        "population": len(energies),
        "species": species_census(engine),
        "total_energy": total_energy,
        "mean_energy": total_energy / len(energies) if energies else 0.0,
        "births": engine.population.births,
        "removals": engine.population.removals,
        "reactions_last_step": len(engine.last_step_events),
        "reaction_totals": dict(engine.event_totals),
        "ring_pool": engine.ring_pool.get_stats(),
    }


def print_simulation_stats(engine: "SimulationEngine") -> None:
    """Log a human-readable summary of the current state."""
    stats = collect_stats(engine)
    sep = engine.config.display.separator_width
    logger.info("=" * sep)
    logger.info("Frame %d", stats["frame"])
    logger.info("=" * sep)
    logger.info(
        "Population: %d  Total energy: %.2f  Mean energy: %.2f",
        stats["population"],
        stats["total_energy"],
        stats["mean_energy"],
    )
    census = "  ".join(f"{tag}={count}" for tag, count in stats["species"].items())
    logger.info("Species: %s", census)
    totals = stats["reaction_totals"]
    logger.info(
        "Reactions: pair=%d autocatalysis=%d replication=%d",
        totals["pair_reactions"],
        totals["autocatalysis"],
        totals["replications"],
    )
    pool = stats["ring_pool"]
    logger.info("Rings: %d active / %d pooled", pool["active_count"], pool["total_capacity"])
