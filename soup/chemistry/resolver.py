"""Reaction resolution.

Pure functions deciding whether molecules react and what they become.
The only inputs they mutate are the energy of a paying catalyst or
template on success, and the energies/velocities touched by the
non-reacting contact helpers. Population changes (inserting products,
removing consumed particles) belong to the engine.

Every probability draw comes from the ``rng`` argument, so a seeded
engine replays identically.
"""

import random
from typing import Optional

from soup.chemistry.registry import SpeciesRegistry
from soup.config.chemistry import CONTACT_TRANSFER_CAP, REACTION_FLASH_FRAMES
from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule
from soup.util.rng import require_engine_rng


def react_pair(
    first: Molecule,
    second: Molecule,
    registry: SpeciesRegistry,
    flash_frames: int = REACTION_FLASH_FRAMES,
) -> Optional[Molecule]:
    """Resolve a collision between two molecules.

    Only the (first, second) order is looked up. Endothermic rules need the
    combined energy to cover ``delta_e``; exothermic rules always fire.

    Endothermic rules draw ``delta_e`` out of the reactants and exothermic
    rules release ``-delta_e`` into the product, so the product carries the
    combined energy minus ``delta_e``.

    Returns:
        The product molecule, or None when no rule applies or energy is
        insufficient. Neither input is modified.
    """
    rule = registry.reaction_for(first.structure, second.structure)
    if rule is None:
        return None

    combined = first.energy + second.energy
    if rule.is_endothermic and combined < rule.delta_e:
        return None

    return Molecule(
        structure=rule.result,
        colour=registry.colour_of(rule.result),
        energy=combined - rule.delta_e,
        reacting=flash_frames,
    )


def try_autocatalysis(
    m1: Molecule,
    m2: Molecule,
    m3: Molecule,
    registry: SpeciesRegistry,
    rng: Optional[random.Random],
    flash_frames: int = REACTION_FLASH_FRAMES,
) -> Optional[Molecule]:
    """Attempt a catalysed three-body reaction.

    Rules are tried in declared order. A rule is eligible when both of its
    reactant tags and its catalyst tag occur among the three structures.
    This is a membership test, not a matching: one molecule whose tag
    appears in two roles satisfies both. The catalyst is the first of the
    three carrying the catalyst tag; if it cannot pay, or the rule's
    probability draw fails, the next rule is tried.

    On success the catalyst pays the rule's energy cost and a new product
    at seed energy is returned.
    """
    _rng = require_engine_rng(rng, "try_autocatalysis")
    members = (m1, m2, m3)
    present = [m.structure for m in members]

    for rule in registry.autocatalytic_rules:
        if not all(tag in present for tag in rule.required_tags()):
            continue

        catalyst = next(m for m in members if m.structure == rule.catalyst)
        if catalyst.energy < rule.energy_cost:
            continue
        if _rng.random() > rule.probability:
            continue

        catalyst.energy -= rule.energy_cost
        return registry.create(rule.product, reacting=flash_frames)

    return None


def try_replicate(
    template: Molecule,
    m1: Molecule,
    m2: Molecule,
    energy_cost: float,
    probability: float,
    registry: SpeciesRegistry,
    rng: Optional[random.Random],
    flash_frames: int = REACTION_FLASH_FRAMES,
) -> Optional[Molecule]:
    """Attempt template-directed replication.

    The template must be composite, every monomer of the template must be
    carried by ``m1`` or ``m2`` (either order), and the template must hold
    at least ``energy_cost`` before paying. The probability draw is only
    taken once those checks pass.

    On success the template pays ``energy_cost`` and a copy of the
    template's species at seed energy is returned.
    """
    if not template.is_template():
        return None

    partners = (m1.structure, m2.structure)
    if not all(monomer in partners for monomer in template.monomers()):
        return None

    if template.energy < energy_cost:
        return None

    _rng = require_engine_rng(rng, "try_replicate")
    if _rng.random() > probability:
        return None

    template.energy -= energy_cost
    return Molecule(
        structure=template.structure,
        colour=template.colour,
        energy=registry.seed_energy,
        reacting=flash_frames,
    )


def exchange_energy(
    first: Molecule,
    second: Molecule,
    rng: Optional[random.Random],
    cap: float = CONTACT_TRANSFER_CAP,
) -> float:
    """Move a small random amount of energy from the richer molecule to the other.

    The amount is uniform in [0, cap) and never more than the donor holds.
    On equal energy ``first`` donates.

    Returns:
        The amount transferred (0.0 if the donor has nothing to give).
    """
    _rng = require_engine_rng(rng, "exchange_energy")
    if second.energy > first.energy:
        donor, receiver = second, first
    else:
        donor, receiver = first, second

    amount = max(0.0, min(donor.energy, _rng.random() * cap))
    donor.energy -= amount
    receiver.energy += amount
    return amount


def swap_velocities(a: KineticBody, b: KineticBody) -> None:
    """Exchange velocities, a cheap stand-in for an elastic collision."""
    a.vel, b.vel = b.vel, a.vel

