"""Species registry: the static reaction network.

The registry is built once, validated, and then only read. The engine is
handed a registry at construction instead of reaching for module globals,
so several engines with different networks can coexist.

Network shipped by ``default_registry()``:

    A + B  -> AB   releases 5 energy
    B + C  -> BC   absorbs 8 energy
    A + B  (catalysed by BC) -> AB
    B + C  (catalysed by AB) -> BC
    AB, BC replicate from their monomers
"""

import logging
import random
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from soup.config.chemistry import (
    REPLICATION_ENERGY_COST,
    REPLICATION_PROBABILITY,
    SEED_ENERGY,
)
from soup.entities.molecule import Molecule
from soup.exceptions import ConfigurationError
from soup.util.rng import require_engine_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReactionRule:
    """Outcome of a directional pair reaction.

    Attributes:
        result: Structure tag of the product
        delta_e: Energy change; positive rules absorb energy (endothermic),
            negative rules release it (exothermic)
    """

    result: str
    delta_e: float

    @property
    def is_endothermic(self) -> bool:
        return self.delta_e > 0


@dataclass(frozen=True)
class AutocatalyticRule:
    """Three-body reaction: two reactants meet in the presence of a catalyst.

    The catalyst pays ``energy_cost`` but is not consumed.
    """

    product: str
    reactants: Tuple[str, str]
    catalyst: str
    energy_cost: float
    probability: float

    def required_tags(self) -> Tuple[str, str, str]:
        return (self.reactants[0], self.reactants[1], self.catalyst)


@dataclass(frozen=True)
class ReplicationRule:
    """Parameters for template-directed replication."""

    energy_cost: float = REPLICATION_ENERGY_COST
    probability: float = REPLICATION_PROBABILITY


class SpeciesRegistry:
    """Read-only reaction network.

    Args:
        palette: Species tag -> display colour. Defines which species exist;
            its order is the order random seeding draws from.
        reactions: First-mover tag -> second-mover tag -> rule. Directional:
            a rule for (A, B) says nothing about (B, A).
        autocatalytic_rules: Tried in declared order.
        replication: Replication cost and probability.
        seed_energy: Energy of freshly created molecules.

    Raises:
        ConfigurationError: If any rule references a tag missing from the
            palette, or a probability/cost is out of range.
    """

    __slots__ = (
        "_palette",
        "_reactions",
        "_autocatalytic_rules",
        "_replication",
        "_seed_energy",
        "_tags",
    )

    def __init__(
        self,
        palette: Mapping[str, str],
        reactions: Mapping[str, Mapping[str, ReactionRule]],
        autocatalytic_rules: Iterable[AutocatalyticRule] = (),
        replication: Optional[ReplicationRule] = None,
        seed_energy: float = SEED_ENERGY,
    ) -> None:
        self._palette = MappingProxyType(dict(palette))
        self._reactions = MappingProxyType(
            {first: MappingProxyType(dict(row)) for first, row in reactions.items()}
        )
        self._autocatalytic_rules: Tuple[AutocatalyticRule, ...] = tuple(autocatalytic_rules)
        self._replication = replication if replication is not None else ReplicationRule()
        self._seed_energy = float(seed_energy)
        self._tags: Tuple[str, ...] = tuple(self._palette)
        self._validate()
        logger.debug(
            "SpeciesRegistry loaded: %d species, %d pair rules, %d autocatalytic rules",
            len(self._tags),
            sum(len(row) for row in self._reactions.values()),
            len(self._autocatalytic_rules),
        )

    def _validate(self) -> None:
        problems = []
        if not self._tags:
            problems.append("palette is empty")

        def check(tag: str, where: str) -> None:
            if tag not in self._palette:
                problems.append(f"{where} references undefined species {tag!r}")

        for first, row in self._reactions.items():
            check(first, "reaction table")
            for second, rule in row.items():
                where = f"reaction {first}+{second}"
                check(second, where)
                check(rule.result, where)

        for rule in self._autocatalytic_rules:
            where = f"autocatalytic rule for {rule.product}"
            check(rule.product, where)
            for tag in rule.required_tags():
                check(tag, where)
            if not 0.0 <= rule.probability <= 1.0:
                problems.append(f"{where} has probability {rule.probability} outside [0, 1]")
            if rule.energy_cost < 0:
                problems.append(f"{where} has negative energy cost")

        if not 0.0 <= self._replication.probability <= 1.0:
            problems.append("replication probability outside [0, 1]")
        if self._replication.energy_cost < 0:
            problems.append("replication energy cost is negative")

        if problems:
            raise ConfigurationError("Invalid reaction network: " + "; ".join(problems))

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def palette(self) -> Mapping[str, str]:
        return self._palette

    @property
    def reactions(self) -> Mapping[str, Mapping[str, ReactionRule]]:
        return self._reactions

    @property
    def autocatalytic_rules(self) -> Tuple[AutocatalyticRule, ...]:
        return self._autocatalytic_rules

    @property
    def replication(self) -> ReplicationRule:
        return self._replication

    @property
    def seed_energy(self) -> float:
        return self._seed_energy

    @property
    def species_tags(self) -> Tuple[str, ...]:
        return self._tags

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_species(self, tag: str) -> bool:
        return tag in self._palette

    def colour_of(self, tag: str) -> str:
        """Display colour for a species tag.

        Raises:
            ConfigurationError: If the tag is not a registered species
        """
        try:
            return self._palette[tag]
        except KeyError:
            raise ConfigurationError(f"Unknown species {tag!r}") from None

    def reaction_for(self, first: str, second: str) -> Optional[ReactionRule]:
        """Rule for ``first`` meeting ``second``, in that order only."""
        row = self._reactions.get(first)
        if row is None:
            return None
        return row.get(second)

    @staticmethod
    def is_template(tag: str) -> bool:
        return len(tag) > 1

    @staticmethod
    def monomers_of(tag: str) -> Tuple[str, ...]:
        """Composite tags are literal concatenations of their monomer tags."""
        return tuple(tag)

    def create(self, tag: str, energy: Optional[float] = None, reacting: int = 0) -> Molecule:
        """Instantiate a molecule of a registered species (seed energy by default)."""
        return Molecule(
            structure=tag,
            colour=self.colour_of(tag),
            energy=self._seed_energy if energy is None else float(energy),
            reacting=reacting,
        )

    def random_species(self, rng: Optional[random.Random]) -> Molecule:
        """Uniformly random species from the palette at seed energy."""
        _rng = require_engine_rng(rng, "SpeciesRegistry.random_species")
        return self.create(_rng.choice(self._tags))

    def __repr__(self) -> str:
        return f"SpeciesRegistry(species={list(self._tags)})"


DEFAULT_PALETTE: Dict[str, str] = {
    "A": "#e63946",
    "B": "#457b9d",
    "C": "#2a9d8f",
    "AB": "#f4a261",
    "BC": "#e9c46a",
}

DEFAULT_REACTIONS: Dict[str, Dict[str, ReactionRule]] = {
    "A": {"B": ReactionRule(result="AB", delta_e=-5.0)},
    "B": {"C": ReactionRule(result="BC", delta_e=8.0)},
}

DEFAULT_AUTOCATALYTIC_RULES: Tuple[AutocatalyticRule, ...] = (
    AutocatalyticRule(
        product="AB", reactants=("A", "B"), catalyst="BC", energy_cost=10.0, probability=0.15
    ),
    AutocatalyticRule(
        product="BC", reactants=("B", "C"), catalyst="AB", energy_cost=10.0, probability=0.15
    ),
)


def default_registry(seed_energy: float = SEED_ENERGY) -> SpeciesRegistry:
    """The built-in A/B/C network, seeding new molecules with ``seed_energy``."""
    return SpeciesRegistry(
        palette=DEFAULT_PALETTE,
        reactions=DEFAULT_REACTIONS,
        autocatalytic_rules=DEFAULT_AUTOCATALYTIC_RULES,
        replication=ReplicationRule(),
        seed_energy=seed_energy,
    )
