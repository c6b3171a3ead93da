"""Simulation engine - owns the population and runs the step loop.

Design Decisions:
-----------------
1. The engine is the only writer of simulation state. It owns the
   population, the spatial grid and the ring pool; renderers and hosts
   read through ``current_bodies()`` and ``current_effects()``.

2. Chemistry is delegated to the pure functions in
   ``soup.chemistry.resolver``. The engine decides WHEN and WHERE to ask,
   and applies the resulting inserts and removals.

3. A body and its molecule live in one Particle record, so the
   population cannot fall out of step with itself.

4. One ``random.Random`` is threaded through every draw. Cells are
   visited in grid order, triples before pairs, so the same seed and the
   same initial population replay the same trajectory.
"""

import logging
import random
import uuid
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from soup.chemistry import resolver
from soup.chemistry.registry import SpeciesRegistry, default_registry
from soup.config.simulation_config import SimulationConfig
from soup.effects.ring_pool import RingPool
from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule
from soup.entities.particle import Particle
from soup.exceptions import SimulationError
from soup.math_utils import centroid
from soup.sim.events import Autocatalysis, PairReaction, Replication, SimEvent
from soup.simulation import diagnostics
from soup.simulation.population import Population
from soup.spatial.grid import SpatialGrid
from soup.update_phases import UpdatePhase

logger = logging.getLogger(__name__)

RANDOM_SPECIES = "random"

# (position, velocity, structure tag or None for a random species)
ParticleSpec = Tuple[Sequence[float], Sequence[float], Optional[str]]


class BodyView(NamedTuple):
    """Read-only snapshot of one particle for rendering."""

    x: float
    y: float
    structure: str
    colour: str
    reacting: int


class RingView(NamedTuple):
    """Read-only snapshot of one reaction ring."""

    x: float
    y: float
    radius: float
    alpha: float
    active: bool


class SimulationEngine:
    """A headless reaction engine for the molecular soup.

    Attributes:
        config: Simulation configuration
        registry: The reaction network (read-only)
        rng: The single random stream every draw comes from
        population: All particles, in traversal order
        grid: Spatial index, rebuilt each step
        ring_pool: Reaction ring effects
        frame_count: Steps taken
        paused: While True, update() does nothing
        last_step_events: Reactions that happened during the latest step
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        registry: Optional[SpeciesRegistry] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the simulation engine.

        Args:
            config: Aggregate simulation configuration
            width: Canvas width override
            height: Canvas height override
            registry: Reaction network (defaults to the built-in A/B/C network)
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)
        """
        self.config = config or SimulationConfig.headless_fast()
        self.config.validate()

        display = self.config.display
        self.width: float = float(width if width is not None else display.screen_width)
        self.height: float = float(height if height is not None else display.screen_height)
        if self.width <= 0 or self.height <= 0:
            raise SimulationError(f"Canvas must be positive, got {self.width}x{self.height}")

        # RNG handling: prefer explicit rng, then seed, then fresh RNG
        if rng is not None:
            self.rng: random.Random = rng
            self.seed = None
        elif seed is not None:
            self.rng = random.Random(seed)
            self.seed = seed
        else:
            self.rng = random.Random()
            self.seed = None

        chem = self.config.chemistry
        self.registry = (
            registry if registry is not None else default_registry(seed_energy=chem.seed_energy)
        )
        self._radius_sq: float = chem.interaction_radius * chem.interaction_radius

        self.population = Population()
        self.grid = SpatialGrid(chem.cell_size)
        self.ring_pool = RingPool(self.config.rings)

        self.frame_count: int = 0
        self.paused: bool = False
        self.last_step_events: List[SimEvent] = []
        self.event_totals: Dict[str, int] = {
            "pair_reactions": 0,
            "autocatalysis": 0,
            "replications": 0,
        }

        self._current_phase: Optional[UpdatePhase] = None

        # Observability: Unique identifier for this simulation run
        self.run_id: str = str(uuid.uuid4())
        logger.info(
            "SimulationEngine initialized with run_id=%s canvas=%dx%d seed=%s",
            self.run_id,
            self.width,
            self.height,
            self.seed,
        )

    # =========================================================================
    # Population Management
    # =========================================================================

    def add_particle(self, body: KineticBody, molecule: Molecule) -> Particle:
        """Insert a body with its molecule and return the new particle."""
        particle = Particle(body, molecule)
        self.population.add(particle)
        return particle

    def remove_particle(self, particle: Particle) -> None:
        """Remove a particle from the population.

        Raises:
            SimulationError: If the particle is not part of this engine's population
        """
        try:
            self.population.remove(particle)
        except ValueError:
            raise SimulationError(f"{particle!r} is not in the population") from None

    def seed_population(self, specs: Iterable[ParticleSpec]) -> List[Particle]:
        """Insert particles from (position, velocity, tag) specs.

        A tag of None or "random" picks a uniformly random species. Every
        molecule starts at the registry's seed energy.

        Raises:
            ConfigurationError: If a tag is not a registered species
        """
        added = []
        for position, velocity, tag in specs:
            if tag is None or tag == RANDOM_SPECIES:
                molecule = self.registry.random_species(self.rng)
            else:
                molecule = self.registry.create(tag)
            body = KineticBody(position[0], position[1], velocity[0], velocity[1])
            added.append(self.add_particle(body, molecule))
        logger.info("Seeded %d particles (population now %d)", len(added), len(self.population))
        return added

    def populate_random(self, count: int) -> List[Particle]:
        """Replace the population with ``count`` random particles.

        Positions are uniform over the canvas, velocity components uniform
        in [-1, 1). Active rings are cleared.
        """
        if count < 0:
            raise SimulationError(f"Particle count must be non-negative, got {count}")
        self.population.clear()
        self.ring_pool.clear()
        self.last_step_events = []
        rng = self.rng
        specs = []
        for _ in range(count):
            x = rng.random() * self.width
            y = rng.random() * self.height
            vx = (rng.random() - 0.5) * 2
            vy = (rng.random() - 0.5) * 2
            specs.append(((x, y), (vx, vy), RANDOM_SPECIES))
        return self.seed_population(specs)

    def resize(self, width: float, height: float) -> None:
        """Change the canvas bounds used for bouncing."""
        if width <= 0 or height <= 0:
            raise SimulationError(f"Canvas must be positive, got {width}x{height}")
        self.width = float(width)
        self.height = float(height)

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def particles(self) -> List[Particle]:
        return self.population.particles

    def current_bodies(self) -> Tuple[BodyView, ...]:
        """Snapshot of every particle for rendering."""
        return tuple(
            BodyView(
                p.body.pos.x,
                p.body.pos.y,
                p.molecule.structure,
                p.molecule.colour,
                p.molecule.reacting,
            )
            for p in self.population
        )

    def current_effects(self) -> Tuple[RingView, ...]:
        """Snapshot of the active reaction rings."""
        return tuple(
            RingView(r.x, r.y, r.radius, r.alpha, r.active)
            for r in self.ring_pool.active_rings()
        )

    def get_current_phase(self) -> Optional[UpdatePhase]:
        """Get the current update phase (None if not in update loop)."""
        return self._current_phase

    # =========================================================================
    # Core Update Loop
    # =========================================================================

    def update(self) -> None:
        """Advance the simulation by one step.

        Phase Order:
            1. FRAME_START: Increment frame, age flashes and rings
            2. MOVEMENT: Move and bounce every body
            3. SPATIAL_INDEX: Rebuild the grid
            4. AUTOCATALYSIS: Triples per cell
            5. COLLISION: Pairs per cell
            6. FRAME_END: Clear phase marker
        """
        if self.paused:
            return

        self._phase_frame_start()
        self._phase_movement()
        self._phase_spatial_index()
        self._phase_autocatalysis()
        self._phase_collision()
        self._phase_frame_end()

    advance_step = update

    # -------------------------------------------------------------------------
    # Phase Implementations
    # -------------------------------------------------------------------------

    def _phase_frame_start(self) -> None:
        """FRAME_START: Increment frame, age the previous frame's visual state."""
        self._current_phase = UpdatePhase.FRAME_START
        self.frame_count += 1
        self.last_step_events = []
        for particle in self.population:
            particle.molecule.tick_flash()
        self.ring_pool.advance()

    def _phase_movement(self) -> None:
        """MOVEMENT: Integrate positions and reflect velocities at the edges."""
        self._current_phase = UpdatePhase.MOVEMENT
        width, height = self.width, self.height
        for particle in self.population:
            body = particle.body
            body.move()
            body.bounce(width, height)

    def _phase_spatial_index(self) -> None:
        """SPATIAL_INDEX: Bucket every particle by its post-move position."""
        self._current_phase = UpdatePhase.SPATIAL_INDEX
        self.grid.rebuild(self.population)

    def _phase_autocatalysis(self) -> None:
        """AUTOCATALYSIS: Evaluate every in-range triple in each cell.

        Triples are (i, j, k) with i distinct from j and k and j < k, so
        member i is a distinguished slot: it is the template when
        replication is attempted after autocatalysis declines.
        """
        self._current_phase = UpdatePhase.AUTOCATALYSIS
        radius_sq = self._radius_sq
        for members in self.grid.cells():
            n = len(members)
            if n < 3:
                continue
            for i in range(n):
                p1 = members[i]
                for j in range(n):
                    if j == i:
                        continue
                    p2 = members[j]
                    if p1.distance_squared_to(p2) >= radius_sq:
                        continue
                    for k in range(j + 1, n):
                        if k == i:
                            continue
                        p3 = members[k]
                        if (
                            p1.distance_squared_to(p3) < radius_sq
                            and p2.distance_squared_to(p3) < radius_sq
                        ):
                            self._resolve_triple(p1, p2, p3)

    def _resolve_triple(self, p1: Particle, p2: Particle, p3: Particle) -> None:
        chem = self.config.chemistry
        product = resolver.try_autocatalysis(
            p1.molecule,
            p2.molecule,
            p3.molecule,
            self.registry,
            self.rng,
            flash_frames=chem.flash_frames,
        )
        if product is not None:
            origin = centroid(p1.body.pos, p2.body.pos, p3.body.pos)
            self._spawn_product(origin.x, origin.y, product)
            self._record(
                Autocatalysis(
                    frame=self.frame_count,
                    x=origin.x,
                    y=origin.y,
                    participants=(p1.structure, p2.structure, p3.structure),
                    product=product.structure,
                ),
                "autocatalysis",
            )
            return

        if not chem.replication_enabled:
            return

        rule = self.registry.replication
        copy = resolver.try_replicate(
            p1.molecule,
            p2.molecule,
            p3.molecule,
            rule.energy_cost,
            rule.probability,
            self.registry,
            self.rng,
            flash_frames=chem.flash_frames,
        )
        if copy is not None:
            x, y = p1.body.pos.x, p1.body.pos.y
            self._spawn_product(x, y, copy)
            self._record(
                Replication(
                    frame=self.frame_count,
                    x=x,
                    y=y,
                    template=p1.structure,
                    partners=(p2.structure, p3.structure),
                ),
                "replications",
            )

    def _spawn_product(self, x: float, y: float, molecule: Molecule) -> Particle:
        """Add a reaction product at (x, y) with a random velocity and mark it with a ring.

        The product is not in this step's grid, so it cannot react until the next step.
        """
        speed = self.config.chemistry.product_speed
        vx = (self.rng.random() * 2 - 1) * speed
        vy = (self.rng.random() * 2 - 1) * speed
        self.ring_pool.acquire(x, y)
        return self.add_particle(KineticBody(x, y, vx, vy), molecule)

    def _phase_collision(self) -> None:
        """COLLISION: Resolve every in-range pair in each cell.

        A pair reaction replaces the first particle's molecule with the
        product and consumes the second. The consumed particle is dropped
        from the population and from the cell's working list together,
        and the inner cursor stays put so the next member is not skipped.
        """
        self._current_phase = UpdatePhase.COLLISION
        radius_sq = self._radius_sq
        chem = self.config.chemistry
        registry = self.registry
        rng = self.rng

        for members in self.grid.cells():
            i = 0
            while i < len(members):
                first = members[i]
                j = i + 1
                while j < len(members):
                    second = members[j]
                    if first.distance_squared_to(second) >= radius_sq:
                        j += 1
                        continue

                    product = resolver.react_pair(
                        first.molecule, second.molecule, registry, flash_frames=chem.flash_frames
                    )
                    if product is None:
                        resolver.exchange_energy(
                            first.molecule, second.molecule, rng, cap=chem.contact_transfer_cap
                        )
                        resolver.swap_velocities(first.body, second.body)
                        j += 1
                        continue

                    reactants = (first.structure, second.structure)
                    first.molecule = product
                    x, y = first.body.pos.x, first.body.pos.y
                    self.ring_pool.acquire(x, y)
                    self.remove_particle(second)
                    del members[j]
                    self._record(
                        PairReaction(
                            frame=self.frame_count,
                            x=x,
                            y=y,
                            reactants=reactants,
                            product=product.structure,
                            energy=product.energy,
                        ),
                        "pair_reactions",
                    )
                i += 1

    def _phase_frame_end(self) -> None:
        """FRAME_END: Finish the step."""
        self._current_phase = UpdatePhase.FRAME_END
        if self.last_step_events:
            logger.debug(
                "Frame %d: %d reactions, population %d",
                self.frame_count,
                len(self.last_step_events),
                len(self.population),
            )
        self._current_phase = None

    def _record(self, event: SimEvent, counter: str) -> None:
        self.last_step_events.append(event)
        self.event_totals[counter] += 1

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> Dict[str, Any]:
        """Get current simulation statistics."""
        return diagnostics.collect_stats(self)

    def print_stats(self) -> None:
        """Log current simulation statistics."""
        diagnostics.print_simulation_stats(self)

    # =========================================================================
    # Run Methods
    # =========================================================================

    def run_headless(self, max_frames: int = 1000, stats_interval: int = 100) -> Dict[str, Any]:
        """Run without visualization, logging stats every ``stats_interval`` frames.

        The population is seeded with the configured particle count if empty.
        """
        sep = self.config.display.separator_width
        logger.info("=" * sep)
        logger.info("HEADLESS MOLECULAR SOUP SIMULATION")
        logger.info("=" * sep)
        logger.info("Running for %d frames", max_frames)

        if not len(self.population):
            self.populate_random(self.config.display.particle_count)

        for frame in range(max_frames):
            self.update()
            if stats_interval > 0 and frame > 0 and frame % stats_interval == 0:
                self.print_stats()

        logger.info("=" * sep)
        logger.info("SIMULATION COMPLETE - Final Statistics")
        logger.info("=" * sep)
        self.print_stats()
        return self.get_stats()


def create_engine(
    width: float,
    height: float,
    *,
    config: Optional[SimulationConfig] = None,
    registry: Optional[SpeciesRegistry] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> SimulationEngine:
    """Create an engine for a canvas of the given size."""
    return SimulationEngine(
        config, width=width, height=height, registry=registry, rng=rng, seed=seed
    )
