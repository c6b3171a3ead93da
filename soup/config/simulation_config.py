"""Lightweight simulation configuration helpers."""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from soup.config.chemistry import (
    CONTACT_TRANSFER_CAP,
    GRID_CELL_SIZE,
    INTERACTION_RADIUS,
    PRODUCT_SPEED,
    REACTION_FLASH_FRAMES,
    REPLICATION_ENABLED,
    RING_FADE_PER_FRAME,
    RING_GROWTH_PER_FRAME,
    RING_START_ALPHA,
    RING_START_RADIUS,
    SEED_ENERGY,
)
from soup.config.display import (
    DEFAULT_PARTICLE_COUNT,
    FRAME_RATE,
    PARTICLE_DRAW_RADIUS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SEPARATOR_WIDTH,
)
from soup.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Canvas and drawing configuration."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_rate: int = FRAME_RATE
    particle_count: int = DEFAULT_PARTICLE_COUNT
    particle_radius: int = PARTICLE_DRAW_RADIUS
    separator_width: int = SEPARATOR_WIDTH


@dataclass
class ChemistryConfig:
    """Collision and reaction parameters."""

    interaction_radius: float = INTERACTION_RADIUS
    cell_size: float = GRID_CELL_SIZE
    seed_energy: float = SEED_ENERGY
    flash_frames: int = REACTION_FLASH_FRAMES
    contact_transfer_cap: float = CONTACT_TRANSFER_CAP
    product_speed: float = PRODUCT_SPEED
    replication_enabled: bool = REPLICATION_ENABLED


@dataclass
class RingConfig:
    """Reaction ring animation parameters."""

    start_radius: float = RING_START_RADIUS
    start_alpha: float = RING_START_ALPHA
    growth_per_frame: float = RING_GROWTH_PER_FRAME
    fade_per_frame: float = RING_FADE_PER_FRAME


@dataclass
class SimulationConfig:
    """Aggregate configuration for a simulation run.

    Attributes:
        headless: Whether to run without a window.
        display: Canvas dimensions and drawing sizes.
        chemistry: Interaction radius, grid cell size, energy constants.
        rings: Reaction ring animation.
    """

    headless: bool = True
    display: DisplayConfig = field(default_factory=DisplayConfig)
    chemistry: ChemistryConfig = field(default_factory=ChemistryConfig)
    rings: RingConfig = field(default_factory=RingConfig)

    @classmethod
    def production(cls, *, headless: bool = False) -> "SimulationConfig":
        """Defaults for an interactive windowed run."""
        return cls(headless=headless)

    @classmethod
    def headless_fast(cls) -> "SimulationConfig":
        """Defaults for tests and stats-only runs."""
        return cls(headless=True)

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return an independent copy with top-level fields replaced.

        Nested sections are copied too, so mutating the result never leaks
        back into this config. Unknown field names raise ConfigurationError.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown SimulationConfig fields: {sorted(unknown)}")
        sections = {
            "display": replace(self.display),
            "chemistry": replace(self.chemistry),
            "rings": replace(self.rings),
        }
        sections.update(overrides)
        return replace(self, **sections)

    def validate(self) -> None:
        """Raise ConfigurationError if any setting is out of range."""
        problems = []
        if self.display.screen_width <= 0 or self.display.screen_height <= 0:
            problems.append("display dimensions must be positive")
        if self.display.particle_count < 0:
            problems.append("particle_count must be non-negative")
        chem = self.chemistry
        if chem.interaction_radius <= 0:
            problems.append("interaction_radius must be positive")
        if chem.cell_size <= 0:
            problems.append("cell_size must be positive")
        if chem.flash_frames < 0:
            problems.append("flash_frames must be non-negative")
        if chem.contact_transfer_cap < 0:
            problems.append("contact_transfer_cap must be non-negative")
        if chem.product_speed < 0:
            problems.append("product_speed must be non-negative")
        if self.rings.fade_per_frame <= 0:
            problems.append("ring fade_per_frame must be positive")
        if problems:
            raise ConfigurationError("Invalid simulation config: " + "; ".join(problems))
