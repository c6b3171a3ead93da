"""Pygame renderer for the molecular soup.

The renderer is a pure consumer: it draws the read-only snapshots the
engine hands out and never touches simulation state. Fading rings and
counting down flashes are the engine's job.
"""

from typing import Dict, Iterable, Optional, Sequence

import pygame

from soup.config.display import (
    BACKGROUND_COLOR,
    FLASH_COLOR,
    LABEL_COLOR,
    LABEL_FONT_SIZE,
    PARTICLE_DRAW_RADIUS,
    RING_COLOR,
    RING_LINE_WIDTH,
)
from soup.config.simulation_config import DisplayConfig
from soup.simulation.engine import BodyView, RingView


class SoupRenderer:
    """Draws particles, labels and reaction rings onto a pygame surface.

    Attributes:
        screen: Pygame surface to render to
        font: Font for species labels
        particle_radius: Circle radius for every particle
    """

    def __init__(
        self,
        screen: pygame.Surface,
        font: Optional[pygame.font.Font] = None,
        particle_radius: int = PARTICLE_DRAW_RADIUS,
    ) -> None:
        """Initialize the renderer.

        Args:
            screen: Pygame surface to render to
            font: Label font (pygame's default font if omitted; requires pygame.font.init())
            particle_radius: Circle radius for every particle
        """
        self.screen = screen
        self.font = font if font is not None else pygame.font.Font(None, LABEL_FONT_SIZE)
        self.particle_radius = particle_radius
        self._colour_cache: Dict[str, pygame.Color] = {}
        self._label_cache: Dict[str, pygame.Surface] = {}

    @classmethod
    def from_config(cls, screen: pygame.Surface, display: DisplayConfig) -> "SoupRenderer":
        """Build a renderer sized by the display section of a SimulationConfig."""
        return cls(screen, particle_radius=display.particle_radius)

    def set_screen(self, screen: pygame.Surface) -> None:
        """Point the renderer at a new surface (after a window resize)."""
        self.screen = screen

    def _colour(self, colour: str) -> pygame.Color:
        cached = self._colour_cache.get(colour)
        if cached is None:
            cached = pygame.Color(colour)
            self._colour_cache[colour] = cached
        return cached

    def _label(self, structure: str) -> pygame.Surface:
        label = self._label_cache.get(structure)
        if label is None:
            label = self.font.render(structure, True, LABEL_COLOR)
            self._label_cache[structure] = label
        return label

    def draw_rings(self, rings: Iterable[RingView]) -> None:
        """Draw active rings as translucent outlines."""
        rings = [r for r in rings if r.active and r.alpha > 0]
        if not rings:
            return
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        for ring in rings:
            alpha = max(0, min(255, int(ring.alpha * 255)))
            pygame.draw.circle(
                overlay,
                (*RING_COLOR, alpha),
                (int(ring.x), int(ring.y)),
                int(ring.radius),
                RING_LINE_WIDTH,
            )
        self.screen.blit(overlay, (0, 0))

    def draw_particles(self, bodies: Iterable[BodyView]) -> None:
        """Draw each particle as a filled circle with its species tag on top.

        Particles still flashing from a reaction are drawn white.
        """
        radius = self.particle_radius
        for body in bodies:
            fill = FLASH_COLOR if body.reacting > 0 else self._colour(body.colour)
            centre = (int(body.x), int(body.y))
            pygame.draw.circle(self.screen, fill, centre, radius)
            label = self._label(body.structure)
            self.screen.blit(label, label.get_rect(center=centre))

    def draw(self, bodies: Sequence[BodyView], rings: Sequence[RingView]) -> None:
        """Render one frame: background, rings, then particles."""
        self.screen.fill(BACKGROUND_COLOR)
        self.draw_rings(rings)
        self.draw_particles(bodies)
