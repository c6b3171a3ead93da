"""Main entry point for the molecular soup simulation.

This module provides command-line options to run the simulation:
- Window mode (default): pygame window with start/pause/reset controls
- Headless mode: Stats-only, faster than realtime for testing

Window controls:
    SPACE  - Start (re-seeding the population) / Pause
    R      - Reset to a fresh population, paused
    ESC, Q - Quit
"""

import argparse
import logging
import sys

from soup.config import SimulationConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)


def run_headless(args: argparse.Namespace, config: SimulationConfig) -> None:
    """Run the simulation in headless mode (no visualization)."""
    from soup.simulation import create_engine

    engine = create_engine(args.width, args.height, config=config, seed=args.seed)
    engine.populate_random(args.count)
    engine.run_headless(max_frames=args.max_frames, stats_interval=args.stats_interval)


def run_window(args: argparse.Namespace, config: SimulationConfig) -> None:
    """Run the simulation in a resizable pygame window."""
    import pygame

    from rendering.renderer import SoupRenderer
    from soup.simulation import create_engine

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("Molecular Soup")
    clock = pygame.time.Clock()
    hud_font = pygame.font.Font(None, 20)

    engine = create_engine(args.width, args.height, config=config, seed=args.seed)
    engine.populate_random(args.count)
    engine.paused = True
    display_config = engine.config.display
    renderer = SoupRenderer.from_config(screen, display_config)

    logger.info("=" * display_config.separator_width)
    logger.info("MOLECULAR SOUP - SPACE start/pause, R reset, ESC quit")
    logger.info("=" * display_config.separator_width)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.set_screen(screen)
                engine.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.key == pygame.K_SPACE:
                    if engine.paused:
                        engine.populate_random(args.count)
                    engine.paused = not engine.paused
                elif event.key == pygame.K_r:
                    engine.paused = True
                    engine.populate_random(args.count)

        engine.update()
        renderer.draw(engine.current_bodies(), engine.current_effects())

        status = "paused" if engine.paused else "running"
        hud = hud_font.render(
            f"Frame {engine.frame_count}  Particles {len(engine.population)}  ({status})",
            True,
            (220, 220, 220),
        )
        screen.blit(hud, (8, 8))

        pygame.display.flip()
        clock.tick(display_config.frame_rate)

    pygame.quit()


def main():
    """Parse command-line arguments and run the appropriate mode."""
    from soup.config.display import DEFAULT_PARTICLE_COUNT, SCREEN_HEIGHT, SCREEN_WIDTH

    parser = argparse.ArgumentParser(
        description="Molecular Soup - toy autocatalytic chemistry simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the window (default)
  python main.py

  # Quick headless run with stats every 100 frames
  python main.py --headless --max-frames 1000 --stats-interval 100

  # Reproducible run
  python main.py --headless --seed 42 --count 300
        """,
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no window, stats only)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_PARTICLE_COUNT,
        help=f"Number of particles to seed (default: {DEFAULT_PARTICLE_COUNT})",
    )
    parser.add_argument(
        "--max-frames",
        type=int,
        default=1000,
        help="Maximum frames to simulate in headless mode (default: 1000)",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=100,
        help="Print stats every N frames in headless mode (default: 100)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH, help="Canvas width in pixels")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT, help="Canvas height in pixels")

    args = parser.parse_args()
    if args.count < 0:
        parser.error("--count must be non-negative")
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")

    config = SimulationConfig.production(headless=args.headless)
    if config.headless:
        run_headless(args, config)
    else:
        try:
            run_window(args, config)
        except ImportError as e:
            logger.error("Error: pygame is not installed: %s", e)
            logger.error("Install with: pip install -e .")
            sys.exit(1)


if __name__ == "__main__":
    main()
