"""Display and UI configuration constants."""

# Default canvas dimensions in pixels (the host may resize at runtime)
SCREEN_WIDTH = 1088
SCREEN_HEIGHT = 612

# The frame rate for the windowed loop, in frames per second
FRAME_RATE = 60

# Default particle count for seeding and reset
DEFAULT_PARTICLE_COUNT = 100

# Particle drawing
PARTICLE_DRAW_RADIUS = 12
LABEL_FONT_SIZE = 14
LABEL_COLOR = (0, 0, 0)
FLASH_COLOR = (255, 255, 255)
BACKGROUND_COLOR = (18, 18, 24)

# Reaction rings
RING_COLOR = (255, 255, 0)
RING_LINE_WIDTH = 2

# UI Display Constants
SEPARATOR_WIDTH = 60  # Width of separator lines in console output
