"""Chemistry and collision constants.

These values parameterise the reaction engine. The reaction network
itself (species, rules) lives in ``soup.chemistry.registry``.
"""

# =============================================================================
# INTERACTION RANGE
# =============================================================================
# Two particles interact when their centres are closer than this radius.
# The gate compares squared distances, so this is squared once at use.
INTERACTION_RADIUS = 24.0

# Uniform grid cell size for the spatial index. Particles only interact
# with members of their own cell.
GRID_CELL_SIZE = 50.0


# =============================================================================
# ENERGY
# =============================================================================
# Energy given to freshly created molecules (seeding, autocatalysis, replication)
SEED_ENERGY = 10.0

# Upper bound on energy moved between two non-reacting particles per contact
CONTACT_TRANSFER_CAP = 2.0

# Replication defaults
REPLICATION_ENERGY_COST = 10.0
REPLICATION_PROBABILITY = 0.1
REPLICATION_ENABLED = True


# =============================================================================
# VISUAL STATE
# =============================================================================
# Frames a newly formed molecule is highlighted
REACTION_FLASH_FRAMES = 5

# Velocity components of spawned products are uniform in [-PRODUCT_SPEED, PRODUCT_SPEED)
PRODUCT_SPEED = 1.0

# Reaction ring animation
RING_START_RADIUS = 12.0
RING_START_ALPHA = 0.6
RING_GROWTH_PER_FRAME = 1.5
RING_FADE_PER_FRAME = 0.03
