"""Point body with position and velocity."""

from soup.math_utils import Vector2


class KineticBody:
    """A moving point in the plane.

    Attributes:
        pos: Current position
        vel: Velocity, added to ``pos`` once per step
    """

    __slots__ = ("pos", "vel")

    def __init__(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> None:
        self.pos = Vector2(x, y)
        self.vel = Vector2(vx, vy)

    def move(self) -> None:
        """Advance position by one step of velocity. No bounds are applied."""
        self.pos.add_inplace(self.vel)

    def bounce(self, width: float, height: float) -> None:
        """Reflect velocity off the canvas edges.

        Each axis whose position is on or beyond an edge has its velocity
        component negated. The position itself is not clamped, so a body can
        sit on or slightly past an edge for a step.
        """
        if self.pos.x <= 0 or self.pos.x >= width:
            self.vel.x = -self.vel.x
        if self.pos.y <= 0 or self.pos.y >= height:
            self.vel.y = -self.vel.y

    def __repr__(self) -> str:
        return f"KineticBody(pos={self.pos!r}, vel={self.vel!r})"
