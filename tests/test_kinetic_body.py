"""Tests for KineticBody motion and edge bouncing."""

from soup.entities.body import KineticBody


class TestMove:
    def test_move_adds_velocity(self):
        body = KineticBody(10, 20, 1.5, -2.0)
        body.move()
        assert body.pos.x == 11.5
        assert body.pos.y == 18.0

    def test_move_is_unbounded(self):
        body = KineticBody(1, 1, -5, -5)
        body.move()
        assert body.pos.x == -4
        assert body.pos.y == -4


class TestBounce:
    def test_left_edge_reverses_negative_vx(self):
        body = KineticBody(0, 50, -1.0, 0.5)
        body.bounce(100, 100)
        assert body.vel.x > 0
        assert body.vel.y == 0.5

    def test_repeated_bounce_toggles_each_call(self):
        body = KineticBody(0, 50, -1.0, 0.0)
        signs = []
        for _ in range(4):
            body.bounce(100, 100)
            signs.append(body.vel.x > 0)
        assert signs == [True, False, True, False]

    def test_right_and_bottom_edges(self):
        body = KineticBody(100, 80, 2.0, 3.0)
        body.bounce(100, 80)
        assert body.vel.x == -2.0
        assert body.vel.y == -3.0

    def test_interior_position_unchanged(self):
        body = KineticBody(50, 50, 1.0, -1.0)
        body.bounce(100, 100)
        assert (body.vel.x, body.vel.y) == (1.0, -1.0)

    def test_position_is_not_clamped(self):
        body = KineticBody(103.0, -2.0, 1.0, -1.0)
        body.bounce(100, 100)
        assert body.pos.x == 103.0
        assert body.pos.y == -2.0
        assert body.vel.x == -1.0
        assert body.vel.y == 1.0
