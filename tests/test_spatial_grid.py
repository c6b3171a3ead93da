"""Tests for the uniform spatial grid."""

import pytest

from soup.entities.body import KineticBody
from soup.entities.molecule import Molecule
from soup.entities.particle import Particle
from soup.spatial.grid import SpatialGrid


def particle_at(x, y, tag="A"):
    return Particle(KineticBody(x, y), Molecule(tag, "#fff", 10.0))


class TestCellKey:
    def test_floor_division_by_cell_size(self):
        grid = SpatialGrid(cell_size=50)
        assert grid.cell_key(0, 0) == (0, 0)
        assert grid.cell_key(49.9, 50) == (0, 1)
        assert grid.cell_key(120, 75) == (2, 1)

    def test_negative_positions_get_negative_cells(self):
        grid = SpatialGrid(cell_size=50)
        assert grid.cell_key(-0.5, -60) == (-1, -2)

    def test_invalid_cell_size(self):
        with pytest.raises(ValueError):
            SpatialGrid(cell_size=0)


class TestRebuild:
    def test_each_particle_in_exactly_one_cell(self):
        grid = SpatialGrid(cell_size=50)
        particles = [particle_at(10, 10), particle_at(20, 30), particle_at(60, 10), particle_at(400, 400)]
        grid.rebuild(particles)
        cells = list(grid.cells())
        assert len(grid) == 4
        assert grid.occupied_cell_count() == 3
        flattened = [p for members in cells for p in members]
        assert sorted(id(p) for p in flattened) == sorted(id(p) for p in particles)

    def test_cells_follow_insertion_order(self):
        grid = SpatialGrid(cell_size=50)
        a, b, c = particle_at(300, 300), particle_at(10, 10), particle_at(310, 320)
        grid.rebuild([a, b, c])
        assert list(grid.cells()) == [[a, c], [b]]

    def test_rebuild_discards_previous_step(self):
        grid = SpatialGrid(cell_size=50)
        p = particle_at(10, 10)
        grid.rebuild([p])
        p.body.pos.x = 160.0
        grid.rebuild([p])
        assert grid.members((0, 0)) == []
        assert grid.members((3, 0)) == [p]

    def test_neighbouring_cells_are_not_merged(self):
        grid = SpatialGrid(cell_size=50)
        left, right = particle_at(49, 10), particle_at(51, 10)
        grid.rebuild([left, right])
        assert list(grid.cells()) == [[left], [right]]

    def test_removing_from_working_list_is_visible_to_grid(self):
        grid = SpatialGrid(cell_size=50)
        a, b = particle_at(1, 1), particle_at(2, 2)
        grid.rebuild([a, b])
        members = next(grid.cells())
        members.remove(b)
        assert grid.members((0, 0)) == [a]
        assert len(grid) == 1
