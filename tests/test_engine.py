"""Tests for the simulation engine step loop and population mutation."""

import pytest

from soup.config.simulation_config import SimulationConfig
from soup.exceptions import ConfigurationError, SimulationError
from soup.sim.events import Autocatalysis, PairReaction, Replication
from soup.simulation.engine import RingView, SimulationEngine, create_engine
from soup.update_phases import UpdatePhase
from tests.fakes.scripted_rng import ScriptedRNG


def still(x, y, tag):
    """Seed tuple for a stationary particle."""
    return ((x, y), (0.0, 0.0), tag)


def structures(engine):
    return [p.molecule.structure for p in engine.population]


class TestSeeding:
    def test_seed_population_with_explicit_tags(self, simulation_engine):
        added = simulation_engine.seed_population(
            [((10, 20), (1, -1), "A"), ((30, 40), (0, 0), "BC")]
        )
        assert len(added) == 2
        assert structures(simulation_engine) == ["A", "BC"]
        first = simulation_engine.particles[0]
        assert (first.pos.x, first.pos.y, first.vel.x, first.vel.y) == (10, 20, 1, -1)
        assert all(p.molecule.energy == 10.0 for p in added)

    def test_seed_energy_follows_config(self):
        config = SimulationConfig()
        config.chemistry.seed_energy = 25.0
        engine = SimulationEngine(config, width=400, height=300, seed=1)
        [particle] = engine.seed_population([still(10, 10, "A")])
        assert particle.molecule.energy == 25.0

    def test_explicit_registry_wins_over_config_seed_energy(self, registry):
        config = SimulationConfig()
        config.chemistry.seed_energy = 25.0
        engine = SimulationEngine(config, width=400, height=300, registry=registry, seed=1)
        [particle] = engine.seed_population([still(10, 10, "A")])
        assert particle.molecule.energy == 10.0

    def test_seed_population_random_tags(self, simulation_engine, registry):
        simulation_engine.seed_population([still(1, 1, None), still(2, 2, "random")])
        assert all(tag in registry.species_tags for tag in structures(simulation_engine))

    def test_seed_population_unknown_tag(self, simulation_engine):
        with pytest.raises(ConfigurationError):
            simulation_engine.seed_population([still(1, 1, "Q")])

    def test_populate_random_fills_canvas(self, simulation_engine):
        simulation_engine.populate_random(60)
        assert len(simulation_engine.population) == 60
        for p in simulation_engine.particles:
            assert 0 <= p.pos.x < 400 and 0 <= p.pos.y < 300
            assert -1 <= p.vel.x < 1 and -1 <= p.vel.y < 1

    def test_populate_random_replaces_population_and_rings(self, simulation_engine):
        simulation_engine.seed_population([still(100, 100, "A"), still(105, 100, "B")])
        simulation_engine.update()
        assert simulation_engine.current_effects()
        simulation_engine.populate_random(5)
        assert len(simulation_engine.population) == 5
        assert simulation_engine.current_effects() == ()

    def test_populate_random_negative_count(self, simulation_engine):
        with pytest.raises(SimulationError):
            simulation_engine.populate_random(-1)


class TestPairReactions:
    def test_reacting_pair_fuses_into_one_particle(self, simulation_engine):
        simulation_engine.seed_population([still(100, 100, "A"), still(110, 100, "B")])
        simulation_engine.update()

        bodies = simulation_engine.current_bodies()
        assert len(bodies) == 1
        body = bodies[0]
        assert (body.x, body.y, body.structure, body.reacting) == (100, 100, "AB", 5)
        assert simulation_engine.particles[0].molecule.energy == 25.0

        [event] = simulation_engine.last_step_events
        assert isinstance(event, PairReaction)
        assert event.reactants == ("A", "B")
        assert (event.x, event.y) == (100, 100)

        effects = simulation_engine.current_effects()
        assert effects == (RingView(100.0, 100.0, 12.0, pytest.approx(0.6), True),)

    def test_reaction_is_directional(self, simulation_engine):
        simulation_engine.seed_population(
            [((100, 100), (1, 0), "B"), ((110, 100), (-1, 0), "A")]
        )
        simulation_engine.update()
        assert structures(simulation_engine) == ["B", "A"]
        b, a = simulation_engine.particles
        # Non-reacting contact: velocities swapped, equal energies so B donates
        assert (b.vel.x, a.vel.x) == (-1, 1)
        assert b.molecule.energy <= 10.0 <= a.molecule.energy
        assert b.molecule.energy + a.molecule.energy == pytest.approx(20.0)

    def test_out_of_range_pair_does_nothing(self, simulation_engine):
        simulation_engine.seed_population([still(100, 100, "A"), still(124, 100, "B")])
        simulation_engine.update()
        assert structures(simulation_engine) == ["A", "B"]
        assert simulation_engine.last_step_events == []

    def test_pair_across_cell_border_is_missed(self, simulation_engine):
        simulation_engine.seed_population([still(49, 10, "A"), still(51, 10, "B")])
        simulation_engine.update()
        assert structures(simulation_engine) == ["A", "B"]
        assert [p.molecule.energy for p in simulation_engine.particles] == [10.0, 10.0]

    def test_consumed_particle_is_never_revisited(self):
        engine = SimulationEngine(width=400, height=300, rng=ScriptedRNG([0.5]))
        engine.seed_population(
            [still(100, 100, "A"), still(104, 100, "B"), still(108, 100, "A"), still(112, 100, "B")]
        )
        engine.update()
        assert structures(engine) == ["AB", "AB"]
        assert len(engine.current_bodies()) == 2
        assert engine.event_totals["pair_reactions"] == 2

    def test_endothermic_pair_needs_energy(self, simulation_engine):
        b, c = simulation_engine.seed_population([still(100, 100, "B"), still(105, 100, "C")])
        b.molecule.energy = 3.0
        c.molecule.energy = 4.0
        simulation_engine.update()
        assert structures(simulation_engine) == ["B", "C"]

    def test_last_pair_leaves_population_consistent(self, simulation_engine):
        simulation_engine.seed_population([still(10, 10, "A"), still(12, 10, "B")])
        simulation_engine.update()
        assert len(simulation_engine.population) == 1
        simulation_engine.remove_particle(simulation_engine.particles[0])
        assert len(simulation_engine.population) == 0
        simulation_engine.update()
        assert simulation_engine.current_bodies() == ()


class TestAutocatalysisAndReplication:
    def test_autocatalysis_spawns_product_at_centroid(self):
        engine = SimulationEngine(width=400, height=300, rng=ScriptedRNG([0.0]))
        a, b, bc = engine.seed_population(
            [still(100, 100, "A"), still(110, 100, "B"), still(105, 109, "BC")]
        )
        bc.molecule.energy = 10.0
        engine.update()

        kinds = [type(e) for e in engine.last_step_events]
        assert kinds == [Autocatalysis, PairReaction]
        auto = engine.last_step_events[0]
        assert auto.product == "AB"
        assert auto.x == pytest.approx(105.0)
        assert auto.y == pytest.approx(103.0)

        assert structures(engine) == ["AB", "BC", "AB"]
        assert bc.molecule.energy == 0.0
        product = engine.particles[-1]
        assert product.molecule.energy == 10.0
        assert product.molecule.reacting == 5
        assert (product.pos.x, product.pos.y) == pytest.approx((105.0, 103.0))
        assert (product.vel.x, product.vel.y) == (-1.0, -1.0)
        assert len(engine.current_effects()) == 2

    def test_replication_copies_template(self):
        engine = SimulationEngine(width=400, height=300, rng=ScriptedRNG([0.0]))
        template, _, _ = engine.seed_population(
            [still(100, 100, "AB"), still(108, 100, "A"), still(104, 106, "B")]
        )
        engine.update()

        replication = [e for e in engine.last_step_events if isinstance(e, Replication)]
        assert len(replication) == 1
        assert replication[0].template == "AB"
        assert template.molecule.energy == 0.0
        assert structures(engine) == ["AB", "AB", "AB"]
        copy = engine.particles[-1]
        assert copy.molecule.energy == 10.0
        assert (copy.pos.x, copy.pos.y) == (100.0, 100.0)

    def test_replication_can_be_disabled(self):
        config = SimulationConfig()
        config.chemistry.replication_enabled = False
        engine = SimulationEngine(config, width=400, height=300, rng=ScriptedRNG([0.0]))
        engine.seed_population([still(100, 100, "AB"), still(108, 100, "A"), still(104, 106, "B")])
        engine.update()
        assert structures(engine) == ["AB", "AB"]
        assert engine.event_totals["replications"] == 0

    def test_products_do_not_react_in_their_birth_step(self):
        engine = SimulationEngine(width=400, height=300, rng=ScriptedRNG([0.0]))
        engine.seed_population([still(100, 100, "AB"), still(108, 100, "A"), still(104, 106, "B")])
        engine.update()
        assert engine.event_totals == {"pair_reactions": 1, "autocatalysis": 0, "replications": 1}


class TestStepLoop:
    def test_phases_run_in_order(self, simulation_engine, monkeypatch):
        order = []
        for name in (
            "_phase_frame_start",
            "_phase_movement",
            "_phase_spatial_index",
            "_phase_autocatalysis",
            "_phase_collision",
            "_phase_frame_end",
        ):
            original = getattr(simulation_engine, name)

            def tracked(original=original, name=name):
                original()
                order.append((name, simulation_engine.get_current_phase()))

            monkeypatch.setattr(simulation_engine, name, tracked)

        simulation_engine.update()
        assert [name for name, _ in order] == [
            "_phase_frame_start",
            "_phase_movement",
            "_phase_spatial_index",
            "_phase_autocatalysis",
            "_phase_collision",
            "_phase_frame_end",
        ]
        assert [phase for _, phase in order[:-1]] == [
            UpdatePhase.FRAME_START,
            UpdatePhase.MOVEMENT,
            UpdatePhase.SPATIAL_INDEX,
            UpdatePhase.AUTOCATALYSIS,
            UpdatePhase.COLLISION,
        ]
        assert simulation_engine.get_current_phase() is None

    def test_motion_and_bounce(self, simulation_engine):
        [p] = simulation_engine.seed_population([((1, 150), (-2, 0), "A")])
        simulation_engine.update()
        assert p.pos.x == -1
        assert p.vel.x == 2
        simulation_engine.update()
        assert p.pos.x == 1

    def test_resize_moves_bounce_bounds(self, simulation_engine):
        [p] = simulation_engine.seed_population([((150, 100), (1, 0), "A")])
        simulation_engine.resize(120, 300)
        simulation_engine.update()
        assert p.vel.x == -1
        with pytest.raises(SimulationError):
            simulation_engine.resize(0, 10)

    def test_paused_engine_does_not_advance(self, simulation_engine):
        [p] = simulation_engine.seed_population([((50, 50), (1, 1), "A")])
        simulation_engine.paused = True
        simulation_engine.update()
        assert simulation_engine.frame_count == 0
        assert (p.pos.x, p.pos.y) == (50, 50)

    def test_flash_and_ring_age_each_step(self, simulation_engine):
        simulation_engine.seed_population([still(100, 100, "A"), still(105, 100, "B")])
        simulation_engine.update()
        simulation_engine.update()
        [body] = simulation_engine.current_bodies()
        [ring] = simulation_engine.current_effects()
        assert body.reacting == 4
        assert ring.radius == pytest.approx(13.5)
        assert ring.alpha == pytest.approx(0.57)

        for _ in range(25):
            simulation_engine.update()
        assert simulation_engine.current_bodies()[0].reacting == 0
        assert simulation_engine.current_effects() == ()

    def test_ring_objects_are_reused(self, simulation_engine):
        simulation_engine.seed_population([still(100, 100, "A"), still(105, 100, "B")])
        simulation_engine.update()
        for _ in range(25):
            simulation_engine.update()
        simulation_engine.seed_population([still(300, 200, "A"), still(305, 200, "B")])
        simulation_engine.update()
        assert len(simulation_engine.current_effects()) == 1
        assert len(simulation_engine.ring_pool) == 1

    def test_remove_unknown_particle(self, simulation_engine):
        other = create_engine(100, 100, seed=1)
        [stranger] = other.seed_population([still(1, 1, "A")])
        with pytest.raises(SimulationError):
            simulation_engine.remove_particle(stranger)

    def test_bodies_stay_paired_over_a_long_run(self):
        engine = create_engine(200, 150, seed=7)
        engine.populate_random(150)
        for _ in range(200):
            before = len(engine.population)
            engine.update()
            after = len(engine.population)
            bodies = engine.current_bodies()
            assert len(bodies) == after >= 0
            ids = [p.particle_id for p in engine.particles]
            assert len(set(ids)) == len(ids)
            pair_reactions = sum(isinstance(e, PairReaction) for e in engine.last_step_events)
            spawned = len(engine.last_step_events) - pair_reactions
            assert after == before - pair_reactions + spawned


class TestStats:
    def test_stats_snapshot(self, simulation_engine):
        simulation_engine.seed_population([still(10, 10, "A"), still(200, 200, "C"), still(300, 50, "C")])
        simulation_engine.update()
        stats = simulation_engine.get_stats()
        assert stats["frame"] == 1
        assert stats["population"] == 3
        assert stats["species"] == {"A": 1, "B": 0, "C": 2, "AB": 0, "BC": 0}
        assert stats["total_energy"] == pytest.approx(30.0)
        assert stats["reaction_totals"]["pair_reactions"] == 0

    def test_run_headless_seeds_and_reports(self):
        config = SimulationConfig()
        config.display.particle_count = 40
        engine = SimulationEngine(config, width=300, height=200, seed=3)
        stats = engine.run_headless(max_frames=20, stats_interval=10)
        assert engine.frame_count == 20
        assert stats["frame"] == 20
        assert stats["population"] == len(engine.population)


def test_invalid_config_rejected():
    config = SimulationConfig()
    config.chemistry.cell_size = 0
    with pytest.raises(ConfigurationError):
        SimulationEngine(config)
