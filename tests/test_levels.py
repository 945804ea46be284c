import numpy as np
import pytest

from game.drifter import DEFAULT_CONFIG, GameState
from game.drifter.levels import LevelDirector


@pytest.fixture
def director():
    return LevelDirector(DEFAULT_CONFIG, np.random.default_rng(7))


def test_required_score_progression(director):
    assert director.required_score_for(1) == 1000
    assert director.required_score_for(2) == pytest.approx(1500)
    assert director.required_score_for(3) == pytest.approx(2250)
    for level in range(1, 30):
        assert director.required_score_for(level + 1) > director.required_score_for(level)


def test_planet_count_grows(director):
    counts = [len(director.generate_planets_for_level(level, 800, 600, 1.0)) for level in range(1, 10)]
    assert counts[0] == 1 + 3
    assert counts[1] == 1 + 3 + 2
    assert counts == sorted(counts)


def test_central_planet_first(director):
    planets = director.generate_planets_for_level(1, 800, 600, 0.5)
    central = planets[0]
    assert (central.x, central.y) == (400, 300)
    assert central.radius == pytest.approx(40 * 0.5)


def test_random_planets_within_ranges(director):
    scale = 0.5
    for level in (1, 5, 10):
        for p in director.generate_planets_for_level(level, 800, 600, scale)[1:]:
            assert 20 * scale <= p.radius < 50 * scale
            assert 0 <= p.x < 800 and 0 <= p.y < 600
            assert abs(p.vx) <= 0.25 * scale and abs(p.vy) <= 0.25 * scale
            assert 0 <= p.variant < DEFAULT_CONFIG.num_planet_variants


def test_comets_enter_from_an_edge(director):
    width, height, scale = 800, 600, 1.0
    speed = DEFAULT_CONFIG.comet_speed * scale
    for _ in range(200):
        c = director.generate_comet(width, height, scale)
        assert c.radius == DEFAULT_CONFIG.comet_radius * scale
        if c.y == 0.0:
            assert c.vy >= 0 and abs(c.vx) <= speed / 2
        elif c.x == width:
            assert c.vx <= 0 and abs(c.vy) <= speed / 2
        elif c.y == height:
            assert c.vy <= 0 and abs(c.vx) <= speed / 2
        else:
            assert c.x == 0.0
            assert c.vx >= 0 and abs(c.vy) <= speed / 2


def test_star_spawn_rate_extremes():
    never = LevelDirector(DEFAULT_CONFIG.with_overrides(star_spawn_rate=0.0), np.random.default_rng(0))
    always = LevelDirector(DEFAULT_CONFIG.with_overrides(star_spawn_rate=1.0), np.random.default_rng(0))
    assert all(never.maybe_spawn_star(800, 600, 1.0) is None for _ in range(100))
    star = always.maybe_spawn_star(800, 600, 0.5)
    assert star is not None
    assert star.radius == DEFAULT_CONFIG.star_radius * 0.5


def test_background_stars(director):
    stars = director.generate_background_stars(800, 600, 2.0)
    assert len(stars) == DEFAULT_CONFIG.static_star_count
    assert all(2.0 <= s.radius < 6.0 for s in stars)


def test_comets_only_from_comet_level(make_sim):
    sim = make_sim()
    for level in (1, 2):
        sim.level = level
        sim.director.populate_level(sim)
        assert sim.comets == []
    sim.level = 3
    sim.director.populate_level(sim)
    assert len(sim.comets) == 1


def test_level_start_replaces_comets(make_sim):
    sim = make_sim()
    sim.level = 4
    sim.director.populate_level(sim)
    first = sim.comets[0]
    sim.director.start_level(sim)
    assert len(sim.comets) == 1
    assert sim.comets[0] is not first


def test_completion_below_threshold(make_sim):
    sim = make_sim()
    sim.key_down()
    sim.score = 999
    assert sim.director.check_level_completion(sim) is False
    assert sim.level == 1
    assert sim.state == GameState.PLAYING


def test_level_up_scenario(make_sim):
    sim = make_sim()
    sim.key_down()
    sim.player.x, sim.player.y, sim.player.vx, sim.player.is_moving = 10, 10, 3.0, True
    sim.score = int(sim.director.required_score_for(1))

    assert sim.director.check_level_completion(sim) is True
    assert sim.level == 2
    assert sim.state == GameState.LEVEL_TRANSITION
    assert len(sim.planets) == 1 + 3 + 2
    # Player is back at the spawn point, parked
    assert (sim.player.x, sim.player.y) == (400, pytest.approx(200))
    assert sim.player.vx == 0.0 and not sim.player.is_moving
