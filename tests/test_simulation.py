import pytest

from game.drifter import GameConfig, GameState, Simulation
from game.drifter.entities import CollectableStar, Comet, Planet


def _playing(sim):
    """Start the game and clear the random level so tests place entities"""
    sim.key_down()
    sim.planets = []
    sim.comets = []
    return sim


def test_fresh_game(make_sim):
    sim = make_sim()
    assert sim.state == GameState.START
    assert (sim.score, sim.level) == (0, 1)
    assert sim.planets == [] and sim.comets == [] and sim.collectable_stars == []
    assert len(sim.background_stars) == sim.config.static_star_count
    assert sim.player.x == 400
    assert sim.player.y == pytest.approx(200)
    assert not sim.player.is_moving
    assert sim.scale == pytest.approx(600 / 1080)


def test_start_on_key_generates_level_one(make_sim):
    sim = make_sim()
    sim.key_down()
    assert sim.state == GameState.PLAYING
    assert len(sim.planets) == 1 + 3
    assert sim.comets == []


def test_pointer_down_on_title_screen_only_starts(make_sim):
    sim = make_sim()
    sim.pointer_down(10, 10)
    assert sim.state == GameState.PLAYING
    assert not sim.dragging


def test_nothing_happens_before_start(make_sim):
    sim = make_sim()
    assert sim.frame() is True
    sim.update()
    assert sim.state == GameState.START
    assert sim.ticks == 0


def test_fatal_planet_collision(make_sim):
    sim = _playing(make_sim())
    sim.player.x, sim.player.y, sim.player.radius = 100, 100, 20
    sim.planets = [Planet(x=110, y=100, vx=0, vy=0, radius=20)]

    sim.update()
    assert sim.state == GameState.GAME_OVER
    assert sim.death_cause == "planet"


def test_fatal_comet_collision(make_sim):
    sim = _playing(make_sim())
    sim.comets = [Comet(x=sim.player.x + 5, y=sim.player.y, vx=0, vy=0, radius=10)]
    sim.update()
    assert sim.state == GameState.GAME_OVER
    assert sim.death_cause == "comet"


def test_boundary_death(make_sim):
    sim = _playing(make_sim())
    sim.planets = [Planet(x=700, y=500, vx=0, vy=0, radius=20)]
    sim.player.x = -1
    sim.update()
    assert sim.state == GameState.GAME_OVER
    assert sim.death_cause == "boundary"


def test_boundary_death_without_spatial_grid(make_sim):
    sim = _playing(make_sim(use_spatial_grid=False))
    sim.player.y = 601
    sim.update()
    assert sim.death_cause == "boundary"


def test_pickup_scoring(make_sim):
    sim = _playing(make_sim())
    far = CollectableStar(x=700, y=500, radius=5)
    sim.collectable_stars = [CollectableStar(x=sim.player.x, y=sim.player.y, radius=5), far]

    sim.update()
    assert sim.score == sim.config.star_score
    assert sim.collectable_stars == [far]
    assert sim.stars_collected == 1
    assert sim.state == GameState.PLAYING


def test_several_pickups_in_one_tick(make_sim):
    sim = _playing(make_sim())
    px, py = sim.player.x, sim.player.y
    sim.collectable_stars = [CollectableStar(x=px + 3, y=py, radius=5),
                             CollectableStar(x=px - 3, y=py, radius=5)]
    sim.update()
    assert sim.score == 2 * sim.config.star_score
    assert sim.collectable_stars == []


def test_survival_points_while_moving(make_sim):
    sim = _playing(make_sim())
    sim.player.vx, sim.player.is_moving = 0.5, True
    for _ in range(3):
        sim.update()
    assert sim.score == 3 * sim.config.survival_points_per_tick
    assert sim.player.x == pytest.approx(401.5)


def test_parked_player_stays_put(make_sim):
    sim = _playing(make_sim())
    sim.planets = [Planet(x=400, y=400, vx=0, vy=0, radius=40)]
    for _ in range(20):
        sim.update()
    assert (sim.player.vx, sim.player.vy) == (0.0, 0.0)
    assert sim.score == 0


def test_level_up_through_update(make_sim):
    sim = _playing(make_sim())
    sim.score = 1000
    sim.update()
    assert sim.level == 2
    assert sim.state == GameState.LEVEL_TRANSITION
    assert len(sim.planets) == 1 + 3 + 1 * 2


def test_transition_ends_after_delay(make_sim, clock):
    sim = _playing(make_sim())
    sim.score = 1000
    sim.update()

    clock.advance(sim.config.level_transition_delay - 0.1)
    sim.scheduler.run_due()
    assert sim.state == GameState.LEVEL_TRANSITION
    clock.advance(0.1)
    sim.scheduler.run_due()
    assert sim.state == GameState.PLAYING


def test_input_skips_transition_and_cancels_its_timer(make_sim, clock):
    sim = _playing(make_sim())
    sim.score = 1000
    sim.update()
    sim.key_down()
    assert sim.state == GameState.PLAYING

    # A second level-up shortly after; the first timer must not end it early
    clock.advance(1.0)
    sim.planets = []
    sim.comets = []
    sim.score = 1500
    sim.update()
    assert sim.level == 3
    assert sim.state == GameState.LEVEL_TRANSITION

    clock.advance(sim.config.level_transition_delay - 0.5)
    sim.scheduler.run_due()
    assert sim.state == GameState.LEVEL_TRANSITION
    clock.advance(0.5)
    sim.scheduler.run_due()
    assert sim.state == GameState.PLAYING


def test_reset_during_transition_ignores_stale_timer(make_sim, clock):
    sim = _playing(make_sim())
    sim.score = 1000
    sim.update()
    sim.reset()

    clock.advance(10.0)
    sim.frame()
    assert sim.state == GameState.START
    assert sim.level == 1


def test_game_over_freezes_simulation(make_sim):
    sim = _playing(make_sim())
    sim.player.x = -5
    assert sim.frame() is False
    ticks, score = sim.ticks, sim.score
    sim.collectable_stars = [CollectableStar(x=-5, y=sim.player.y)]
    assert sim.frame() is False
    sim.key_down()
    sim.pointer_down(1, 1)
    assert sim.state == GameState.GAME_OVER
    assert (sim.ticks, sim.score) == (ticks, score)


def test_reset_is_idempotent(make_sim):
    sim = _playing(make_sim())
    sim.score = 450
    sim.level = 3
    sim.player.x = -5
    sim.update()

    sim.reset()
    first = (sim.score, sim.level, sim.state, len(sim.planets), len(sim.comets),
             len(sim.collectable_stars), sim.player.x, sim.player.y, sim.player.is_moving)
    sim.reset()
    second = (sim.score, sim.level, sim.state, len(sim.planets), len(sim.comets),
              len(sim.collectable_stars), sim.player.x, sim.player.y, sim.player.is_moving)
    assert first == second
    assert first[:3] == (0, 1, GameState.START)


def test_launch_velocity_is_scaled_and_capped():
    sim = Simulation(1920, 1080, config=GameConfig(star_spawn_rate=0.0), seed=0)
    assert sim.scale == 1.0
    vx, vy = sim.launch_velocity(100, 0)
    assert (vx, vy) == pytest.approx((5.0, 0.0))
    vx, vy = sim.launch_velocity(0, -1000)
    assert (vx, vy) == pytest.approx((0.0, -10.0))


def test_drag_launches_player(make_sim):
    sim = _playing(make_sim())
    sim.pointer_down(100, 100)
    assert sim.drag_line == ((sim.player.x, sim.player.y), (100, 100))
    sim.pointer_up(103, 104)
    assert sim.player.is_moving
    assert not sim.dragging and sim.drag_line is None
    # |drag| = 5, divisor scaled by 600/1080
    speed = 5 / (20 * sim.scale)
    assert sim.player.vx == pytest.approx(speed * 3 / 5)
    assert sim.player.vy == pytest.approx(speed * 4 / 5)


def test_pointer_up_without_drag_is_ignored(make_sim):
    sim = _playing(make_sim())
    sim.pointer_up(50, 50)
    assert not sim.player.is_moving


def test_stars_survive_level_transition(make_sim):
    sim = _playing(make_sim())
    star = CollectableStar(x=700, y=550, radius=5)
    sim.collectable_stars = [star]
    sim.score = 1000
    sim.update()
    assert sim.state == GameState.LEVEL_TRANSITION
    assert sim.collectable_stars == [star]


def test_display_sinks(clock):
    scores, finals = [], []
    sim = Simulation(800, 600, config=GameConfig(star_spawn_rate=0.0), seed=0, clock=clock,
                     on_score=scores.append, on_game_over=finals.append)
    assert scores == [0]
    _playing(sim)
    sim.collectable_stars = [CollectableStar(x=sim.player.x, y=sim.player.y)]
    sim.update()
    sim.player.x = -10
    sim.update()
    assert scores == [0, 100]
    assert finals == [100]


def test_resize_restarts_with_new_scale(make_sim):
    sim = _playing(make_sim())
    sim.score = 300
    sim.resize(1920, 1080)
    assert sim.state == GameState.START
    assert sim.score == 0
    assert sim.scale == 1.0
    assert sim.player.radius == sim.config.player_radius


def test_independent_simulations_do_not_share_state(make_sim):
    a = _playing(make_sim(seed=1))
    b = make_sim(seed=1)
    a.score = 500
    assert b.score == 0
    assert b.state == GameState.START


def test_same_seed_same_level(make_sim):
    a = make_sim(seed=3)
    b = make_sim(seed=3)
    a.key_down()
    b.key_down()
    assert [(p.x, p.y, p.radius) for p in a.planets] == [(p.x, p.y, p.radius) for p in b.planets]


@pytest.mark.parametrize("overrides", [
    {"min_grid_cell_size": 0},
    {"planet_min_radius": 60},
    {"score_threshold_multiplier": 1.0},
    {"star_spawn_rate": 1.5},
    {"collision_check_frequency": 0},
    {"num_planet_variants": 0},
])
def test_invalid_config_fails_fast(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides).validate()
    with pytest.raises(ValueError):
        Simulation(800, 600, config=GameConfig(**overrides))


def test_zero_height_viewport_rejected():
    with pytest.raises(ValueError):
        Simulation(800, 0)


def test_sparse_rebuild_still_sees_first_tick_overlap(make_sim):
    sim = make_sim(collision_check_frequency=2)
    sim.key_down()
    sim.comets = []
    sim.planets = [Planet(x=sim.player.x + 5, y=sim.player.y, vx=0, vy=0, radius=20)]
    sim.update()
    assert sim.state == GameState.GAME_OVER
    assert sim.death_cause == "planet"


def test_sparse_rebuild_reindexes_new_level(make_sim):
    sim = _playing(make_sim(collision_check_frequency=3))
    sim.update()
    sim.score = 1000
    sim.update()
    assert sim.state == GameState.LEVEL_TRANSITION
    sim.key_down()

    sim.comets = []
    sim.planets = [Planet(x=sim.player.x, y=sim.player.y + 10, vx=0, vy=0, radius=20)]
    sim.update()
    assert sim.death_cause == "planet"


def test_level_up_drops_pending_drag(make_sim):
    sim = _playing(make_sim())
    sim.pointer_down(100, 100)
    sim.score = 1000
    sim.update()
    assert sim.state == GameState.LEVEL_TRANSITION
    assert not sim.dragging and sim.drag_line is None

    sim.key_down()
    sim.pointer_up(400, 100)
    assert not sim.player.is_moving
    assert (sim.player.vx, sim.player.vy) == (0.0, 0.0)
