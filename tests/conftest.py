import numpy as np
import pytest

from game.drifter import GameConfig, Simulation


class FakeClock:
    """Manually advanced time source"""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def quiet_config():
    # No random star spawns so score changes are exact
    return GameConfig(star_spawn_rate=0.0)


@pytest.fixture
def make_sim(clock, quiet_config):
    def _make(width=800, height=600, seed=0, **overrides):
        config = quiet_config.with_overrides(**overrides) if overrides else quiet_config
        return Simulation(width, height, config=config, seed=seed, clock=clock)
    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
