import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from space_invaders_sim.config import SimulationConfig  # noqa: E402
from space_invaders_sim.entities import InputState  # noqa: E402
from space_invaders_sim.persistence import MemoryHighScoreStore  # noqa: E402
from space_invaders_sim.scenes.invaders import Simulation  # noqa: E402


class ScriptedInput:
    """Replays a list of input states, then repeats the last one."""

    def __init__(self, states=None):
        self.states = list(states or [])
        self.current = InputState()
        self.polls = 0

    def poll(self):
        self.polls += 1
        if self.states:
            self.current = self.states.pop(0)
        return self.current


class RecordingPresenter:
    def __init__(self):
        self.huds = []
        self.game_overs = []
        self.menus = []

    def update_hud(self, hud):
        self.huds.append(hud)

    def show_game_over(self, final_score, is_new_high_score):
        self.game_overs.append((final_score, is_new_high_score))

    def show_menu(self, high_score):
        self.menus.append(high_score)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def no_drop_config():
    return SimulationConfig.from_dict(
        {"gameplay": {"drop_chance": 0.0, "drop_chance_step": 0.0}}
    )


@pytest.fixture
def controls():
    return ScriptedInput()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def sim(controls, no_drop_config, store, presenter, rng):
    return Simulation(
        controls,
        config=no_drop_config,
        high_scores=store,
        presenter=presenter,
        rng=rng,
    )
