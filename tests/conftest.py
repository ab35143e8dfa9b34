import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from snake_arcade.config import Command, Config
from snake_arcade.game import SnakeEngine
from snake_arcade.highscore import HighScore, MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(store):
    """A started 20x20 game with food parked out of the way."""
    eng = SnakeEngine(config=Config(seed=0), high_score=HighScore(store), rng=random.Random(0))
    eng.on_control_command(Command.START)
    eng.state.food = (0, 0)
    return eng
