"""Grid snake: a tick-driven game engine with a pygame front end."""

from .config import Command, Config, DIRECTIONS, UP, DOWN, LEFT, RIGHT
from .game import (
    Collision,
    GameState,
    GridFullError,
    Phase,
    SnakeEngine,
    Snapshot,
    advance,
    check_collision,
    is_opposite,
    place_food,
)
from .highscore import HighScore, JsonFileStore, MemoryStore

__all__ = [
    "Command", "Config", "DIRECTIONS", "UP", "DOWN", "LEFT", "RIGHT",
    "Collision", "GameState", "GridFullError", "Phase", "SnakeEngine", "Snapshot",
    "advance", "check_collision", "is_opposite", "place_food",
    "HighScore", "JsonFileStore", "MemoryStore",
]
