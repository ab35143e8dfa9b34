from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union
import enum
import os

# ----- Window & grid -----
CELL_SIZE = 20
COLS, ROWS = 20, 20
HUD_HEIGHT = 28

# ----- Colors -----
BG         = (10, 10, 18)
GRID_LINE  = (17, 17, 25)
SNAKE      = (0, 255, 127)
SNAKE_HEAD = (0, 204, 102)
FOOD       = (255, 64, 129)
FOOD_GLOW  = (255, 64, 129, 64)
TEXT       = (220, 220, 230)
HUD_BG     = (16, 16, 28)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}


class Command(enum.Enum):
    """Control commands; applied immediately, never deferred to a tick."""

    START = "start"
    PAUSE = "pause"


# Logical key names as reported by pygame.key.name()
KEY_BINDINGS: Dict[str, Union[Tuple[int, int], Command]] = {
    "up": UP,       "w": UP,
    "down": DOWN,   "s": DOWN,
    "left": LEFT,   "a": LEFT,
    "right": RIGHT, "d": RIGHT,
    "space": Command.START,
    "return": Command.START,
    "p": Command.PAUSE,
}

# ----- High score persistence -----
HIGHSCORE_KEY = "snake_high"


def _default_data_dir() -> Path:
    base = os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / "snake-arcade"


HIGHSCORE_FILE = Path(
    os.getenv("SNAKE_ARCADE_HIGHSCORE_FILE") or _default_data_dir() / "highscore.json"
)

# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    cols: int = COLS
    rows: int = ROWS
    base_tick_ms: int = 150
    speed_step_ms: int = 8
    min_tick_ms: int = 50
    points_per_level: int = 5
    start_length: int = 3
    start_row: int = 10
    food_attempts: int = 1000      # rejection samples before scanning free cells
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.start_length < 1:
            raise ValueError("start_length must be at least 1")
        mid = self.cols // 2
        if mid - (self.start_length - 1) < 0 or mid >= self.cols:
            raise ValueError(
                f"grid of {self.cols} columns cannot hold a snake of length {self.start_length}"
            )
        if not 0 <= self.start_row < self.rows:
            raise ValueError(f"start_row {self.start_row} outside grid of {self.rows} rows")
        if self.cols * self.rows <= self.start_length:
            raise ValueError(
                f"a {self.cols}x{self.rows} grid leaves no room for food beside a snake of length {self.start_length}"
            )
        if self.min_tick_ms <= 0 or self.base_tick_ms < self.min_tick_ms:
            raise ValueError("tick intervals must satisfy 0 < min_tick_ms <= base_tick_ms")

    @property
    def bounds(self) -> Tuple[int, int]:
        return (self.cols, self.rows)


CFG = Config()
