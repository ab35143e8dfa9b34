# game.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import enum
import logging
import random

import numpy as np  # type: ignore

from .config import CFG, KEY_BINDINGS, RIGHT, Command, Config
from .highscore import HighScore, MemoryStore

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class Collision(enum.Enum):
    NONE = "none"
    WALL = "wall"
    SELF = "self"


class Phase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GridFullError(RuntimeError):
    """Raised by place_food when the snake covers every cell."""


# ---------- Helpers ----------
def is_opposite(a: Cell, b: Cell) -> bool:
    return a[0] + b[0] == 0 and a[1] + b[1] == 0


def advance(snake: Sequence[Cell], direction: Cell) -> Cell:
    """Next head position. The snake itself is left alone."""
    hx, hy = snake[0]
    dx, dy = direction
    return (hx + dx, hy + dy)


def check_collision(new_head: Cell, snake: Sequence[Cell], bounds: Tuple[int, int]) -> Collision:
    """
    Wall first, then body. The body is the pre-move snake, so the tail cell
    that would be vacated this tick still counts as occupied.
    """
    x, y = new_head
    cols, rows = bounds
    if x < 0 or x >= cols or y < 0 or y >= rows:
        return Collision.WALL
    if new_head in snake:
        return Collision.SELF
    return Collision.NONE


def free_cells(snake: Sequence[Cell], bounds: Tuple[int, int]) -> List[Cell]:
    """Every unoccupied cell in row-major order."""
    cols, rows = bounds
    occupied = np.zeros((rows, cols), dtype=bool)
    for x, y in snake:
        occupied[y, x] = True
    ys, xs = np.nonzero(~occupied)
    return [(int(x), int(y)) for y, x in zip(ys, xs)]


def place_food(
    snake: Sequence[Cell],
    bounds: Tuple[int, int],
    rng: random.Random,
    max_attempts: int = CFG.food_attempts,
) -> Cell:
    """
    Rejection-sample a free cell, uniform on each axis. After ``max_attempts``
    misses pick uniformly from a scan of the free cells, so a crowded
    grid still terminates.
    """
    cols, rows = bounds
    taken = set(snake)
    for _ in range(max_attempts):
        pos = (rng.randrange(cols), rng.randrange(rows))
        if pos not in taken:
            return pos

    cells = free_cells(snake, bounds)
    if not cells:
        raise GridFullError(f"no free cell left on a {cols}x{rows} grid")
    logger.debug("Food sampling missed %d times; scanning %d free cells", max_attempts, len(cells))
    return rng.choice(cells)


def tick_interval(level: int, config: Config = CFG) -> int:
    return max(config.min_tick_ms, config.base_tick_ms - level * config.speed_step_ms)


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Cell]              # head at index 0
    direction: Cell                # committed on the last tick
    pending: Cell                  # applied at the next tick
    food: Optional[Cell]           # None only once the grid is full
    score: int = 0
    speed_level: int = 1
    tick_ms: int = CFG.base_tick_ms
    last_tick: int = 0             # host ms timestamp of last committed tick
    running: bool = False
    paused: bool = False
    game_over: bool = False

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if not self.running:
            return Phase.IDLE
        return Phase.PAUSED if self.paused else Phase.RUNNING


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the presentation layer every frame."""

    snake: Tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    high_score: int
    speed_level: int
    tick_ms: int
    running: bool
    paused: bool
    game_over: bool

    @property
    def head(self) -> Cell:
        return self.snake[0]


def new_game_state(config: Config, rng: random.Random) -> GameState:
    mid = config.cols // 2
    snake = [(mid - i, config.start_row) for i in range(config.start_length)]
    food = place_food(snake, config.bounds, rng, config.food_attempts)
    return GameState(
        snake=snake,
        direction=RIGHT,
        pending=RIGHT,
        food=food,
        tick_ms=config.base_tick_ms,
    )


# ---------- Engine ----------
@dataclass
class SnakeEngine:
    """
    Owns the single GameState and is its only writer.

    The host drives it from one thread: key events go to on_key /
    on_direction_input / on_control_command, and every display frame calls
    on_tick(now_ms) followed by snapshot() for drawing.
    """

    config: Config = field(default_factory=Config)
    high_score: HighScore = field(default_factory=lambda: HighScore(MemoryStore()))
    rng: Optional[random.Random] = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.high_score.load()
        self.state = new_game_state(self.config, self.rng)

    # --- lifecycle ---------------------------------------------------------
    def reset(self) -> GameState:
        """Replace the game wholesale; the high score carries over."""
        self.state = new_game_state(self.config, self.rng)
        return self.state

    @property
    def phase(self) -> Phase:
        return self.state.phase

    # --- input -------------------------------------------------------------
    def on_direction_input(self, direction: Cell) -> bool:
        """Buffer a turn unless it reverses the committed direction."""
        if is_opposite(direction, self.state.direction):
            return False
        self.state.pending = direction
        return True

    def on_control_command(self, command: Command) -> None:
        state = self.state
        if command is Command.START:
            if not state.running or state.game_over:
                state = self.reset()
                state.running = True
                logger.info("Game started (high score %d)", self.high_score.value)
        elif command is Command.PAUSE:
            if state.running and not state.game_over:
                state.paused = not state.paused

    def on_key(self, name: str) -> bool:
        """Dispatch a logical key name. Unknown keys are ignored."""
        action = KEY_BINDINGS.get(name)
        if action is None:
            return False
        if isinstance(action, Command):
            self.on_control_command(action)
        else:
            self.on_direction_input(action)
        return True

    # --- update ------------------------------------------------------------
    def on_tick(self, now_ms: int) -> bool:
        """Frame-clock gate: step only if running and a full interval has passed."""
        state = self.state
        if state.phase is not Phase.RUNNING:
            return False
        if now_ms - state.last_tick < state.tick_ms:
            return False
        state.last_tick = now_ms
        self.step()
        return True

    def step(self) -> Collision:
        """Advance the game by exactly one tick."""
        state = self.state

        # Commit direction once per tick
        state.direction = state.pending

        new_head = advance(state.snake, state.direction)
        hit = check_collision(new_head, state.snake, self.config.bounds)
        if hit is not Collision.NONE:
            self._end_game(hit.value)
            return hit

        state.snake.insert(0, new_head)
        if new_head == state.food:
            self._eat()
        else:
            state.snake.pop()
        return Collision.NONE

    def _eat(self) -> None:
        state = self.state
        state.score += 1
        if self.high_score.offer(state.score):
            logger.info("New high score: %d", state.score)

        if state.score % self.config.points_per_level == 0:
            state.speed_level += 1
            state.tick_ms = tick_interval(state.speed_level, self.config)
            logger.debug("Speed level %d, tick %d ms", state.speed_level, state.tick_ms)

        try:
            state.food = place_food(state.snake, self.config.bounds, self.rng, self.config.food_attempts)
        except GridFullError:
            state.food = None
            self._end_game("grid full")

    def _end_game(self, reason: str) -> None:
        self.state.game_over = True
        self.state.running = False
        logger.info("Game over (%s) with score %d", reason, self.state.score)

    # --- presentation ------------------------------------------------------
    def snapshot(self) -> Snapshot:
        state = self.state
        return Snapshot(
            snake=tuple(state.snake),
            food=state.food,
            score=state.score,
            high_score=self.high_score.value,
            speed_level=state.speed_level,
            tick_ms=state.tick_ms,
            running=state.running,
            paused=state.paused,
            game_over=state.game_over,
        )
