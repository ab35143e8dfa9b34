import random

import pytest

from snake_arcade.config import DOWN, LEFT, RIGHT, UP, Command, Config
from snake_arcade.game import (
    Collision,
    GridFullError,
    Phase,
    SnakeEngine,
    advance,
    check_collision,
    free_cells,
    is_opposite,
    place_food,
    tick_interval,
)
from snake_arcade.highscore import HighScore, MemoryStore


def feed_ahead(engine):
    """Put the food on the cell the snake will enter next tick."""
    engine.state.food = advance(engine.state.snake, engine.state.pending)


# ---------- helpers ----------
def test_opposite_pairs():
    assert is_opposite(LEFT, RIGHT)
    assert is_opposite(UP, DOWN)
    assert not is_opposite(UP, LEFT)
    assert not is_opposite(RIGHT, RIGHT)


def test_advance_does_not_mutate():
    snake = [(10, 10), (9, 10), (8, 10)]
    assert advance(snake, UP) == (10, 9)
    assert snake == [(10, 10), (9, 10), (8, 10)]


def test_wall_checked_before_self():
    snake = [(0, 0), (1, 0)]
    assert check_collision((-1, 0), snake, (20, 20)) is Collision.WALL
    assert check_collision((20, 5), snake, (20, 20)) is Collision.WALL
    assert check_collision((5, 20), snake, (20, 20)) is Collision.WALL
    assert check_collision((3, -1), snake, (20, 20)) is Collision.WALL
    assert check_collision((1, 0), snake, (20, 20)) is Collision.SELF
    assert check_collision((0, 1), snake, (20, 20)) is Collision.NONE


def test_place_food_avoids_snake():
    rng = random.Random(1)
    snake = [(x, 0) for x in range(5)] + [(x, 1) for x in range(5)]
    for _ in range(50):
        assert place_food(snake, (5, 3), rng) not in snake


def test_place_food_falls_back_to_scan():
    snake = [(0, 0), (1, 0)]
    rng = random.Random(0)
    picks = {place_food(snake, (3, 2), rng, max_attempts=0) for _ in range(200)}
    assert picks == {(2, 0), (0, 1), (1, 1), (2, 1)}
    assert free_cells(snake, (3, 2)) == [(2, 0), (0, 1), (1, 1), (2, 1)]


def test_place_food_full_grid_raises():
    snake = [(0, 0), (1, 0), (1, 1), (0, 1)]
    with pytest.raises(GridFullError):
        place_food(snake, (2, 2), random.Random(0), max_attempts=10)


# ---------- scenarios ----------
def test_plain_move(engine):
    assert engine.state.snake == [(10, 10), (9, 10), (8, 10)]
    assert engine.step() is Collision.NONE
    assert engine.state.snake == [(11, 10), (10, 10), (9, 10)]
    assert engine.state.score == 0


def test_wall_collision_ends_game(engine):
    engine.state.snake = [(19, 10), (18, 10), (17, 10)]
    assert engine.step() is Collision.WALL
    assert engine.state.game_over
    assert not engine.state.running
    assert engine.phase is Phase.GAME_OVER
    assert engine.state.score == 0
    assert engine.state.snake == [(19, 10), (18, 10), (17, 10)]


def test_eating_grows_and_scores(engine):
    feed_ahead(engine)
    engine.step()
    state = engine.state
    assert state.snake == [(11, 10), (10, 10), (9, 10), (8, 10)]
    assert state.score == 1
    assert state.food is not None
    assert state.food not in state.snake


def test_fifth_food_speeds_up(engine):
    engine.state.score = 4
    feed_ahead(engine)
    engine.step()
    assert engine.state.score == 5
    assert engine.state.speed_level == 2
    assert engine.state.tick_ms == 134


def test_self_collision_counts_vacating_tail(engine):
    state = engine.state
    state.snake = [(5, 5), (5, 6), (6, 6), (6, 5)]
    state.direction = state.pending = UP
    assert engine.on_direction_input(RIGHT)
    assert engine.step() is Collision.SELF
    assert state.game_over
    assert state.snake == [(5, 5), (5, 6), (6, 6), (6, 5)]


# ---------- laws ----------
def test_speed_law_over_many_foods():
    eng = SnakeEngine(config=Config(cols=40, seed=3))
    eng.on_control_command(Command.START)
    for eaten in range(1, 16):
        before = len(eng.state.snake)
        feed_ahead(eng)
        eng.step()
        assert len(eng.state.snake) == before + 1
        assert eng.state.score == eaten
        k = eaten // 5
        assert eng.state.speed_level == 1 + k
        if k:
            assert eng.state.tick_ms == max(50, 150 - eng.state.speed_level * 8)
        else:
            assert eng.state.tick_ms == 150


def test_tick_interval_is_clamped():
    assert tick_interval(2) == 134
    assert tick_interval(12) == 54
    assert tick_interval(13) == 50
    assert tick_interval(40) == 50


def test_invariants_hold_under_random_play():
    rng = random.Random(42)
    eng = SnakeEngine(config=Config(cols=10, rows=10, start_row=5, seed=42))
    eng.on_control_command(Command.START)
    for _ in range(2000):
        eng.on_direction_input(rng.choice([UP, DOWN, LEFT, RIGHT]))
        eng.step()
        state = eng.state
        if state.game_over:
            eng.on_control_command(Command.START)
            continue
        assert len(state.snake) == len(set(state.snake))
        assert state.food not in state.snake


def test_filling_the_grid_ends_game():
    eng = SnakeEngine(config=Config(cols=4, rows=1, start_row=0, seed=0))
    eng.on_control_command(Command.START)
    assert eng.state.food == (3, 0)
    eng.step()
    assert eng.state.score == 1
    assert eng.state.food is None
    assert eng.state.game_over


def test_reset_restores_starting_layout(engine):
    feed_ahead(engine)
    engine.step()
    engine.reset()
    state = engine.state
    assert state.snake == [(10, 10), (9, 10), (8, 10)]
    assert state.direction == state.pending == RIGHT
    assert (state.score, state.speed_level, state.tick_ms) == (0, 1, 150)
    assert state.phase is Phase.IDLE


def test_config_rejects_grid_too_small():
    with pytest.raises(ValueError):
        Config(cols=2, start_length=3)
    with pytest.raises(ValueError):
        Config(rows=5)
    with pytest.raises(ValueError):
        Config(cols=2, rows=1, start_length=2, start_row=0)


def test_new_high_score_is_persisted():
    store = MemoryStore({"snake_high": "2"})
    eng = SnakeEngine(config=Config(seed=0), high_score=HighScore(store))
    eng.on_control_command(Command.START)
    eng.state.score = 2
    feed_ahead(eng)
    eng.step()
    assert eng.high_score.value == 3
    assert store.get("snake_high") == "3"
    assert eng.snapshot().high_score == 3
