# main.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import pygame  # type: ignore

from .config import CELL_SIZE, HUD_HEIGHT, HIGHSCORE_FILE, Config
from .game import SnakeEngine
from .highscore import HighScore, JsonFileStore
from .render import draw_frame

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Grid snake. Arrows/WASD steer, SPACE starts, P pauses.")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument(
        "--highscore-file",
        type=str,
        default=str(HIGHSCORE_FILE),
        help="JSON file the best score is kept in",
    )
    parser.add_argument("--fps", type=int, default=60, help="display refresh rate")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def build_engine(args: argparse.Namespace) -> SnakeEngine:
    config = Config(seed=args.seed)
    high_score = HighScore(JsonFileStore(args.highscore_file))
    return SnakeEngine(config=config, high_score=high_score)


def handle_events(engine: SnakeEngine) -> bool:
    """Feed key presses to the engine. Return False to quit."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            name = pygame.key.name(event.key)
            if name == "escape":
                return False
            engine.on_key(name)
    return True


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    engine = build_engine(args)
    cfg = engine.config

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((cfg.cols * CELL_SIZE, HUD_HEIGHT + cfg.rows * CELL_SIZE))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()
    logger.info("High score file: %s", args.highscore_file)

    running = True
    while running:
        # 1) input
        running = handle_events(engine)
        if not running:
            break

        # 2) update; movement gated inside on_tick
        engine.on_tick(pygame.time.get_ticks())

        # 3) render every frame, tick or not
        draw_frame(screen, font, engine.snapshot(), cfg)
        pygame.display.flip()
        clock.tick(args.fps)

    pygame.quit()


if __name__ == "__main__":
    main()
