# render.py
from typing import Sequence, Tuple

import pygame  # type: ignore

from .config import (
    CELL_SIZE, HUD_HEIGHT,
    BG, GRID_LINE, SNAKE, SNAKE_HEAD, FOOD, FOOD_GLOW, TEXT, HUD_BG,
    Config,
)
from .game import Snapshot


def board_rect(col: int, row: int, inset: int = 0) -> pygame.Rect:
    return pygame.Rect(
        col * CELL_SIZE + inset,
        HUD_HEIGHT + row * CELL_SIZE + inset,
        CELL_SIZE - 2 * inset,
        CELL_SIZE - 2 * inset,
    )


def draw_grid(screen: pygame.Surface, config: Config) -> None:
    width, height = config.cols * CELL_SIZE, config.rows * CELL_SIZE
    for x in range(config.cols + 1):
        pygame.draw.line(screen, GRID_LINE, (x * CELL_SIZE, HUD_HEIGHT), (x * CELL_SIZE, HUD_HEIGHT + height))
    for y in range(config.rows + 1):
        py = HUD_HEIGHT + y * CELL_SIZE
        pygame.draw.line(screen, GRID_LINE, (0, py), (width, py))


def draw_food(screen: pygame.Surface, food: Tuple[int, int]) -> None:
    # Soft glow first, drawn on its own alpha surface
    glow = pygame.Surface((CELL_SIZE * 2, CELL_SIZE * 2), pygame.SRCALPHA)
    pygame.draw.circle(glow, FOOD_GLOW, (CELL_SIZE, CELL_SIZE), CELL_SIZE)
    rect = board_rect(*food)
    screen.blit(glow, (rect.centerx - CELL_SIZE, rect.centery - CELL_SIZE))
    pygame.draw.rect(screen, FOOD, board_rect(*food, inset=2), border_radius=4)


def draw_snake(screen: pygame.Surface, snake: Sequence[Tuple[int, int]]) -> None:
    # Tail to head so the head ends up on top
    for i in range(len(snake) - 1, -1, -1):
        color = SNAKE_HEAD if i == 0 else SNAKE
        pygame.draw.rect(screen, color, board_rect(*snake[i], inset=1), border_radius=4)


def draw_hud(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot) -> None:
    pygame.draw.rect(screen, HUD_BG, pygame.Rect(0, 0, screen.get_width(), HUD_HEIGHT))
    txt = font.render(
        f"Score: {snap.score}   Best: {snap.high_score}   Speed: {snap.speed_level}",
        True, TEXT,
    )
    screen.blit(txt, (8, (HUD_HEIGHT - txt.get_height()) // 2))


def draw_game(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot, config: Config) -> None:
    screen.fill(BG)
    draw_grid(screen, config)
    if snap.food is not None:
        draw_food(screen, snap.food)
    draw_snake(screen, snap.snake)
    draw_hud(screen, font, snap)


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, title: str, *lines: str) -> None:
    # Dim with translucent overlay
    overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))
    screen.blit(overlay, (0, 0))

    cx, cy = screen.get_width() // 2, screen.get_height() // 2
    rendered = [font.render(title, True, (240, 240, 250))]
    rendered += [font.render(line, True, TEXT) for line in lines]
    top = cy - 16 * len(rendered)
    for i, surf in enumerate(rendered):
        screen.blit(surf, surf.get_rect(center=(cx, top + i * 32 + 16)))


def overlay_text(snap: Snapshot) -> Tuple[str, ...]:
    """Title and message lines for the current phase; empty while playing."""
    if snap.game_over:
        return ("GAME OVER", f"Score: {snap.score}", "Press SPACE to retry")
    if not snap.running:
        return ("SNAKE", "Press SPACE to start")
    if snap.paused:
        return ("PAUSED", "Press P to resume")
    return ()


def draw_frame(screen: pygame.Surface, font: pygame.font.Font, snap: Snapshot, config: Config) -> None:
    draw_game(screen, font, snap, config)
    text = overlay_text(snap)
    if text:
        draw_overlay(screen, font, *text)
