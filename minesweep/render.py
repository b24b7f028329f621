"""Drawing of the board, its cell animations, particles and shockwaves."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

import pygame

from minesweep.assets import Assets
from minesweep.board import Cell, CellState
from minesweep.game import GameState, MinesweeperApp, Shockwave
from minesweep.particle import PARTICLE_RADIUS, Particle

TOP_BAR_HEIGHT = 60.0

Color = tuple[int, int, int, int]

COVERED_COLOR_EVEN: Color = (255, 180, 60, 255)
COVERED_COLOR_ODD: Color = (255, 200, 100, 255)
UNCOVERED_COLOR_EVEN: Color = (195, 195, 195, 255)
UNCOVERED_COLOR_ODD: Color = (225, 225, 225, 255)

BLUE: Color = (0, 121, 241, 255)
GREEN: Color = (0, 228, 48, 255)
RED: Color = (230, 41, 55, 255)
DARKBLUE: Color = (0, 82, 172, 255)
MAROON: Color = (190, 33, 55, 255)
DARKGREEN: Color = (0, 117, 44, 255)
BLACK: Color = (0, 0, 0, 255)
GRAY: Color = (130, 130, 130, 255)
DARKGRAY: Color = (80, 80, 80, 255)

NUMBER_FONT_SCALE = 0.8
NUMBER_TEXT_Y_OFFSET = -4.0
FLAG_ICON_SCALE = 0.7
FLAG_XY_OFFSET = 6.0
FLAG_LINE_WIDTH = 4
MINE_ICON_SCALE = 0.7
CELL_BORDER_WIDTH = 2
POP_LINE_WIDTH = 2

SHOCKWAVE_LINE_WIDTH = 6
SHOCKWAVE_RGB = (255, 0, 0)
SHOCKWAVE_MAX_ALPHA = 180.0

_NUMBER_COLORS = {
    1: BLUE,
    2: GREEN,
    3: RED,
    4: DARKBLUE,
    5: MAROON,
    6: DARKGREEN,
    7: BLACK,
    8: GRAY,
}


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def cell_colors(row: int, col: int) -> tuple[Color, Color]:
    """Return the ``(covered, uncovered)`` colours of a cell in the checker pattern."""
    if (row + col) % 2 == 0:
        return COVERED_COLOR_EVEN, UNCOVERED_COLOR_EVEN
    return COVERED_COLOR_ODD, UNCOVERED_COLOR_ODD


def number_color(n: int) -> Color:
    """Return the classic colour for an adjacent-mine count."""
    return _NUMBER_COLORS.get(n, BLACK)


def draw_cell_number(
    surface: pygame.Surface, n: int, cx: float, cy: float, cell_size: float
) -> pygame.Rect:
    """Draw a count centred on a point; return the rectangle the text covers."""
    font = _font(max(int(cell_size * NUMBER_FONT_SCALE), 1))
    rendered = font.render(str(n), True, number_color(n))
    rect = rendered.get_rect(center=(round(cx), round(cy)))
    surface.blit(rendered, rect)
    return rect


def _blit_scaled(
    surface: pygame.Surface, image: pygame.Surface, x: float, y: float, cell_size: float, scale: float
) -> None:
    side = max(int(cell_size * scale), 1)
    offset = (cell_size - cell_size * scale) / 2.0
    surface.blit(pygame.transform.scale(image, (side, side)), (x + offset, y + offset))


def _draw_cell_content(
    surface: pygame.Surface,
    app: MinesweeperApp,
    assets: Assets,
    state: CellState,
    cell: Cell,
    row: int,
    col: int,
    x: float,
    y: float,
) -> None:
    size = app.cell_size
    if state is CellState.FLAGGED:
        _blit_scaled(surface, assets.flag, x, y, size, FLAG_ICON_SCALE)
        if app.state in (GameState.GAME_OVER, GameState.LOST) and (row, col) in app.wrong_flags:
            x1, y1 = x + FLAG_XY_OFFSET, y + FLAG_XY_OFFSET
            x2, y2 = x + size - FLAG_XY_OFFSET, y + size - FLAG_XY_OFFSET
            pygame.draw.line(surface, RED, (x1, y1), (x2, y2), FLAG_LINE_WIDTH)
            pygame.draw.line(surface, RED, (x1, y2), (x2, y1), FLAG_LINE_WIDTH)
    elif state is CellState.UNCOVERED:
        if cell.is_mine:
            _blit_scaled(surface, assets.mine, x, y, size, MINE_ICON_SCALE)
        elif cell.count:
            draw_cell_number(surface, cell.count, x + size / 2.0, y + size / 2.0, size)


def _draw_pop(
    surface: pygame.Surface,
    cell: Cell,
    x: float,
    y: float,
    cell_size: float,
    scale: float,
    finished: bool,
    color: Color,
) -> None:
    cx = x + cell_size / 2.0
    cy = y + cell_size / 2.0
    side = cell_size * scale
    rect = pygame.Rect(cx - side / 2.0, cy - side / 2.0, side, side)
    pygame.draw.rect(surface, color, rect)
    pygame.draw.rect(surface, DARKGRAY, rect, POP_LINE_WIDTH)
    if finished and cell.count:
        draw_cell_number(surface, cell.count, cx, cy, cell_size)


def draw_board(
    surface: pygame.Surface, app: MinesweeperApp, assets: Assets, dt: float, now: float
) -> None:
    """Draw every cell, advancing its wave and pop animations by ``dt`` seconds."""
    size = app.cell_size
    for row, col in app.board.positions():
        x = col * size
        y = row * size + TOP_BAR_HEIGHT
        covered_color, uncovered_color = cell_colors(row, col)
        cell = app.board.cell(row, col) or Cell.EMPTY

        if app.advance_wave(row, col, dt, now):
            continue
        pop = app.advance_pop(row, col, dt)
        if pop is not None:
            scale, finished = pop
            _draw_pop(surface, cell, x, y, size, scale, finished, uncovered_color)
            continue

        state = app.board.cell_state(row, col) or CellState.COVERED
        background = uncovered_color if state is CellState.UNCOVERED else covered_color
        rect = pygame.Rect(x, y, size, size)
        pygame.draw.rect(surface, background, rect)
        pygame.draw.rect(surface, DARKGRAY, rect, CELL_BORDER_WIDTH)
        _draw_cell_content(surface, app, assets, state, cell, row, col, x, y)


def draw_particles(surface: pygame.Surface, particles: Iterable[Particle]) -> None:
    """Draw each particle as a small filled circle."""
    for particle in particles:
        pygame.draw.circle(surface, particle.color, (particle.x, particle.y), PARTICLE_RADIUS)


def draw_shockwaves(surface: pygame.Surface, shockwaves: Iterable[Shockwave]) -> None:
    """Draw each visible shockwave as a translucent red ring."""
    for wave in shockwaves:
        alpha = wave.alpha
        if alpha <= 0.0:
            continue
        radius = int(wave.radius)
        side = 2 * radius + 2
        overlay = pygame.Surface((side, side), pygame.SRCALPHA)
        color = (*SHOCKWAVE_RGB, int(SHOCKWAVE_MAX_ALPHA * alpha))
        pygame.draw.circle(overlay, color, (radius + 1, radius + 1), radius, SHOCKWAVE_LINE_WIDTH)
        surface.blit(overlay, (wave.x - radius - 1, wave.y - radius - 1))