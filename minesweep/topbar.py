"""The top bar: flags left, clock, board size dropdown, new game and sound buttons."""

from __future__ import annotations

from functools import lru_cache

import pygame

from minesweep.assets import Assets
from minesweep.board import BoardSize
from minesweep.game import MinesweeperApp

TOP_BAR_HEIGHT = 60.0
ICON_SIZE = 32.0
BTN_W = 70.0
BTN_H = 36.0
FONT_SIZE = 20
ICON_Y = 18.0
ICON_TEXT_OFFSET = 0.8
BTN_LABEL_SUFFIX = " v"

COLOR_TOP_BAR = (255, 140, 0, 255)
COLOR_BTN = (255, 220, 120, 255)
COLOR_BTN_SELECTED = (255, 220, 120, 255)
COLOR_BTN_UNSELECTED = (220, 220, 220, 255)
COLOR_DROPDOWN_BG = (245, 245, 245, 255)
COLOR_TEXT = (0, 0, 0, 255)

SIZES = (BoardSize.SMALL, BoardSize.MEDIUM, BoardSize.LARGE)

Point = tuple[float, float]


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _text_width(text: str) -> float:
    return float(_font(FONT_SIZE).size(text)[0])


def _draw_text(surface: pygame.Surface, text: str, x: float, baseline: float) -> float:
    font = _font(FONT_SIZE)
    rendered = font.render(text, True, COLOR_TEXT)
    surface.blit(rendered, (x, baseline - font.get_ascent()))
    return float(rendered.get_width())


def _draw_centered(surface: pygame.Surface, text: str, x: float, y: float, w: float, h: float) -> None:
    rendered = _font(FONT_SIZE).render(text, True, COLOR_TEXT)
    surface.blit(rendered, rendered.get_rect(center=(x + w / 2.0, y + h / 2.0)))


def _blit_icon(surface: pygame.Surface, image: pygame.Surface, x: float, y: float) -> None:
    icon = pygame.transform.scale(image, (int(ICON_SIZE), int(ICON_SIZE)))
    surface.blit(icon, (x, y))


def _inside(point: Point | None, x: float, y: float, w: float, h: float) -> bool:
    if point is None:
        return False
    px, py = point
    return x <= px <= x + w and y <= py <= y + h


def format_elapsed(seconds: float) -> str:
    """Format a game time as ``MM:SS`` from whole seconds."""
    total = max(int(seconds), 0)
    return f"{total // 60:02}:{total % 60:02}"


def _flags_section(
    surface: pygame.Surface, app: MinesweeperApp, assets: Assets, x: float, spacing: float
) -> float:
    _blit_icon(surface, assets.flag, x, ICON_Y)
    x += ICON_SIZE + 4.0
    width = _draw_text(surface, str(app.flags_left()), x, ICON_Y + ICON_SIZE * ICON_TEXT_OFFSET)
    return x + width + spacing


def _timer_section(
    surface: pygame.Surface,
    app: MinesweeperApp,
    assets: Assets,
    x: float,
    spacing: float,
    now: float,
) -> float:
    _blit_icon(surface, assets.clock, x, ICON_Y)
    x += ICON_SIZE + 4.0
    text = format_elapsed(app.elapsed_seconds(now))
    width = _draw_text(surface, text, x, ICON_Y + ICON_SIZE * ICON_TEXT_OFFSET)
    return x + width + spacing


def _size_button(surface: pygame.Surface, app: MinesweeperApp, x: float, click: Point | None) -> None:
    pygame.draw.rect(surface, COLOR_BTN, pygame.Rect(x, ICON_Y, BTN_W, BTN_H))
    _draw_centered(surface, app.board_size.label() + BTN_LABEL_SUFFIX, x, ICON_Y, BTN_W, BTN_H)
    if click is None:
        return
    if app.ignore_next_size_popup_click:
        app.ignore_next_size_popup_click = False
    elif _inside(click, x, ICON_Y, BTN_W, BTN_H):
        app.show_size_popup = True


def draw_top_bar(
    surface: pygame.Surface,
    app: MinesweeperApp,
    assets: Assets,
    click: Point | None,
    now: float,
) -> dict[str, pygame.Rect]:
    """Draw the top bar and act on a left click made this frame.

    Returns the screen rectangles of the ``size``, ``new_game`` and ``sound`` buttons.
    """
    bar_width = app.board.width * app.cell_size
    pygame.draw.rect(surface, COLOR_TOP_BAR, pygame.Rect(0, 0, bar_width, TOP_BAR_HEIGHT))
    spacing = app.top_bar_spacing()
    x = _flags_section(surface, app, assets, app.top_bar_start_x(), spacing)
    x = _timer_section(surface, app, assets, x, spacing, now)

    rects = {"size": pygame.Rect(x, ICON_Y, BTN_W, BTN_H)}
    _size_button(surface, app, x, click)
    x += BTN_W + spacing

    rects["new_game"] = pygame.Rect(x, ICON_Y, ICON_SIZE, ICON_SIZE)
    _blit_icon(surface, assets.synchronize, x, ICON_Y)
    if _inside(click, x, ICON_Y, ICON_SIZE, ICON_SIZE):
        app.reset_game()
    x += ICON_SIZE + spacing

    rects["sound"] = pygame.Rect(x, ICON_Y, ICON_SIZE, ICON_SIZE)
    _blit_icon(surface, assets.volume if app.sound else assets.mute, x, ICON_Y)
    if _inside(click, x, ICON_Y, ICON_SIZE, ICON_SIZE):
        app.sound = not app.sound
    return rects


def draw_dropdown_menu(
    surface: pygame.Surface,
    app: MinesweeperApp,
    assets: Assets,
    click: Point | None,
    now: float,
) -> BoardSize | None:
    """Draw the open board size menu and act on a click.

    Returns the newly chosen size, for which the window should be resized, or None.
    """
    spacing = app.top_bar_spacing()
    x = _flags_section(surface, app, assets, app.top_bar_start_x(), spacing)
    x = _timer_section(surface, app, assets, x, spacing, now)
    if not app.show_size_popup or app.ignore_next_size_popup_click:
        return None

    popup_y = ICON_Y + BTN_H
    popup_h = len(SIZES) * BTN_H
    pygame.draw.rect(surface, COLOR_DROPDOWN_BG, pygame.Rect(x, popup_y, BTN_W, popup_h))
    for index, size in enumerate(SIZES):
        by = popup_y + index * BTN_H
        color = COLOR_BTN_SELECTED if app.board_size is size else COLOR_BTN_UNSELECTED
        pygame.draw.rect(surface, color, pygame.Rect(x, by, BTN_W, BTN_H))
        _draw_centered(surface, size.label(), x, by, BTN_W, BTN_H)
        if _inside(click, x, by, BTN_W, BTN_H):
            return size if app.select_board_size(size) else None

    if (
        click is not None
        and not _inside(click, x, popup_y, BTN_W, popup_h)
        and not _inside(click, x, ICON_Y, BTN_W, BTN_H)
    ):
        app.show_size_popup = False
    return None