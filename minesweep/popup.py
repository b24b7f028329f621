"""Endgame popups: the win and game over boxes with their Play Again button."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import pygame

from minesweep.game import GameState, MinesweeperApp

TOP_BAR_HEIGHT = 60.0
POPUP_WIDTH = 320.0
POPUP_HEIGHT = 140.0
POPUP_BORDER_WIDTH = 4
POPUP_BG_COLOR = (30, 30, 30, 240)
POPUP_MSG_FONT_SIZE = 28
POPUP_MSG_Y_OFFSET = 60.0
POPUP_BTN_WIDTH = 120.0
POPUP_BTN_HEIGHT = 36.0
POPUP_BTN_Y_MARGIN = 16.0
POPUP_BTN_LABEL_FONT_SIZE = 22
POPUP_BTN_LABEL = "Play Again"
WIN_POPUP_DELAY = 4.0

WHITE = (255, 255, 255, 255)
GREEN = (0, 228, 48, 255)
RED = (230, 41, 55, 255)

Point = tuple[float, float]


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


@dataclass(frozen=True)
class PopupLayout:
    """Screen position of the popup box and of its button."""

    x: float
    y: float
    button_x: float
    button_y: float

    def button_hit(self, x: float, y: float) -> bool:
        """Return whether a point lies on the button, edges included."""
        return (
            self.button_x <= x <= self.button_x + POPUP_BTN_WIDTH
            and self.button_y <= y <= self.button_y + POPUP_BTN_HEIGHT
        )


def popup_layout(board_width: int, board_height: int, cell_size: float) -> PopupLayout:
    """Centre the popup over a board of the given size."""
    x = (board_width * cell_size - POPUP_WIDTH) / 2.0
    y = (board_height * cell_size + TOP_BAR_HEIGHT - POPUP_HEIGHT) / 2.0
    return PopupLayout(
        x=x,
        y=y,
        button_x=x + (POPUP_WIDTH - POPUP_BTN_WIDTH) / 2.0,
        button_y=y + POPUP_HEIGHT - POPUP_BTN_HEIGHT - POPUP_BTN_Y_MARGIN,
    )


def endgame_message(app: MinesweeperApp, now: float) -> str | None:
    """Return the popup text for the game's outcome, or None if no popup is due."""
    if app.state is GameState.WON:
        if app.end_time is not None and now - app.end_time > WIN_POPUP_DELAY:
            return f"You Win!  Time: {app.end_time - app.start_time:.1f}s"
        return None
    if app.state is GameState.LOST:
        return "Game Over!"
    return None


def draw_popup(
    surface: pygame.Surface,
    app: MinesweeperApp,
    border_color: tuple[int, int, int, int],
    message: str,
    click: Point | None,
) -> bool:
    """Draw the popup with a message; return whether Play Again was clicked."""
    layout = popup_layout(app.board.width, app.board.height, app.cell_size)

    background = pygame.Surface((int(POPUP_WIDTH), int(POPUP_HEIGHT)), pygame.SRCALPHA)
    background.fill(POPUP_BG_COLOR)
    surface.blit(background, (layout.x, layout.y))
    box = pygame.Rect(layout.x, layout.y, POPUP_WIDTH, POPUP_HEIGHT)
    pygame.draw.rect(surface, border_color, box, POPUP_BORDER_WIDTH)

    font = _font(POPUP_MSG_FONT_SIZE)
    text = font.render(message, True, WHITE)
    surface.blit(
        text,
        (
            layout.x + (POPUP_WIDTH - text.get_width()) / 2.0,
            layout.y + POPUP_MSG_Y_OFFSET - font.get_ascent(),
        ),
    )

    button = pygame.Rect(layout.button_x, layout.button_y, POPUP_BTN_WIDTH, POPUP_BTN_HEIGHT)
    pygame.draw.rect(surface, border_color, button)
    label = _font(POPUP_BTN_LABEL_FONT_SIZE).render(POPUP_BTN_LABEL, True, WHITE)
    surface.blit(
        label,
        label.get_rect(
            center=(
                layout.button_x + POPUP_BTN_WIDTH / 2.0,
                layout.button_y + POPUP_BTN_HEIGHT / 2.0,
            )
        ),
    )

    return click is not None and layout.button_hit(*click)


def handle_endgame_popups(
    surface: pygame.Surface,
    app: MinesweeperApp,
    click: Point | None,
    now: float,
) -> bool:
    """Show the win or game over popup when due; return whether the game was restarted."""
    message = endgame_message(app, now)
    if message is None:
        return False
    color = GREEN if app.state is GameState.WON else RED
    if draw_popup(surface, app, color, message, click):
        app.reset_game()
        return True
    return False