"""The game window: command line, window sizing and the frame loop."""

from __future__ import annotations

import argparse
import time
from collections.abc import Sequence

import pygame

from minesweep.assets import Assets
from minesweep.board import BoardSize, CellState
from minesweep.game import GameState, MinesweeperApp
from minesweep.particle import update_particles
from minesweep.popup import handle_endgame_popups
from minesweep.render import draw_board, draw_particles, draw_shockwaves
from minesweep.topbar import draw_dropdown_menu, draw_top_bar

TOP_BAR_HEIGHT = 60.0
WINDOW_TITLE = "Minesweeper"
LIGHTGRAY = (200, 200, 200, 255)
FRAME_RATE = 60

_LEFT_BUTTON = 1
_RIGHT_BUTTON = 3


def window_size(size: BoardSize) -> tuple[int, int]:
    """Return the window size that fits a board of the given preset and the top bar."""
    width, height, _ = size.params()
    cell = size.cell_size()
    return int(width * cell), int(height * cell + TOP_BAR_HEIGHT)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the command line; ``size`` comes back as a BoardSize."""
    parser = argparse.ArgumentParser(prog="minesweep", description="Play Minesweeper.")
    parser.add_argument(
        "--size",
        choices=[size.name.lower() for size in BoardSize],
        default=BoardSize.MEDIUM.name.lower(),
        help="board size preset",
    )
    parser.add_argument("--assets", default="assets", help="directory holding images and sounds")
    parser.add_argument("--mute", action="store_true", help="start with sound off")
    args = parser.parse_args(argv)
    args.size = BoardSize[args.size.upper()]
    return args


def run(app: MinesweeperApp, assets: Assets) -> None:
    """Run the frame loop until the window is closed."""
    screen = pygame.display.set_mode(window_size(app.board_size))
    clock = pygame.time.Clock()
    while True:
        dt = clock.tick(FRAME_RATE) / 1000.0
        now = time.monotonic()
        left: tuple[float, float] | None = None
        right: tuple[float, float] | None = None
        quitting = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quitting = True
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == _LEFT_BUTTON:
                    left = event.pos
                elif event.button == _RIGHT_BUTTON:
                    right = event.pos

        screen.fill(LIGHTGRAY)
        draw_top_bar(screen, app, assets, left, now)
        draw_board(screen, app, assets, dt, now)
        if app.show_size_popup:
            chosen = draw_dropdown_menu(screen, app, assets, left, now)
            if chosen is not None:
                screen = pygame.display.set_mode(window_size(chosen))

        update_particles(app.particles, dt)
        draw_particles(screen, app.particles)
        app.update_shockwaves(dt)
        draw_shockwaves(screen, app.shockwaves)

        app.reveal_mines_step(dt)
        app.show_game_over_if_ready()

        if not app.show_size_popup:
            if left is not None and app.state in (GameState.NOT_STARTED, GameState.RUNNING):
                position = app.cell_at(*left)
                if position is not None and app.board.cell_state(*position) is CellState.COVERED:
                    app.handle_left_click(*position, now)
            if right is not None and app.state is GameState.RUNNING:
                position = app.cell_at(*right)
                if position is not None:
                    app.handle_right_click(*position)

        handle_endgame_popups(screen, app, left, now)
        pygame.display.flip()
        if quitting:
            return


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    args = parse_args(argv)
    pygame.init()
    try:
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.display.set_mode(window_size(args.size))
        assets = Assets.load(args.assets)
        app = MinesweeperApp(*args.size.params(), on_sound=assets.play)
        app.sound = not args.mute
        run(app, assets)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())