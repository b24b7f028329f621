import random

import pygame
import pytest

from minesweep import render
from minesweep.assets import Assets
from minesweep.board import Cell, CellState
from minesweep.game import GameState, MinesweeperApp, Shockwave
from minesweep.particle import Particle

FILL = (1, 2, 3)
FLAG_RGB = (10, 200, 10)
MINE_RGB = (200, 10, 200)


def _solid(rgb):
    surface = pygame.Surface((16, 16))
    surface.fill(rgb)
    return surface


@pytest.fixture
def assets():
    return Assets(
        flag=_solid(FLAG_RGB),
        mine=_solid(MINE_RGB),
        clock=_solid((0, 0, 0)),
        mute=_solid((0, 0, 0)),
        synchronize=_solid((0, 0, 0)),
        volume=_solid((0, 0, 0)),
    )


@pytest.fixture
def app():
    return MinesweeperApp(8, 8, 10, rng=random.Random(3))


@pytest.fixture
def surface(app):
    width = int(app.board.width * app.cell_size)
    height = int(app.board.height * app.cell_size + render.TOP_BAR_HEIGHT)
    result = pygame.Surface((width, height))
    result.fill(FILL)
    return result


def _center(app, row, col):
    size = app.cell_size
    return int(col * size + size / 2), int(row * size + render.TOP_BAR_HEIGHT + size / 2)


def test_cell_colors_alternate():
    assert render.cell_colors(0, 0) == (render.COVERED_COLOR_EVEN, render.UNCOVERED_COLOR_EVEN)
    assert render.cell_colors(0, 1) == (render.COVERED_COLOR_ODD, render.UNCOVERED_COLOR_ODD)
    assert render.cell_colors(2, 3) == render.cell_colors(0, 1)
    assert render.cell_colors(1, 1) == render.cell_colors(0, 0)


def test_number_colors():
    assert render.number_color(1) == render.BLUE
    assert render.number_color(3) == render.RED
    assert len({render.number_color(n) for n in range(1, 9)}) == 8
    assert render.number_color(9) == render.BLACK


def test_draw_cell_number_is_centred():
    surface = pygame.Surface((100, 100))
    rect = render.draw_cell_number(surface, 3, 50, 50, 48)
    assert abs(rect.centerx - 50) <= 1
    assert abs(rect.centery - 50) <= 1
    small = render.draw_cell_number(surface, 3, 50, 50, 20)
    assert small.height < rect.height


def test_covered_cell_drawn_with_covered_color(surface, app, assets):
    render.draw_board(surface, app, assets, 0.0, 0.0)
    assert surface.get_at(_center(app, 0, 0)) == render.COVERED_COLOR_EVEN
    assert surface.get_at(_center(app, 0, 1)) == render.COVERED_COLOR_ODD


def test_uncovered_empty_cell_drawn_with_uncovered_color(surface, app, assets):
    app.board.uncover_cell(0, 1)
    render.draw_board(surface, app, assets, 0.0, 0.0)
    assert surface.get_at(_center(app, 0, 1)) == render.UNCOVERED_COLOR_ODD


def test_waiting_wave_cell_is_skipped(surface, app, assets):
    app.wave_timers[0][0] = 0.5
    render.draw_board(surface, app, assets, 0.1, 0.0)
    assert surface.get_at(_center(app, 0, 0)) == (*FILL, 255)
    assert app.wave_timers[0][0] == pytest.approx(0.4)


def test_finished_wave_uncovers_cell(surface, app, assets):
    app.wave_timers[0][0] = 0.0
    render.draw_board(surface, app, assets, 0.1, 0.0)
    assert app.board.cell_state(0, 0) is CellState.UNCOVERED
    assert app.wave_timers[0][0] is None
    assert app.particles


def test_pop_animation_advances(surface, app, assets):
    app.board.uncover_cell(0, 0)
    app.pop_timers[0][0] = 0.0
    render.draw_board(surface, app, assets, 0.1, 0.0)
    assert surface.get_at(_center(app, 0, 0)) == render.UNCOVERED_COLOR_EVEN
    assert app.pop_timers[0][0] == pytest.approx(0.1)


def test_flag_icon_drawn(surface, app, assets):
    app.board.flag_cell(2, 2)
    render.draw_board(surface, app, assets, 0.0, 0.0)
    assert surface.get_at(_center(app, 2, 2)) == (*FLAG_RGB, 255)


def test_uncovered_mine_shows_mine_icon(surface, app, assets):
    app.board.set_cell(1, 1, Cell.MINE)
    app.board.uncover_cell(1, 1)
    render.draw_board(surface, app, assets, 0.0, 0.0)
    assert surface.get_at(_center(app, 1, 1)) == (*MINE_RGB, 255)


def test_wrong_flag_crossed_out_after_loss(surface, app, assets):
    app.board.flag_cell(2, 2)
    app.board.flag_cell(3, 3)
    app.state = GameState.LOST
    app.wrong_flags.append((2, 2))
    render.draw_board(surface, app, assets, 0.0, 0.0)
    assert surface.get_at(_center(app, 2, 2)) == render.RED
    assert surface.get_at(_center(app, 3, 3)) == (*FLAG_RGB, 255)


def test_draw_particles():
    surface = pygame.Surface((40, 40))
    color = (12, 34, 56, 255)
    render.draw_particles(surface, [Particle(10, 10, 0.0, 0.0, 1.0, color)])
    assert surface.get_at((10, 10)) == color
    assert surface.get_at((30, 30)) == (0, 0, 0, 255)


def test_draw_shockwave_ring():
    surface = pygame.Surface((200, 200))
    render.draw_shockwaves(surface, [Shockwave(100, 100)])
    ring = surface.get_at((128, 100))
    assert ring.r > 0
    assert ring.g == 0
    assert surface.get_at((100, 100)) == (0, 0, 0, 255)


def test_faded_shockwave_not_drawn():
    surface = pygame.Surface((200, 200))
    before = pygame.image.tostring(surface, "RGB")
    render.draw_shockwaves(surface, [Shockwave(100, 100, timer=1.5)])
    assert pygame.image.tostring(surface, "RGB") == before