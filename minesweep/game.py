"""Game state and rules: clicks, flags, win and loss, reveal and animation timers."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from minesweep.board import Board, BoardSize, CellState
from minesweep.particle import Particle, spawn_confetti, spawn_particles

TOP_BAR_HEIGHT = 60.0

POP_GROW_PHASE = 0.2
POP_GROW_AMOUNT = 1.5
POP_SHRINK_START = 1.3
POP_ANIMATION_DURATION = 0.5

SHOCKWAVE_START_RADIUS = 30.0
SHOCKWAVE_GROWTH = 200.0
REVEAL_DELAY = 0.37
WAVE_STEP_DELAY = 0.05

_TOP_BAR_SPACING = {
    BoardSize.SMALL: 20.0,
    BoardSize.MEDIUM: 48.0,
    BoardSize.LARGE: 64.0,
}


class GameState(Enum):
    """Phase of a game, driving input, animation and popups."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"
    WON = "won"
    LOST = "lost"


class SoundEffect(Enum):
    """Sound effects the game asks to be played."""

    FLAG = "flag"
    BOMB = "bomb"
    REMOVE_FLAG = "remove_flag"
    FLIP = "flip"
    WAVE = "wave"
    MISTAKE = "mistake"
    GAME_OVER = "game_over"
    WIN = "win"


SoundCallback = Callable[[SoundEffect, float], None]


@dataclass
class Shockwave:
    """An expanding ring centred on a point, fading out over one second."""

    x: float
    y: float
    timer: float = 0.0

    @property
    def radius(self) -> float:
        return SHOCKWAVE_START_RADIUS + SHOCKWAVE_GROWTH * self.timer

    @property
    def alpha(self) -> float:
        return min(max(1.0 - self.timer, 0.0), 1.0)

    def step(self, dt: float) -> bool:
        """Advance by ``dt`` seconds; return whether the ring is still visible."""
        self.timer += dt
        return self.alpha > 0.0


def pop_scale(timer: float) -> float:
    """Return the scale of a popping cell ``timer`` seconds into its animation."""
    t = min(timer / POP_ANIMATION_DURATION, 1.0)
    if t < POP_GROW_PHASE:
        scale = 1.0 + POP_GROW_AMOUNT * t
    else:
        scale = POP_SHRINK_START - POP_SHRINK_START * (
            (t - POP_GROW_PHASE) / (1.0 - POP_GROW_PHASE)
        )
    return max(scale, 0.0)


class MinesweeperApp:
    """The whole game: board, phase, timers and effect state."""

    def __init__(
        self,
        width: int,
        height: int,
        mines: int,
        on_sound: SoundCallback | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.on_sound = on_sound
        self.rng = rng or random.Random()
        self.sound = True
        self.show_size_popup = False
        self._setup(width, height, mines)

    def _setup(self, width: int, height: int, mines: int) -> None:
        self.board = Board(width, height, mines)
        self.board_size = BoardSize.from_params(width, height, mines)
        self.cell_size = self.board_size.cell_size()
        self.ignore_next_size_popup_click = False
        self.state = GameState.NOT_STARTED
        self.start_time = 0.0
        self.end_time: float | None = None
        self.pop_timers: list[list[float | None]] = [[None] * width for _ in range(height)]
        self.wave_timers: list[list[float | None]] = [[None] * width for _ in range(height)]
        self.particles: list[Particle] = []
        self.shockwaves: list[Shockwave] = []
        self.mine_reveal_queue: list[tuple[int, int, bool]] = []
        self.wrong_flags: list[tuple[int, int]] = []
        self.mine_reveal_timer = 0.0

    def _play(self, effect: SoundEffect, volume: float) -> None:
        if self.sound and self.on_sound is not None:
            self.on_sound(effect, volume)

    def reset_game(self) -> None:
        """Start over with the current board size, keeping sound and popup settings."""
        self._setup(*self.board_size.params())

    def select_board_size(self, size: BoardSize) -> bool:
        """Switch to another board size and reset; return False if it is already chosen."""
        if size is self.board_size:
            return False
        self.board_size = size
        self.reset_game()
        self.ignore_next_size_popup_click = True
        return True

    def cell_at(self, x: float, y: float) -> tuple[int, int] | None:
        """Return the board position under a screen point, or None."""
        if y < TOP_BAR_HEIGHT:
            return None
        col = max(0, int(x / self.cell_size))
        row = max(0, int((y - TOP_BAR_HEIGHT) / self.cell_size))
        if row < self.board.height and col < self.board.width:
            return row, col
        return None

    def handle_left_click(self, row: int, col: int, now: float) -> None:
        """Uncover a cell, placing the mines first if the game has not started."""
        if self.board.cell(row, col) is None:
            raise IndexError(f"position ({row}, {col}) is outside the board")
        if self.state is GameState.NOT_STARTED:
            self.start_time = now
            self.board.place_mines_avoiding(row, col, self.rng)
            self.board.calculate_numbers()
            self.state = GameState.RUNNING
        cell = self.board.cell(row, col)
        if cell.is_mine:
            self._handle_mine_click(row, col, now)
        elif cell.is_empty:
            self._handle_empty_click(row, col, now)
        else:
            self._handle_number_click(row, col, now)

    def handle_right_click(self, row: int, col: int) -> None:
        """Toggle the flag on a covered or flagged cell."""
        state = self.board.cell_state(row, col)
        if state is CellState.COVERED:
            self.board.flag_cell(row, col)
            self._play(SoundEffect.FLAG, 0.6)
        elif state is CellState.FLAGGED:
            self.board.unflag_cell(row, col)
            self._play(SoundEffect.REMOVE_FLAG, 0.6)

    def _handle_empty_click(self, row: int, col: int, now: float) -> None:
        self._play(SoundEffect.WAVE, 0.5)
        for r, c, dist in self.board.flood_fill_wave(row, col):
            self.wave_timers[r][c] = dist * WAVE_STEP_DELAY
        self.check_win(now)

    def _handle_number_click(self, row: int, col: int, now: float) -> None:
        self._play(SoundEffect.FLIP, 0.5)
        self.board.uncover_cell(row, col)
        self.pop_timers[row][col] = 0.0
        self.check_win(now)

    def _handle_mine_click(self, row: int, col: int, now: float) -> None:
        self._play(SoundEffect.BOMB, 0.7)
        self.board.uncover_cell(row, col)
        spawn_particles(
            self.particles, row, col, self.cell_size, True, None, TOP_BAR_HEIGHT, self.rng
        )
        self.spawn_shockwave(row, col)

        queue = [
            (r, c, True)
            for r, c in self.board.mine_positions()
            if self.board.cell_state(r, c) is not CellState.FLAGGED and (r, c) != (row, col)
        ]
        queue.extend(
            (r, c, False)
            for r, c in self.board.positions()
            if self.board.cell_state(r, c) is CellState.FLAGGED
            and not self.board.cell(r, c).is_mine
        )
        queue.sort(key=lambda entry: int((entry[0] * 13.37 + entry[1] * 42.42 + now) * 1000.0))
        self.mine_reveal_queue = queue

        self.mine_reveal_timer = 0.0
        self.end_time = now
        self.state = GameState.GAME_OVER

    def check_win(self, now: float) -> bool:
        """Declare a win if every non-mine cell is uncovered; return whether it was."""
        for row, col in self.board.positions():
            if (
                not self.board.cell(row, col).is_mine
                and self.board.cell_state(row, col) is not CellState.UNCOVERED
            ):
                return False
        self.end_time = now
        self.state = GameState.WON
        self._play(SoundEffect.WIN, 0.8)
        spawn_confetti(self.particles, self.board.width, self.cell_size, self.rng)
        return True

    def advance_wave(self, row: int, col: int, dt: float, now: float) -> bool:
        """Run a cell's flood-fill delay; return True while the cell is still waiting."""
        timer = self.wave_timers[row][col]
        if timer is None:
            return False
        if timer > 0.0:
            self.wave_timers[row][col] = timer - dt
            return True
        self.wave_timers[row][col] = None
        self.board.uncover_cell(row, col)
        self.pop_timers[row][col] = 0.0
        spawn_particles(
            self.particles, row, col, self.cell_size, False, None, TOP_BAR_HEIGHT, self.rng
        )
        self.check_win(now)
        return False

    def advance_pop(self, row: int, col: int, dt: float) -> tuple[float, bool] | None:
        """Run a cell's pop animation by one frame.

        Returns ``(scale, finished)`` for the frame, or None if the cell is not popping.
        """
        timer = self.pop_timers[row][col]
        if timer is None or self.board.cell(row, col).is_mine:
            return None
        finished = timer / POP_ANIMATION_DURATION >= 1.0
        scale = pop_scale(timer)
        self.pop_timers[row][col] = None if finished else timer + dt
        return scale, finished

    def spawn_shockwave(self, row: int, col: int) -> None:
        """Start a shockwave centred on a cell."""
        x = col * self.cell_size + self.cell_size / 2.0
        y = row * self.cell_size + TOP_BAR_HEIGHT + self.cell_size / 2.0
        self.shockwaves.append(Shockwave(x, y))

    def update_shockwaves(self, dt: float) -> None:
        """Advance every shockwave and drop the finished ones."""
        self.shockwaves[:] = [wave for wave in self.shockwaves if wave.step(dt)]

    def reveal_mines_step(self, dt: float) -> tuple[int, int, bool] | None:
        """After a loss, reveal the next queued mine or wrong flag when its delay is up."""
        if self.state is not GameState.GAME_OVER or not self.mine_reveal_queue:
            self.mine_reveal_timer = 0.0
            return None
        self.mine_reveal_timer += dt
        if self.mine_reveal_timer < REVEAL_DELAY:
            return None
        self.mine_reveal_timer = 0.0
        entry = self.mine_reveal_queue.pop()
        row, col, is_mine = entry
        if is_mine:
            self._play(SoundEffect.BOMB, 0.7)
            self.board.uncover_cell(row, col)
            spawn_particles(
                self.particles, row, col, self.cell_size, True, None, TOP_BAR_HEIGHT, self.rng
            )
            self.spawn_shockwave(row, col)
        else:
            self._play(SoundEffect.MISTAKE, 0.7)
            self.wrong_flags.append((row, col))
        return entry

    def show_game_over_if_ready(self) -> bool:
        """Move from GAME_OVER to LOST once every reveal and effect has finished."""
        if (
            self.state is GameState.GAME_OVER
            and not self.mine_reveal_queue
            and not self.particles
            and not self.shockwaves
        ):
            self.state = GameState.LOST
            self._play(SoundEffect.GAME_OVER, 0.8)
            return True
        return False

    def flags_left(self) -> int:
        """Return mines minus flags placed; negative when over-flagged."""
        flagged = sum(
            1
            for row, col in self.board.positions()
            if self.board.cell_state(row, col) is CellState.FLAGGED
        )
        return self.board.mines - flagged

    def elapsed_seconds(self, now: float) -> float:
        """Return the game time shown on the clock."""
        if self.end_time is not None:
            return self.end_time - self.start_time
        if self.state is GameState.RUNNING:
            return now - self.start_time
        return 0.0

    def top_bar_spacing(self) -> float:
        """Return the gap between top bar sections for the board size."""
        return _TOP_BAR_SPACING[self.board_size]

    def top_bar_start_x(self) -> float:
        """Return the x position where the top bar content begins."""
        return max(self.board.width * self.cell_size * 0.08, 12.0)