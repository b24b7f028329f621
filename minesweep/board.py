"""Minesweeper board: size presets, cell contents, cell states and board rules."""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class BoardSize(Enum):
    """The standard board presets."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"

    def params(self) -> tuple[int, int, int]:
        """Return ``(width, height, mines)`` for this preset."""
        return _SIZE_PARAMS[self]

    def label(self) -> str:
        """Return the human-readable name of this preset."""
        return self.value

    @classmethod
    def from_params(cls, width: int, height: int, mines: int) -> BoardSize:
        """Return the preset matching the parameters, or SMALL if none does."""
        for size in cls:
            if size.params() == (width, height, mines):
                return size
        return cls.SMALL

    def cell_size(self) -> float:
        """Return the recommended cell size in pixels."""
        return _CELL_SIZES[self]


_SIZE_PARAMS = {
    BoardSize.SMALL: (8, 8, 10),
    BoardSize.MEDIUM: (16, 16, 40),
    BoardSize.LARGE: (24, 24, 99),
}

_CELL_SIZES = {
    BoardSize.SMALL: 48.0,
    BoardSize.MEDIUM: 36.0,
    BoardSize.LARGE: 28.0,
}


@dataclass(frozen=True)
class Cell:
    """Content of a board cell: a mine, a count of adjacent mines, or empty."""

    mine: bool = False
    count: int = 0

    MINE: ClassVar[Cell]
    EMPTY: ClassVar[Cell]

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"adjacent mine count cannot be negative: {self.count}")
        if self.mine and self.count:
            raise ValueError("a mine cell carries no adjacent mine count")

    @classmethod
    def number(cls, count: int) -> Cell:
        """Return the cell showing ``count`` adjacent mines (empty for zero)."""
        if count < 0:
            raise ValueError(f"adjacent mine count cannot be negative: {count}")
        return cls.EMPTY if count == 0 else cls(count=count)

    @property
    def is_mine(self) -> bool:
        return self.mine

    @property
    def is_empty(self) -> bool:
        return not self.mine and self.count == 0

    def __repr__(self) -> str:
        if self.mine:
            return "Cell.MINE"
        if self.count == 0:
            return "Cell.EMPTY"
        return f"Cell.number({self.count})"


Cell.MINE = Cell(mine=True)
Cell.EMPTY = Cell()


class CellState(Enum):
    """What the player sees of a cell."""

    COVERED = "covered"
    UNCOVERED = "uncovered"
    FLAGGED = "flagged"


Position = tuple[int, int]


class Board:
    """The grid of cells, their visible states and the mine positions."""

    def __init__(self, width: int, height: int, mines: int) -> None:
        if width < 0 or height < 0 or mines < 0:
            raise ValueError("board dimensions and mine count must not be negative")
        self._width = width
        self._height = height
        self._mines = mines
        self._cells = [[Cell.EMPTY] * width for _ in range(height)]
        self._states = [[CellState.COVERED] * width for _ in range(height)]
        self._mine_positions: set[Position] = set()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def mines(self) -> int:
        return self._mines

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._height and 0 <= col < self._width

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""
        for row in range(self._height):
            for col in range(self._width):
                yield row, col

    def cell(self, row: int, col: int) -> Cell | None:
        """Return the cell at the position, or None when out of bounds."""
        return self._cells[row][col] if self._in_bounds(row, col) else None

    def cell_state(self, row: int, col: int) -> CellState | None:
        """Return the state at the position, or None when out of bounds."""
        return self._states[row][col] if self._in_bounds(row, col) else None

    def flag_cell(self, row: int, col: int) -> None:
        """Flag the cell; positions out of bounds are ignored."""
        if self._in_bounds(row, col):
            self._states[row][col] = CellState.FLAGGED

    def unflag_cell(self, row: int, col: int) -> None:
        """Return a flagged cell to covered; other states are left alone."""
        if self._in_bounds(row, col) and self._states[row][col] is CellState.FLAGGED:
            self._states[row][col] = CellState.COVERED

    def uncover_cell(self, row: int, col: int) -> None:
        """Uncover the cell; positions out of bounds are ignored."""
        if self._in_bounds(row, col):
            self._states[row][col] = CellState.UNCOVERED

    def mine_positions(self) -> frozenset[Position]:
        """Return the set of mine positions."""
        return frozenset(self._mine_positions)

    def place_mines_avoiding(
        self, avoid_row: int, avoid_col: int, rng: random.Random | None = None
    ) -> None:
        """Place mines at random, never on the given cell or its neighbours."""
        rng = rng or random.Random()
        candidates = [
            (row, col)
            for row, col in self.positions()
            if not (abs(row - avoid_row) <= 1 and abs(col - avoid_col) <= 1)
        ]
        rng.shuffle(candidates)
        self._mine_positions.clear()
        for row, col in candidates[: self._mines]:
            self._cells[row][col] = Cell.MINE
            self._mine_positions.add((row, col))

    def neighbors(self, row: int, col: int) -> Iterator[Position]:
        """Yield the in-bounds positions around a cell."""
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self._in_bounds(nr, nc):
                    yield nr, nc

    def calculate_numbers(self) -> None:
        """Fill every non-mine cell with its count of adjacent mines."""
        for row, col in self.positions():
            if self._cells[row][col].is_mine:
                continue
            count = sum(
                1 for nr, nc in self.neighbors(row, col) if self._cells[nr][nc].is_mine
            )
            self._cells[row][col] = Cell.number(count)

    def flood_fill_wave(self, row: int, col: int) -> list[tuple[int, int, int]]:
        """Uncover the region reachable through empty cells from the start.

        Returns ``(row, col, distance)`` for each newly uncovered cell, in
        breadth-first order, where distance counts steps from the start.
        """
        if not self._in_bounds(row, col):
            raise IndexError(f"position ({row}, {col}) is outside the board")
        queue: deque[tuple[int, int, int]] = deque([(row, col, 0)])
        visited = {(row, col)}
        revealed: list[tuple[int, int, int]] = []
        while queue:
            r, c, dist = queue.popleft()
            if self._states[r][c] is CellState.UNCOVERED:
                continue
            self._states[r][c] = CellState.UNCOVERED
            revealed.append((r, c, dist))
            if not self._cells[r][c].is_empty:
                continue
            for nr, nc in self.neighbors(r, c):
                if (nr, nc) not in visited and self._states[nr][nc] is CellState.COVERED:
                    visited.add((nr, nc))
                    queue.append((nr, nc, dist + 1))
        return revealed

    def set_cell(self, row: int, col: int, cell: Cell) -> None:
        """Set a cell's content directly; positions out of bounds are ignored."""
        if self._in_bounds(row, col):
            self._cells[row][col] = cell

    def set_cell_state(self, row: int, col: int, state: CellState) -> None:
        """Set a cell's state directly; positions out of bounds are ignored."""
        if self._in_bounds(row, col):
            self._states[row][col] = state

    def insert_mine_position(self, row: int, col: int) -> None:
        """Record a mine position without changing the cell content."""
        self._mine_positions.add((row, col))