"""Minesweeper game for pygame: board rules, game state, drawing and the game window."""

__version__ = "0.1.0"