# minesweep

A Minesweeper game built on pygame, with a board-size picker, flood-fill
wave reveals, pop animations, particle explosions, confetti on a win and
sound effects.

## Installing

```
pip install .
```

## Playing

```
minesweep
```

Options:

- `--size {small,medium,large}`: the board to start on (default `medium`),
- `--assets DIR`: the directory holding the images and sounds (default `assets`),
- `--mute`: start with sound off.

| Size   | Board   | Mines |
|--------|---------|-------|
| Small  | 8 x 8   | 10    |
| Medium | 16 x 16 | 40    |
| Large  | 24 x 24 | 99    |

The top bar shows, from left to right:

- the number of flags left (mines minus flags placed; negative when you
  have placed too many),
- the elapsed time as `MM:SS`,
- a board size button that opens a dropdown with the three sizes; picking
  another size resizes the window and starts a new game,
- a new game button,
- a sound toggle.

Left click uncovers a cell. The first click never hits a mine: mines are
placed after it, away from the clicked cell and its neighbours. Uncovering
an empty cell reveals the connected region in a wave spreading outwards.
Right click places or removes a flag.

Hitting a mine ends the game: the remaining unflagged mines are revealed one
by one, and wrongly placed flags are crossed out in red. A "Game Over!"
popup then offers to play again. Uncovering every cell without a mine wins
the game; confetti falls, and four seconds later a popup shows your time.

## Assets

The package ships no images or sounds. `minesweep.assets.Assets.load` reads
them from the directory given with `--assets`, and every file must be there:

- images: `flag.png`, `blast.png`, `clock.png`, `mute.png`,
  `synchronize.png`, `volume.png`,
- sounds: `flag.wav`, `bomb.wav`, `remove_flag.wav`, `flip.wav`,
  `wave.wav`, `mistake.wav`, `game_over.wav`, `win.wav`.

A missing file raises `FileNotFoundError`. Sounds are only decoded when the
pygame mixer is available; without it the game runs silently.

## Using the game logic

The rules live apart from the drawing code and can be used on their own:

```python
from minesweep.board import Board, CellState

board = Board(8, 8, 10)
board.place_mines_avoiding(3, 3)
board.calculate_numbers()
revealed = board.flood_fill_wave(3, 3)   # [(row, col, distance), ...]
assert board.cell_state(3, 3) is CellState.UNCOVERED
```

`minesweep.game.MinesweeperApp` holds a whole game: clicks
(`handle_left_click`, `handle_right_click`), the timer, win and loss
detection, and the state behind every animation. It takes an optional
`on_sound` callback, called with a `SoundEffect` and a volume whenever a
sound should play, and an optional `random.Random` for reproducible mine
placement and effects.

## Running the tests

```
pip install ".[test]"
pytest
```