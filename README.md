# tetrisgame

A falling-block puzzle game on a 10 × 20 board, drawn with pygame.

## Installing

```
pip install .
```

## Playing

```
tetrisgame
```

The window is 500 × 1000 pixels. To stop automatically after a number of
frames (the loop runs at up to 60 frames per second):

```
tetrisgame --frames 600
```

A start menu opens first. Click **Start Game** to begin. Once the game is running:

| Key        | Action                                  |
|------------|-----------------------------------------|
| Left/Right | Move the falling piece sideways         |
| Down       | Move the piece down one row             |
| Up         | Rotate clockwise (with wall kicks)      |
| Space      | Drop the piece as far as it can go      |
| R          | Restart with an empty board             |

Pieces fall by one row every 500 ms. Clearing rows scores 100, 300, 500 or 800
points for one, two, three or four rows at once. The score is shown at the top
of the board, and the next piece is shown faintly where new pieces enter. When a
new piece cannot enter the board the game-over screen shows the final score;
click **Retry** to play again.

Text is drawn with pygame's built-in default font. The screens in
`tetrisgame.states` also accept a `font_path` keyword to use a font file
instead; the menu screens raise `RuntimeError` if that file cannot be loaded,
while the play field carries on without showing the score.

## Using the engine

The game rules have no dependency on a display and can be driven directly:

```python
import random

from tetrisgame.engine import Landing, TetrisEngine

engine = TetrisEngine(random.Random(1))
engine.move_left()
engine.rotate()
engine.hard_drop()
if engine.settle() is Landing.GAME_OVER:
    print("game over")
print(engine.score)
```

`TetrisEngine` keeps the board as `board` (rows of cell values, 0 for empty,
1–7 for the piece types), the falling piece as `current`, the preview as
`next_block` and the upcoming piece types in `block_list`. The move methods
return whether the piece moved; `settle` merges a resting piece, clears full
rows and spawns the next piece, returning a `Landing` value. `color_for` gives
the RGB colour of a cell value.

`tetrisgame.block` holds the seven piece shapes (`SHAPES`), `rotated_shape`
and the `Block` class. `tetrisgame.states` holds the screens the game moves
between — `StartMenuState`, `TetrisGameState` and `GameOverState` — and
`pulse_red`, which drives the menus' pulsing background. `tetrisgame.app.run`
runs the main loop on a window you have already opened.

## What it does not do

There is no high-score table, no saved settings and no pause; scores are lost
when the window closes. Pieces do not speed up as the score rises.

## Running the tests

```
pip install ".[test]"
pytest
```