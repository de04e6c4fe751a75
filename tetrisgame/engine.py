"""Board, scoring and block movement rules."""

from __future__ import annotations

import random
from enum import Enum

from .block import Block, Shape
from .constants import BLOCK_SIZE, HEIGHT, SPAWN_X, SPAWN_Y, WIDTH

Color = tuple[int, int, int]

_COLORS: dict[int, Color] = {
    0: (30, 30, 30),
    1: (0, 255, 255),
    2: (0, 0, 255),
    3: (255, 165, 0),
    4: (255, 255, 0),
    5: (0, 255, 0),
    6: (255, 0, 255),
    7: (255, 0, 0),
}

_LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}

_I_KICKS = ((-1, 0), (1, 0), (-2, 0), (2, 0), (0, -1), (0, -2), (0, 1), (0, 2))
_DEFAULT_KICKS = ((-1, 0), (1, 0), (-2, 0), (2, 0), (0, -1), (0, 1))


def color_for(number: int) -> Color:
    """RGB colour of a board cell value; unknown values are dark grey."""
    return _COLORS.get(number, _COLORS[0])


class Landing(Enum):
    """Outcome of :meth:`TetrisEngine.settle`."""

    FALLING = "falling"
    LANDED = "landed"
    GAME_OVER = "game_over"


class TetrisEngine:
    """The game model: board, score, current and next block."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.score = 0
        self.running = True
        self.game_over = False
        self.board: list[list[int]] = [[0] * WIDTH for _ in range(HEIGHT)]
        amount = Block().shape_amount()
        self.block_list = [self.rng.randrange(amount), self.rng.randrange(amount)]
        self.current = Block()
        self.next_block = Block()
        self.spawn()

    def reset(self) -> None:
        """Empty the board and zero the score."""
        self.board = [[0] * WIDTH for _ in range(HEIGHT)]
        self.score = 0

    def check_collision(self, x: int, y: int, shape: Shape) -> bool:
        """True if ``shape`` placed at (x, y) leaves the board or hits a cell."""
        for i in range(BLOCK_SIZE):
            for j in range(BLOCK_SIZE):
                if not shape[i][j]:
                    continue
                bx, by = x + j, y + i
                if bx < 0 or bx >= WIDTH or by >= HEIGHT:
                    return True
                if by >= 0 and self.board[by][bx]:
                    return True
        return False

    def spawn(self) -> None:
        """Place the current and preview blocks from the upcoming list."""
        self.current = Block(SPAWN_X, SPAWN_Y)
        self.current.init_shape(self.block_list[0], 0)
        self.next_block = Block(SPAWN_X, SPAWN_Y)
        self.next_block.init_shape(self.block_list[1], 0)

    def merge_current(self) -> None:
        """Write the current block into the board and advance the queue."""
        block = self.current
        for i, row in enumerate(block.shape):
            for j, cell in enumerate(row):
                if not cell:
                    continue
                bx, by = block.x + j, block.y + i
                if 0 <= by < HEIGHT and 0 <= bx < WIDTH:
                    self.board[by][bx] = block.type + 1
        self.block_list[0] = self.block_list[1]
        self.block_list[1] = self.rng.randrange(block.shape_amount())

    def clear_lines(self) -> int:
        """Remove full rows, add their score and return how many went."""
        kept = [row for row in self.board if not all(row)]
        cleared = HEIGHT - len(kept)
        self.board = [[0] * WIDTH for _ in range(cleared)] + kept
        self.score += _LINE_SCORES.get(cleared, 0)
        return cleared

    def _shift(self, dx: int, dy: int) -> bool:
        if not self.running:
            return False
        block = self.current
        if self.check_collision(block.x + dx, block.y + dy, block.shape):
            return False
        block.x += dx
        block.y += dy
        return True

    def move_left(self) -> bool:
        """Move one column left if free; return whether it moved."""
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        """Move one column right if free; return whether it moved."""
        return self._shift(1, 0)

    def move_down(self) -> bool:
        """Move one row down if free; return whether it moved."""
        return self._shift(0, 1)

    def hard_drop(self) -> int:
        """Drop the current block as far as it goes; return rows fallen."""
        rows = 0
        while self._shift(0, 1):
            rows += 1
        return rows

    def rotate(self) -> bool:
        """Turn the current block clockwise, trying wall kicks if needed."""
        if not self.running:
            return False
        block = self.current
        original = block.shape
        block.rotate_current_shape(1)
        if not self.check_collision(block.x, block.y, block.shape):
            return True
        kicks = _I_KICKS if block.type == 0 else _DEFAULT_KICKS
        for dx, dy in kicks:
            if not self.check_collision(block.x + dx, block.y + dy, block.shape):
                block.x += dx
                block.y += dy
                return True
        block.shape = original
        return False

    def gravity_step(self) -> bool:
        """One automatic drop; return False once the block can fall no more."""
        return self.move_down()

    def settle(self) -> Landing:
        """Land the current block if it rests on something.

        A landed block is merged, full lines are cleared and the next block
        is spawned, unless a fresh block would not fit, which ends the game.
        """
        if not self.running:
            return Landing.GAME_OVER if self.game_over else Landing.FALLING
        block = self.current
        if not self.check_collision(block.x, block.y + 1, block.shape):
            return Landing.FALLING
        self.merge_current()
        self.clear_lines()
        probe = Block(SPAWN_X, SPAWN_Y)
        probe.init_shape(self.rng.randrange(probe.shape_amount()), 0)
        if self.check_collision(probe.x, probe.y, probe.shape):
            self.running = False
            self.game_over = True
            return Landing.GAME_OVER
        self.spawn()
        return Landing.LANDED