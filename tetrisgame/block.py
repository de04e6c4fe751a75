"""Tetromino shapes and the falling block."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import SPAWN_X, SPAWN_Y

Shape = tuple[tuple[int, ...], ...]

SHAPES: tuple[Shape, ...] = (
    # I
    ((0, 0, 0, 0),
     (0, 0, 0, 0),
     (1, 1, 1, 1),
     (0, 0, 0, 0)),
    # J
    ((0, 0, 0, 0),
     (1, 0, 0, 0),
     (1, 1, 1, 0),
     (0, 0, 0, 0)),
    # L
    ((0, 0, 0, 0),
     (0, 0, 1, 0),
     (1, 1, 1, 0),
     (0, 0, 0, 0)),
    # O
    ((0, 0, 0, 0),
     (0, 1, 1, 0),
     (0, 1, 1, 0),
     (0, 0, 0, 0)),
    # S
    ((0, 0, 0, 0),
     (0, 1, 1, 0),
     (1, 1, 0, 0),
     (0, 0, 0, 0)),
    # T
    ((0, 0, 0, 0),
     (1, 1, 1, 0),
     (0, 1, 0, 0),
     (0, 0, 0, 0)),
    # Z
    ((0, 0, 0, 0),
     (1, 1, 0, 0),
     (0, 1, 1, 0),
     (0, 0, 0, 0)),
)


def rotated_shape(shape: Shape, times: int) -> Shape:
    """Return ``shape`` turned clockwise ``times`` quarter turns.

    A non-positive count leaves the shape unchanged.
    """
    if times <= 0:
        return tuple(tuple(row) for row in shape)
    result = tuple(tuple(row) for row in shape)
    for _ in range(times % 4):
        result = tuple(zip(*reversed(result)))
    return result


@dataclass
class Block:
    """A tetromino with its position on the board."""

    x: int = SPAWN_X
    y: int = SPAWN_Y
    type: int = 0
    shape: Shape = field(default=SHAPES[0])

    def init_shape(self, type_idx: int, rotations: int) -> None:
        """Take the shape of ``type_idx`` (falling back to 0), rotated."""
        if not 0 <= type_idx < len(SHAPES):
            type_idx = 0
        self.type = type_idx
        self.shape = rotated_shape(SHAPES[type_idx], rotations)

    def rotate_current_shape(self, times: int) -> None:
        """Turn the current shape clockwise ``times`` quarter turns."""
        self.shape = rotated_shape(self.shape, times)

    def shape_amount(self) -> int:
        """Number of distinct tetromino types."""
        return len(SHAPES)