"""Window setup and the main loop."""

from __future__ import annotations

import argparse

import pygame

from .constants import HEIGHT, TILE_SIZE, WIDTH
from .states import GameState, StartMenuState

FRAME_RATE = 60
TITLE = "Tetris"


def run(window: pygame.Surface, max_frames: int | None = None) -> int:
    """Run the game loop on ``window``; return the number of frames shown.

    The loop ends when the window is closed or after ``max_frames`` frames.
    """
    if max_frames is not None and max_frames < 0:
        raise ValueError("max_frames must not be negative")
    clock = pygame.time.Clock()
    state: GameState = StartMenuState(window.get_size())
    frames = 0
    while max_frames is None or frames < max_frames:
        for event in pygame.event.get():
            state.handle_event(event, window)
            if event.type == pygame.QUIT:
                return frames
        state = state.update()
        window.fill((0, 0, 0))
        state.render(window)
        pygame.display.flip()
        clock.tick(FRAME_RATE)
        frames += 1
    return frames


def main(argv: list[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="tetrisgame", description="Play Tetris.")
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="stop after this many frames",
    )
    args = parser.parse_args(argv)
    pygame.init()
    try:
        window = pygame.display.set_mode((WIDTH * TILE_SIZE, HEIGHT * TILE_SIZE))
        pygame.display.set_caption(TITLE)
        run(window, args.frames)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())