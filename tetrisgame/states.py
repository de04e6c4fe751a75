"""Screens of the game: start menu, play field and game-over screen."""

from __future__ import annotations

import math
import random
import sys
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

import pygame

from .constants import BLOCK_SIZE, HEIGHT, SPAWN_X, TILE_SIZE, WAIT_TIME, WIDTH
from .engine import Landing, TetrisEngine, color_for

WINDOW_SIZE = (WIDTH * TILE_SIZE, HEIGHT * TILE_SIZE)
PULSE_DURATION = 4.0
PULSE_PEAK = 170.0

WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
PLAYFIELD_BACKGROUND = (50, 50, 50)
GRID_OUTLINE = (70, 70, 70)
PREVIEW_ALPHA = 50

BUTTON_SIZE = 50
BUTTON_HOVER_SIZE = 60
BUTTON_OUTLINE = 5
TITLE_SIZE = 80
FINAL_SCORE_SIZE = 24
SCORE_SIZE = 50

Clock = Callable[[], float]
MousePos = Callable[[], tuple[int, int]]


def pulse_red(elapsed: float, duration: float = PULSE_DURATION) -> float:
    """Red level of the pulsing menu background after ``elapsed`` seconds.

    Rises from 0 to 170 over the first half of each period and falls back.
    """
    progress = math.fmod(elapsed, duration) / duration
    if progress < 0.5:
        return PULSE_PEAK * (progress / 0.5)
    return PULSE_PEAK * (2.0 - progress / 0.5)


def _load_font(path: str | None, size: int) -> pygame.font.Font:
    pygame.font.init()
    if path is None:
        return pygame.font.Font(None, size)
    try:
        return pygame.font.Font(path, size)
    except (OSError, pygame.error) as exc:
        raise RuntimeError("Failed to load font") from exc


def _outlined(font: pygame.font.Font, text: str, thickness: int) -> pygame.Surface:
    base = font.render(text, True, WHITE)
    width, height = base.get_size()
    surface = pygame.Surface((width + 2 * thickness, height + 2 * thickness), pygame.SRCALPHA)
    edge = font.render(text, True, YELLOW)
    for dx in range(-thickness, thickness + 1):
        for dy in range(-thickness, thickness + 1):
            if dx * dx + dy * dy <= thickness * thickness:
                surface.blit(edge, (thickness + dx, thickness + dy))
    surface.blit(base, (thickness, thickness))
    return surface


class _Button:
    """A text button that grows and gains an outline while hovered."""

    def __init__(self, text: str, position: tuple[float, float], font_path: str | None) -> None:
        self.text = text
        self.position = (int(position[0]), int(position[1]))
        self._normal = _load_font(font_path, BUTTON_SIZE)
        self._hover = _load_font(font_path, BUTTON_HOVER_SIZE)
        self.hovered = False

    @property
    def bounds(self) -> pygame.Rect:
        font = self._hover if self.hovered else self._normal
        return pygame.Rect(self.position, font.size(self.text))

    def contains(self, point: tuple[int, int]) -> bool:
        return bool(self.bounds.collidepoint(point))

    def draw(self, window: pygame.Surface) -> None:
        x, y = self.position
        if self.hovered:
            surface = _outlined(self._hover, self.text, BUTTON_OUTLINE)
            window.blit(surface, (x - BUTTON_OUTLINE, y - BUTTON_OUTLINE))
        else:
            window.blit(self._normal.render(self.text, True, WHITE), self.position)


class GameState(ABC):
    """One screen of the game."""

    @abstractmethod
    def handle_event(self, event: pygame.event.Event, window: pygame.Surface) -> None:
        """React to one input event."""

    @abstractmethod
    def update(self) -> GameState:
        """Advance the screen; return the screen to show next (maybe itself)."""

    @abstractmethod
    def render(self, window: pygame.Surface) -> None:
        """Draw the screen onto ``window``."""


class _MenuState(GameState):
    """Pulsing red screen with labels and one button that starts a game."""

    def __init__(
        self,
        button: _Button,
        labels: list[tuple[pygame.Surface, tuple[int, int]]],
        options: dict,
    ) -> None:
        self.button = button
        self._labels = labels
        self._options = options
        self._clock: Clock = options["clock"]
        self._mouse_pos: MousePos = options["mouse_pos"] or pygame.mouse.get_pos
        self._last_tick = self._clock()
        self.elapsed = 0.0
        self.start_requested = False

    def handle_event(self, event: pygame.event.Event, window: pygame.Surface) -> None:
        if event.type != pygame.MOUSEBUTTONDOWN:
            return
        point = getattr(event, "pos", None) or self._mouse_pos()
        if self.button.contains(point):
            self.start_requested = True

    def update(self) -> GameState:
        if self.start_requested:
            self.start_requested = False
            return TetrisGameState(**self._options)
        return self

    def render(self, window: pygame.Surface) -> None:
        now = self._clock()
        self.elapsed += now - self._last_tick
        self._last_tick = now
        window.fill((int(pulse_red(self.elapsed)), 0, 0))
        self.button.hovered = False
        self.button.hovered = self.button.contains(self._mouse_pos())
        for surface, position in self._labels:
            window.blit(surface, position)
        self.button.draw(window)


def _options(font_path, clock, mouse_pos, rng) -> dict:
    return {"font_path": font_path, "clock": clock, "mouse_pos": mouse_pos, "rng": rng}


class StartMenuState(_MenuState):
    """Title screen with a "Start Game" button."""

    def __init__(
        self,
        window_size: tuple[int, int] = WINDOW_SIZE,
        *,
        font_path: str | None = None,
        clock: Clock = time.monotonic,
        mouse_pos: MousePos | None = None,
        rng: random.Random | None = None,
    ) -> None:
        height = window_size[1]
        title_font = _load_font(font_path, TITLE_SIZE)
        title = title_font.render("TETRIS", True, WHITE)
        button = _Button("Start Game", (100, height / 2.0), font_path)
        super().__init__(
            button,
            [(title, (100, int(height / 3.0)))],
            _options(font_path, clock, mouse_pos, rng),
        )

    def handle_event(self, event: pygame.event.Event, window: pygame.Surface) -> None:
        """A click on "Start Game" requests a new game."""
        super().handle_event(event, window)

    def update(self) -> GameState:
        """Return a fresh game once one was requested, else this menu."""
        return super().update()

    def render(self, window: pygame.Surface) -> None:
        """Draw the pulsing background, the title and the button."""
        super().render(window)


class GameOverState(_MenuState):
    """Shows the final score and a "Retry" button."""

    def __init__(
        self,
        score: int,
        window_size: tuple[int, int] = WINDOW_SIZE,
        *,
        font_path: str | None = None,
        clock: Clock = time.monotonic,
        mouse_pos: MousePos | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.final_score = score
        self.score_text = f"Final Score: {score}"
        width, height = window_size
        score_font = _load_font(font_path, FINAL_SCORE_SIZE)
        score_surface = score_font.render(self.score_text, True, WHITE)
        button = _Button("Retry", (width / 2.0, height / 2.0 - 50 - BUTTON_SIZE), font_path)
        super().__init__(
            button,
            [(score_surface, (int(width / 2.0), int(height / 2.0 + 50)))],
            _options(font_path, clock, mouse_pos, rng),
        )

    def handle_event(self, event: pygame.event.Event, window: pygame.Surface) -> None:
        """A click on "Retry" requests a new game."""
        super().handle_event(event, window)

    def update(self) -> GameState:
        """Return a fresh game once a retry was requested, else this screen."""
        return super().update()

    def render(self, window: pygame.Surface) -> None:
        """Draw the pulsing background, the final score and the button."""
        super().render(window)


class TetrisGameState(GameState):
    """The play field: drives the engine from keys and a drop timer."""

    def __init__(
        self,
        *,
        font_path: str | None = None,
        clock: Clock = time.monotonic,
        mouse_pos: MousePos | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._options = _options(font_path, clock, mouse_pos, rng)
        self._clock = clock
        self.engine = TetrisEngine(rng)
        try:
            self.score_font: pygame.font.Font | None = _load_font(font_path, SCORE_SIZE)
        except RuntimeError:
            print("Error: can't load the font. Score will not display.", file=sys.stderr)
            self.score_font = None
        self._last_drop = clock()

    def _restart(self) -> None:
        engine = self.engine
        engine.reset()
        engine.running = True
        engine.game_over = False
        engine.spawn()
        self._last_drop = self._clock()

    def handle_event(self, event: pygame.event.Event, window: pygame.Surface) -> None:
        if event.type != pygame.KEYDOWN:
            return
        key = event.key
        if not self.engine.running:
            if key == pygame.K_r:
                self._restart()
            return
        actions = {
            pygame.K_LEFT: self.engine.move_left,
            pygame.K_RIGHT: self.engine.move_right,
            pygame.K_DOWN: self.engine.move_down,
            pygame.K_UP: self.engine.rotate,
            pygame.K_SPACE: self.engine.hard_drop,
            pygame.K_r: self._restart,
        }
        action = actions.get(key)
        if action is not None:
            action()

    def update(self) -> GameState:
        if not self.engine.running:
            return self
        now = self._clock()
        if now - self._last_drop >= WAIT_TIME / 1000.0:
            self._last_drop = now
            self.engine.gravity_step()
        landing = self.engine.settle()
        if landing is Landing.GAME_OVER:
            return GameOverState(self.engine.score, **self._options)
        if landing is Landing.LANDED:
            self._last_drop = now
        return self

    def render(self, window: pygame.Surface) -> None:
        window.fill(PLAYFIELD_BACKGROUND)
        tile = TILE_SIZE - 1
        for i, row in enumerate(self.engine.board):
            for j, value in enumerate(row):
                rect = pygame.Rect(j * TILE_SIZE, i * TILE_SIZE, tile, tile)
                if value == 0:
                    pygame.draw.rect(window, GRID_OUTLINE, rect.inflate(2, 2), 1)
                window.fill(color_for(value), rect)

        if self.engine.running:
            block = self.engine.current
            colour = color_for(block.type + 1)
            for r, row in enumerate(block.shape):
                for c, cell in enumerate(row):
                    if cell:
                        window.fill(
                            colour,
                            pygame.Rect((block.x + c) * TILE_SIZE, (block.y + r) * TILE_SIZE, tile, tile),
                        )
            preview = pygame.Surface((tile, tile), pygame.SRCALPHA)
            preview.fill((*color_for(self.engine.block_list[1] + 1), PREVIEW_ALPHA))
            for r, row in enumerate(self.engine.next_block.shape[:BLOCK_SIZE]):
                for c, cell in enumerate(row):
                    if cell:
                        window.blit(preview, ((SPAWN_X + c) * TILE_SIZE, r * TILE_SIZE))

        if self.score_font is not None:
            text = self.score_font.render(f"Score: {self.engine.score}", True, WHITE)
            rect = text.get_rect(midtop=(window.get_width() // 2, SCORE_SIZE + 10))
            window.blit(text, rect)