"""A falling-block puzzle game with a start menu and game-over screen."""

__version__ = "0.1.0"
__all__ = ["app", "block", "constants", "engine", "states"]