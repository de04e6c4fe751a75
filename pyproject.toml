[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tetrisgame"
version = "0.1.0"
description = "A falling-block puzzle game with a start menu, wall kicks and a game-over screen."
requires-python = ">=3.10"
keywords = ["tetris", "puzzle", "game", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tetrisgame = "tetrisgame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tetrisgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
