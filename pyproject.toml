[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planegame"
version = "0.1.0"
description = "Game logic for a vertically scrolling aircraft shooter: scene graph, entities, pickups, particles, menus and a co-op network server"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = [
    "game",
    "shooter",
    "scrolling",
    "arcade",
    "scene-graph",
    "multiplayer",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["planegame"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
