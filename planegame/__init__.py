"""Game logic for a vertically scrolling aircraft shooter: scene graph, entities, menus, sound and a co-op server."""

__version__ = "0.1.0"