"""Common GameState enum for generated games.

The session reports one of these states via its `state` property. A
restart is the only way out of GAME_OVER.
"""
from enum import Enum


class GameState(Enum):
    """Session states surfaced to the presentation layer.

    States:
        PLAYING: Active gameplay in progress
        GAME_OVER: Player health reached zero; input is ignored until restart
    """
    PLAYING = "playing"
    GAME_OVER = "game_over"
