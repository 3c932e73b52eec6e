"""
String enum definitions shared by all game engines.
"""

from enum import StrEnum


class GameMode(StrEnum):
    """Game variant hosted by an engine; tags the GameState union."""

    MONOPOLY = "monopoly"
    SPADES = "spades"
    DBA = "dba"
    CHESS = "chess"


class GameStatus(StrEnum):
    """Lifecycle status of a game."""

    WAITING = "waiting"
    PLAYING = "playing"
    ENDED = "ended"


class SystemAction(StrEnum):
    """Log action types emitted by the shared engine lifecycle."""

    GAME_START = "GAME_START"
    GAME_STOP = "GAME_STOP"
    GAME_RESET = "GAME_RESET"
    GAME_END = "GAME_END"


SYSTEM_ACTOR = "SYSTEM"
