"""Typed domain exceptions for game rule violations.

Domain helpers (betting, trades, enhancements, settings validation) raise
subclasses of GameRuleError rather than raw ValueError. Engines catch them
at their public boundary and convert them into log entries, so nothing
escapes into the host's tick loop.
"""


class GameRuleError(Exception):
    """Base exception for game rule violations."""


class InvalidActionError(GameRuleError):
    """Action is not valid in the current game state."""


class InvalidBetError(GameRuleError):
    """Bet cannot be placed (unknown game, bad amount, insufficient budget)."""


class InvalidTradeError(GameRuleError):
    """Trade proposal or acceptance is invalid."""


class InvalidEnhancementError(GameRuleError):
    """Enhancement cannot be applied to the requested player."""


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain values the engine cannot run with."""
