"""
Registry of running engines for a display host.

The host creates engines by game mode, drives their tick loops and keeps a
bounded buffer of recent log entries per game so a UI can redraw without
reading the full log.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from games.chess.engine import ChessEngine
from games.dba.engine import DBAEngine
from games.logic.engine import BaseEngine
from games.logic.entry import GameEntry
from games.logic.enums import GameMode
from games.logic.exceptions import InvalidActionError
from games.logic.views import StateSummary, summarize_state
from games.monopoly.engine import MonopolyEngine
from games.session.settings import HostSettings
from games.spades.engine import SpadesEngine

logger = structlog.get_logger()

ENGINE_CLASSES: dict[GameMode, type[BaseEngine]] = {
    GameMode.MONOPOLY: MonopolyEngine,
    GameMode.SPADES: SpadesEngine,
    GameMode.DBA: DBAEngine,
    GameMode.CHESS: ChessEngine,
}


def create_engine(game_mode: GameMode | str, *, seed: str | None = None, **kwargs: Any) -> BaseEngine:
    """Build an engine for a game mode; extra kwargs go to the engine constructor."""
    try:
        engine_cls = ENGINE_CLASSES[GameMode(game_mode)]
    except ValueError:
        raise InvalidActionError(f"Unknown game mode {game_mode!r}") from None
    return engine_cls(seed=seed, **kwargs)


@dataclass
class HostedGame:
    engine: BaseEngine
    recent: deque[GameEntry]
    unsubscribe: Callable[[], None] = field(default=lambda: None)


class GameHost:
    """Own engines by id and manage their lifecycle."""

    def __init__(self, settings: HostSettings | None = None) -> None:
        self._settings = settings or HostSettings()
        self._games: dict[str, HostedGame] = {}
        self._created = 0

    @property
    def settings(self) -> HostSettings:
        return self._settings

    @property
    def game_ids(self) -> list[str]:
        return list(self._games)

    def create_game(
        self,
        game_mode: GameMode | str,
        game_id: str | None = None,
        *,
        seed: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Create an engine and register it; returns the game id."""
        if game_id is not None and game_id in self._games:
            raise InvalidActionError(f"Game {game_id} already exists")
        engine = create_engine(game_mode, seed=seed or self._settings.seed, **kwargs)
        self._created += 1
        if game_id is None:
            game_id = f"{engine.game_mode}-{self._created}"
            # generated ids skip names already taken by the caller
            while game_id in self._games:
                self._created += 1
                game_id = f"{engine.game_mode}-{self._created}"

        recent: deque[GameEntry] = deque(maxlen=self._settings.display_buffer_size)
        hosted = HostedGame(engine=engine, recent=recent)
        hosted.unsubscribe = engine.subscribe(lambda _state, entry: recent.append(entry))
        self._games[game_id] = hosted
        logger.info("game created", game_id=game_id, game_mode=engine.game_mode)
        return game_id

    def _hosted(self, game_id: str) -> HostedGame:
        hosted = self._games.get(game_id)
        if hosted is None:
            raise InvalidActionError(f"Unknown game {game_id}")
        return hosted

    def has_game(self, game_id: str) -> bool:
        return game_id in self._games

    def get_engine(self, game_id: str) -> BaseEngine | None:
        hosted = self._games.get(game_id)
        return hosted.engine if hosted else None

    def start_game(self, game_id: str, interval_ms: int | None = None) -> bool:
        """Start the game and its tick loop at the given (or default) speed."""
        engine = self._hosted(game_id).engine
        return engine.start_game_loop(interval_ms or self._settings.tick_interval_ms)

    def stop_game(self, game_id: str) -> bool:
        return self._hosted(game_id).engine.stop_game_loop()

    def adjust_speed(self, game_id: str, interval_ms: int) -> bool:
        return self._hosted(game_id).engine.adjust_speed(interval_ms)

    def reset_game(self, game_id: str) -> None:
        hosted = self._hosted(game_id)
        hosted.recent.clear()
        hosted.engine.reset_game()

    def recent_entries(self, game_id: str) -> list[GameEntry]:
        return list(self._hosted(game_id).recent)

    def summary(self, game_id: str) -> StateSummary:
        return summarize_state(self._hosted(game_id).engine.get_game_state())

    def cleanup_game(self, game_id: str) -> None:
        """Stop the engine and forget it."""
        hosted = self._games.pop(game_id, None)
        if hosted is None:
            return
        hosted.engine.stop_game_loop()
        hosted.unsubscribe()
        logger.info("game removed", game_id=game_id)

    def stop_all(self) -> None:
        for game_id in list(self._games):
            self.cleanup_game(game_id)
