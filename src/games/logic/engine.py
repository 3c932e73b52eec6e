"""
Shared engine lifecycle and update contract.

Every engine owns one mutable state object and one append-only game log.
Each meaningful mutation is written through `_log_entry`, which appends a
GameEntry and notifies every subscribed listener with (state, entry). That
notification is the only observable effect of a tick besides the state
object itself.

Engines are driven either by their own TickLoop (`start_game_loop`) or
manually through `advance()`; both run the same single step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

import structlog

from games.logic.entry import GameEntry
from games.logic.enums import SYSTEM_ACTOR, GameMode, GameStatus, SystemAction
from games.logic.rng import create_rng, generate_seed
from games.logic.state import BaseGameState
from games.logic.timer import TickLoop

logger = structlog.get_logger()

StateT = TypeVar("StateT", bound=BaseGameState)

# (state, entry) -> None; state is the engine's live state object
UpdateListener = Callable[[Any, GameEntry], None]


class BaseEngine(ABC, Generic[StateT]):
    """
    Lifecycle shared by all game engines.

    Subclasses build their state in `initialize_state` and implement one unit
    of simulation in `_advance`. `_on_start` runs once when the game moves
    from waiting to playing (dealing cards, for example).
    """

    game_mode: ClassVar[GameMode]
    display_name: ClassVar[str]

    def __init__(self, on_update: UpdateListener | None = None, *, seed: str | None = None) -> None:
        self._seed = seed or generate_seed()
        self._rng = create_rng(self._seed)
        self._listeners: list[UpdateListener] = []
        if on_update is not None:
            self._listeners.append(on_update)
        self._game_log: list[GameEntry] = []
        self._tick_loop = TickLoop(self._on_loop_tick)
        self._state: StateT = self.initialize_state()

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def is_running(self) -> bool:
        """True while the periodic tick task is scheduled."""
        return self._tick_loop.running

    @abstractmethod
    def initialize_state(self) -> StateT:
        """Build a fresh state in WAITING status."""

    @abstractmethod
    def _advance(self) -> None:
        """Perform one unit of simulation. Only called while PLAYING."""

    def _on_start(self) -> None:  # noqa: B027
        """Hook run once on the WAITING -> PLAYING transition."""

    def subscribe(self, listener: UpdateListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> bool:
        """
        Move the game from WAITING to PLAYING without scheduling ticks.

        Returns False when the game already started or ended.
        """
        if self._state.game_status != GameStatus.WAITING:
            return False
        self._state.game_status = GameStatus.PLAYING
        logger.info("game started", game_mode=self.game_mode, seed=self._seed[:16])
        self._log_entry(SystemAction.GAME_START, f"{self.display_name} simulation begins")
        self._on_start()
        return True

    def advance(self) -> bool:
        """
        Run one simulation step synchronously.

        Returns False without touching state unless the game is PLAYING.
        """
        if self._state.game_status != GameStatus.PLAYING:
            return False
        self._advance()
        return True

    def start_game_loop(self, interval_ms: int) -> bool:
        """
        Start the game (if waiting) and tick every interval_ms.

        Returns True if the periodic task is scheduled. Outside a running
        event loop the game still starts and can be driven with advance().
        """
        if self._state.game_status == GameStatus.ENDED:
            logger.warning("game loop not started: game already ended", game_mode=self.game_mode)
            return False
        self.start()
        return self._tick_loop.start(interval_ms)

    def stop_game_loop(self) -> bool:
        """Cancel the periodic tick. Game status is left unchanged."""
        stopped = self._tick_loop.cancel()
        if stopped:
            self._log_entry(SystemAction.GAME_STOP, f"{self.display_name} simulation paused")
        return stopped

    def adjust_speed(self, interval_ms: int) -> bool:
        """Restart a running loop with a new interval; no-op when stopped."""
        if not self._tick_loop.running:
            return False
        self._tick_loop.cancel()
        return self._tick_loop.start(interval_ms)

    def reset_game(self) -> None:
        """
        Stop, rebuild the state from the engine seed and clear the log.

        Listeners receive a reset entry; the log itself stays empty.
        """
        self._tick_loop.cancel()
        self._rng = create_rng(self._seed)
        self._state = self.initialize_state()
        self._game_log = []
        logger.info("game reset", game_mode=self.game_mode)
        self._notify(self._make_entry(SystemAction.GAME_RESET, f"{self.display_name} has been reset"))

    def get_game_state(self) -> StateT:
        return self._state

    def get_game_log(self) -> list[GameEntry]:
        return list(self._game_log)

    def _on_loop_tick(self) -> bool:
        self.advance()
        return self._state.game_status == GameStatus.PLAYING

    def _make_entry(self, action_type: str, detail: str, actor: str = SYSTEM_ACTOR) -> GameEntry:
        return GameEntry(turn=self._state.round_number, actor=actor, action_type=action_type, detail=detail)

    def _notify(self, entry: GameEntry) -> None:
        for listener in list(self._listeners):
            listener(self._state, entry)

    def _log_entry(self, action_type: str, detail: str, actor: str = SYSTEM_ACTOR) -> GameEntry:
        entry = self._make_entry(action_type, detail, actor)
        self._game_log.append(entry)
        self._notify(entry)
        return entry

    def _end_game(self, winner_id: str | None, detail: str) -> None:
        """Record the winner, stop ticking and log the final entry."""
        self._state.game_status = GameStatus.ENDED
        self._state.winner_id = winner_id
        self._tick_loop.cancel()
        logger.info("game ended", game_mode=self.game_mode, winner_id=winner_id, round_number=self._state.round_number)
        self._log_entry(SystemAction.GAME_END, detail)
