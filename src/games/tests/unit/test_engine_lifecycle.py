"""
Shared engine lifecycle: start, manual advance, listeners, tick loop and reset.

Exercised through the Chess and Monopoly engines, which use the base
lifecycle without overriding it.
"""

import asyncio

from games.chess.engine import ChessEngine
from games.logic.entry import GameEntry
from games.logic.enums import SYSTEM_ACTOR, GameStatus, SystemAction
from games.logic.settings import ChessSettings
from games.monopoly.engine import MonopolyEngine
from games.tests.helpers import FIXED_SEED, EntryRecorder


def _log_signature(entries: list[GameEntry]) -> list[tuple[int, str, str, str]]:
    return [(e.turn, e.actor, e.action_type, e.detail) for e in entries]


class TestStart:
    def test_new_engine_is_waiting_with_empty_log(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        assert engine.get_game_state().game_status == GameStatus.WAITING
        assert engine.get_game_log() == []
        assert engine.seed == FIXED_SEED

    def test_generates_seed_when_missing(self):
        assert len(MonopolyEngine().seed) == 64

    def test_start_logs_game_start(self, recorder: EntryRecorder):
        engine = MonopolyEngine(recorder, seed=FIXED_SEED)
        assert engine.start() is True
        assert engine.get_game_state().game_status == GameStatus.PLAYING
        first = engine.get_game_log()[0]
        assert first.action_type == SystemAction.GAME_START
        assert first.actor == SYSTEM_ACTOR
        assert first.turn == 1
        assert recorder.action_types == [SystemAction.GAME_START]

    def test_start_twice_is_refused(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start()
        assert engine.start() is False
        starts = [e for e in engine.get_game_log() if e.action_type == SystemAction.GAME_START]
        assert len(starts) == 1


class TestAdvance:
    def test_advance_before_start_does_nothing(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        assert engine.advance() is False
        assert engine.get_game_log() == []
        assert engine.get_game_state().round_number == 1

    def test_advance_after_end_does_nothing(self):
        engine = ChessEngine(seed=FIXED_SEED, settings=ChessSettings(hill_capture_chance=1.0))
        engine.start()
        assert engine.advance() is True
        assert engine.get_game_state().game_status == GameStatus.ENDED
        log_size = len(engine.get_game_log())
        assert engine.advance() is False
        assert len(engine.get_game_log()) == log_size

    def test_listener_sees_live_state(self, recorder: EntryRecorder):
        engine = MonopolyEngine(recorder, seed=FIXED_SEED)
        engine.start()
        engine.advance()
        assert all(state is engine.get_game_state() for state in recorder.states)
        assert _log_signature(recorder.entries) == _log_signature(engine.get_game_log())

    def test_get_game_log_returns_copy(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start()
        engine.get_game_log().clear()
        assert len(engine.get_game_log()) == 1


class TestSubscribe:
    def test_multiple_listeners_and_unsubscribe(self):
        first = EntryRecorder()
        second = EntryRecorder()
        engine = MonopolyEngine(first, seed=FIXED_SEED)
        unsubscribe = engine.subscribe(second)
        engine.start()
        unsubscribe()
        engine.advance()

        assert len(first.entries) > len(second.entries)
        assert second.action_types == [SystemAction.GAME_START]

    def test_unsubscribe_twice_is_harmless(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        unsubscribe = engine.subscribe(EntryRecorder())
        unsubscribe()
        unsubscribe()


class TestReset:
    def test_reset_replays_same_game(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start()
        for _ in range(40):
            engine.advance()
        first_run = _log_signature(engine.get_game_log())

        engine.reset_game()
        engine.start()
        for _ in range(40):
            engine.advance()
        assert _log_signature(engine.get_game_log()) == first_run

    def test_same_seed_engines_agree(self):
        a = MonopolyEngine(seed=FIXED_SEED)
        b = MonopolyEngine(seed=FIXED_SEED)
        for engine in (a, b):
            engine.start()
            for _ in range(25):
                engine.advance()
        assert _log_signature(a.get_game_log()) == _log_signature(b.get_game_log())

    def test_reset_clears_log_and_notifies(self, recorder: EntryRecorder):
        engine = MonopolyEngine(recorder, seed=FIXED_SEED)
        engine.start()
        engine.advance()
        engine.reset_game()

        state = engine.get_game_state()
        assert engine.get_game_log() == []
        assert state.game_status == GameStatus.WAITING
        assert state.round_number == 1
        assert recorder.action_types[-1] == SystemAction.GAME_RESET
        assert recorder.states[-1] is state

    def test_listeners_survive_reset(self, recorder: EntryRecorder):
        engine = MonopolyEngine(recorder, seed=FIXED_SEED)
        engine.reset_game()
        engine.start()
        assert recorder.action_types == [SystemAction.GAME_RESET, SystemAction.GAME_START]


class TestGameLoop:
    def test_loop_outside_event_loop_still_starts_game(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        assert engine.start_game_loop(10) is False
        assert engine.get_game_state().game_status == GameStatus.PLAYING
        assert engine.is_running is False
        assert engine.advance() is True

    def test_stop_when_not_running(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        assert engine.stop_game_loop() is False
        assert engine.get_game_log() == []

    def test_adjust_speed_when_stopped(self):
        assert MonopolyEngine(seed=FIXED_SEED).adjust_speed(50) is False

    async def test_loop_ticks_and_stops(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        assert engine.start_game_loop(5) is True
        assert engine.is_running is True
        await asyncio.sleep(0.1)
        assert engine.stop_game_loop() is True
        assert engine.is_running is False

        log = engine.get_game_log()
        assert log[-1].action_type == SystemAction.GAME_STOP
        assert engine.get_game_state().round_number > 1
        assert engine.get_game_state().game_status == GameStatus.PLAYING

    async def test_resume_after_stop(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start_game_loop(5)
        await asyncio.sleep(0.03)
        engine.stop_game_loop()
        round_after_stop = engine.get_game_state().round_number

        assert engine.start_game_loop(5) is True
        await asyncio.sleep(0.05)
        engine.stop_game_loop()
        assert engine.get_game_state().round_number > round_after_stop

    async def test_adjust_speed_keeps_running(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start_game_loop(1000)
        assert engine.adjust_speed(5) is True
        assert engine.is_running is True
        await asyncio.sleep(0.05)
        engine.stop_game_loop()
        assert engine.get_game_state().round_number > 1

    async def test_loop_stops_when_game_ends(self):
        engine = ChessEngine(seed=FIXED_SEED, settings=ChessSettings(hill_capture_chance=1.0))
        ended = asyncio.Event()

        def on_update(_state, entry: GameEntry) -> None:
            if entry.action_type == SystemAction.GAME_END:
                ended.set()

        engine.subscribe(on_update)
        engine.start_game_loop(5)
        await asyncio.wait_for(ended.wait(), timeout=1.0)
        await asyncio.sleep(0.02)
        assert engine.is_running is False
        assert engine.get_game_state().game_status == GameStatus.ENDED
        assert engine.start_game_loop(5) is False

    async def test_reset_stops_loop(self):
        engine = MonopolyEngine(seed=FIXED_SEED)
        engine.start_game_loop(5)
        await asyncio.sleep(0.02)
        engine.reset_game()
        assert engine.is_running is False
        await asyncio.sleep(0.03)
        assert engine.get_game_log() == []
