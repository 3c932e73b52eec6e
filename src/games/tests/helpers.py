"""Shared helpers for engine tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from games.logic.rng import SEED_BYTES

if TYPE_CHECKING:
    from games.logic.engine import BaseEngine
    from games.logic.entry import GameEntry

# A fixed seed for deterministic tests (64 hex chars = 32 bytes)
FIXED_SEED = "ab" * SEED_BYTES
OTHER_SEED = "cd" * SEED_BYTES


class EntryRecorder:
    """Update listener that keeps every (state, entry) notification."""

    def __init__(self) -> None:
        self.entries: list[GameEntry] = []
        self.states: list[object] = []

    def __call__(self, state: object, entry: GameEntry) -> None:
        self.states.append(state)
        self.entries.append(entry)

    @property
    def action_types(self) -> list[str]:
        return [entry.action_type for entry in self.entries]


def run_to_end(engine: BaseEngine, max_ticks: int = 100_000) -> int:
    """Start the engine and advance until it ends; returns the number of ticks."""
    engine.start()
    ticks = 0
    while engine.advance():
        ticks += 1
        assert ticks <= max_ticks, "engine did not terminate"
    return ticks
