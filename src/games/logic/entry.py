"""Log record emitted by every engine."""

import time

from pydantic import BaseModel, ConfigDict, Field

from games.logic.enums import SYSTEM_ACTOR


def _now_ms() -> int:
    return int(time.time() * 1000)


class GameEntry(BaseModel):
    """
    One line of an engine's game log.

    Entries are frozen once created. `turn` is the engine's round number at
    the moment the entry was written.
    """

    model_config = ConfigDict(frozen=True)

    turn: int
    actor: str = SYSTEM_ACTOR
    action_type: str
    detail: str
    timestamp: int = Field(default_factory=_now_ms)
