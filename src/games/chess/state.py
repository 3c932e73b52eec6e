"""
Four-player King of the Hill state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from games.logic.enums import GameMode
from games.logic.state import BaseGameState


class ChessColor(StrEnum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class ChessPhase(StrEnum):
    SETUP = "setup"
    MAIN = "main"


class ChessAction(StrEnum):
    CHESS_MOVE = "CHESS_MOVE"
    KING_OF_HILL = "KING_OF_HILL"


KING_START_SQUARES: dict[ChessColor, tuple[int, int]] = {
    ChessColor.RED: (0, 3),
    ChessColor.BLUE: (7, 4),
    ChessColor.GREEN: (0, 4),
    ChessColor.YELLOW: (7, 3),
}


@dataclass
class ChessPiece:
    id: str
    kind: str
    color: ChessColor
    row: int
    col: int
    captured: bool = False
    has_moved: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col


@dataclass
class ChessState(BaseGameState):
    """
    Board of kings plus the hill square.

    `board[row][col]` holds the piece id on that square or None; it always
    agrees with the positions stored on `kings`.
    """

    game_mode: Literal[GameMode.CHESS] = GameMode.CHESS
    board: list[list[str | None]] = field(default_factory=list)
    kings: dict[ChessColor, ChessPiece] = field(default_factory=dict)
    hill: tuple[int, int] = (3, 3)
    king_of_hill: ChessColor | None = None
    phase: ChessPhase = ChessPhase.SETUP
    move_history: list[str] = field(default_factory=list)

    def piece_at(self, row: int, col: int) -> ChessPiece | None:
        piece_id = self.board[row][col]
        if piece_id is None:
            return None
        return next((king for king in self.kings.values() if king.id == piece_id), None)
