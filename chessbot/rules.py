# -*- coding: utf-8 -*-
"""Chess rules wrapper.

python-chess owns legality. Game holds the one chess.Board for the session and
turns a typed move into either a MoveResult (already applied to the board) or
a MoveRejected. Nothing here talks to hardware.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Union

import chess  # type: ignore

from .coords import Coord


class Color(str, Enum):
    WHITE = "w"
    BLACK = "b"


class MoveFlag(str, Enum):
    EN_PASSANT = "e"
    KINGSIDE_CASTLE = "k"
    QUEENSIDE_CASTLE = "q"


@dataclass(frozen=True)
class MoveResult:
    origin: Coord
    destination: Coord
    color: Color
    captured: bool = False
    promotion: Optional[str] = None  # piece symbol, "q" / "r" / "b" / "n"
    flags: FrozenSet[MoveFlag] = field(default_factory=frozenset)
    san: str = ""


@dataclass(frozen=True)
class MoveRejected:
    move: str
    reason: str


MoveOutcome = Union[MoveResult, MoveRejected]


def _coord(square: int) -> Coord:
    return chess.square_file(square), chess.square_rank(square)


def describe(brd: chess.Board, mv: chess.Move) -> MoveResult:
    """Build a MoveResult for a legal move *before* it is pushed."""
    flags = set()
    if brd.is_en_passant(mv):
        flags.add(MoveFlag.EN_PASSANT)
    if brd.is_kingside_castling(mv):
        flags.add(MoveFlag.KINGSIDE_CASTLE)
    if brd.is_queenside_castling(mv):
        flags.add(MoveFlag.QUEENSIDE_CASTLE)

    return MoveResult(
        origin=_coord(mv.from_square),
        destination=_coord(mv.to_square),
        color=Color.WHITE if brd.turn == chess.WHITE else Color.BLACK,
        captured=brd.is_capture(mv),
        promotion=chess.piece_symbol(mv.promotion) if mv.promotion else None,
        flags=frozenset(flags),
        san=brd.san(mv),
    )


class Game:
    def __init__(self, board: Optional[chess.Board] = None):
        self.board = board if board is not None else chess.Board()

    def reset(self) -> None:
        self.board.reset()

    @property
    def turn(self) -> Color:
        return Color.WHITE if self.board.turn == chess.WHITE else Color.BLACK

    def ascii(self) -> str:
        return str(self.board)

    def try_move(self, text: str) -> MoveOutcome:
        """Accepts SAN (exd5, O-O, e8=Q) or UCI (e2e4, e7e8q)."""
        s = (text or "").strip()
        if not s:
            return MoveRejected(s, "empty move")

        try:
            mv = self.board.parse_san(s)
        except ValueError:
            try:
                mv = chess.Move.from_uci(s.lower())
            except ValueError:
                return MoveRejected(s, "not a move")

        # parse_san hands back null moves ("--", "0000") without a legality check.
        if not mv or mv not in self.board.legal_moves:
            return MoveRejected(s, "illegal move")

        result = describe(self.board, mv)
        self.board.push(mv)
        return result
