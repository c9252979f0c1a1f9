# -*- coding: utf-8 -*-
"""Move -> actuation command decomposition.

One chess move can take several physical steps. Order matters: a captured
piece leaves its square before the mover arrives, the pawn leaves before its
promotion piece is fetched from the reserve row, and the en passant victim and
castling rook are handled after the main move.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from .coords import Coord, pack
from .protocol import ActuationCommand, Op
from .rules import Color, Game, MoveFlag, MoveRejected, MoveResult

log = logging.getLogger(__name__)

# Off-board supply rows holding spare pieces.
RESERVE_FILE = 0
WHITE_RESERVE_RANK = -1
BLACK_RESERVE_RANK = 8

KINGSIDE_ROOK_FILES = (7, 5)
QUEENSIDE_ROOK_FILES = (0, 3)


def take_piece(square: Coord) -> ActuationCommand:
    return ActuationCommand(Op.TAKE_PIECE, pack(square))


def move_piece(src: Coord, dst: Coord) -> ActuationCommand:
    return ActuationCommand(Op.MOVE_PIECE, pack(src, dst))


def reserve_square(color: Color) -> Coord:
    rank = WHITE_RESERVE_RANK if color == Color.WHITE else BLACK_RESERVE_RANK
    return RESERVE_FILE, rank


def en_passant_victim(result: MoveResult) -> Coord:
    file, rank = result.destination
    return file, rank + (-1 if result.color == Color.WHITE else 1)


def castling_rook(result: MoveResult) -> Tuple[Coord, Coord]:
    src_file, dst_file = (
        KINGSIDE_ROOK_FILES if MoveFlag.KINGSIDE_CASTLE in result.flags else QUEENSIDE_ROOK_FILES
    )
    rank = 0 if result.color == Color.WHITE else 7
    return (src_file, rank), (dst_file, rank)


def plan(result: MoveResult) -> Iterator[ActuationCommand]:
    """Yield the commands for one move, in the order they must run."""
    flags = result.flags

    if result.captured and MoveFlag.EN_PASSANT not in flags:
        yield take_piece(result.destination)

    if result.promotion:
        yield take_piece(result.origin)
        yield move_piece(reserve_square(result.color), result.destination)
    else:
        yield move_piece(result.origin, result.destination)

    if MoveFlag.EN_PASSANT in flags:
        yield take_piece(en_passant_victim(result))

    if MoveFlag.KINGSIDE_CASTLE in flags or MoveFlag.QUEENSIDE_CASTLE in flags:
        yield move_piece(*castling_rook(result))


class MoveTranslator:
    def __init__(self, link):
        self.link = link

    def execute(self, result: MoveResult) -> None:
        """
        Send each command and wait for its ACK before building the next.
        The first failure propagates and the rest of the move is not sent.
        """
        for cmd in plan(result):
            log.info("%s: %s", result.san or "move", cmd)
            self.link.execute(cmd)

    def play(self, game: Game, text: str) -> Optional[MoveRejected]:
        outcome = game.try_move(text)
        if isinstance(outcome, MoveRejected):
            log.info("Rejected %r: %s", outcome.move, outcome.reason)
            return outcome
        self.execute(outcome)
        return None
