# -*- coding: utf-8 -*-
"""Wire format for Pi -> board commands.

Every command goes out as one frame:

    [opcode][length][payload ...][checksum]

checksum is the sum of the payload bytes mod 256 (0 for an empty payload).

The board answers in the ack slot with one tag byte. MESSAGE frames may be
interleaved before the real ACK/NACK; each carries a length byte and text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Type

from .errors import (
    ChecksumMismatch,
    MalformedArgument,
    NackError,
    NoGoal,
    UnknownOpcode,
)

MAX_PAYLOAD = 255


class Op(IntEnum):
    READ_ANGLE = 0x80
    READ_POS = 0x81
    CORNER_DEF = 0x82
    MOVE_CHESS_COORD = 0x83
    MOVE_PIECE = 0x84
    TAKE_PIECE = 0x85
    MOVE = 0x02
    MOVE_ANGLES = 0x05


# Ops that answer ACK with a length-prefixed payload.
QUERY_OPS = frozenset({Op.READ_ANGLE, Op.READ_POS})


class Tag(IntEnum):
    NACK = 1
    ACK = 2
    MESSAGE = 255


NACK_REASONS: Dict[int, Type[NackError]] = {
    cls.reason_code: cls
    for cls in (UnknownOpcode, ChecksumMismatch, MalformedArgument, NoGoal)
}


@dataclass(frozen=True)
class ActuationCommand:
    op: Op
    payload: bytes = b""

    def frame(self) -> bytes:
        return encode_frame(self.op, self.payload)

    def __str__(self) -> str:
        return f"{self.op.name} {list(self.payload)}"


def checksum(payload: bytes) -> int:
    return sum(payload) % 256


def encode_frame(op: int, payload: bytes = b"") -> bytes:
    if len(payload) > MAX_PAYLOAD:
        raise ValueError(f"payload too long ({len(payload)} > {MAX_PAYLOAD})")
    return bytes([op, len(payload)]) + bytes(payload) + bytes([checksum(payload)])
