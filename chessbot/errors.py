# -*- coding: utf-8 -*-
"""Exceptions raised by the board link.

Move rejection is not here: the rules wrapper returns a MoveRejected value
instead of raising.
"""

from __future__ import annotations

from typing import Optional


class BoardLinkError(Exception):
    """Anything that went wrong talking to the board."""


class ChannelError(BoardLinkError):
    """The serial device failed (unplugged, closed, I/O error)."""


class ProtocolError(BoardLinkError):
    def __init__(self, message: str, op: Optional[int] = None):
        super().__init__(message)
        self.op = op


class AckTimeout(ProtocolError):
    """No complete response arrived before the deadline."""


class ProtocolViolation(ProtocolError):
    """The board sent a byte that has no meaning where it appeared."""


class NackError(ProtocolError):
    reason_code = 0
    description = "command refused"

    def __init__(self, op: Optional[int] = None):
        name = f"0x{op:02x}" if op is not None else "?"
        super().__init__(f"board refused op {name}: {self.description}", op)


class UnknownOpcode(NackError):
    reason_code = 0xFF
    description = "unknown opcode"


class ChecksumMismatch(NackError):
    reason_code = 0xFE
    description = "checksum mismatch"


class MalformedArgument(NackError):
    reason_code = 0xFD
    description = "malformed argument"


class NoGoal(NackError):
    reason_code = 0xFC
    description = "position unreachable"
