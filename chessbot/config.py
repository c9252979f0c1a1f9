# -*- coding: utf-8 -*-
"""Serial settings.

Defaults are module constants; each can be overridden from the environment
(CHESSBOT_PORT, CHESSBOT_BAUD, CHESSBOT_READ_TIMEOUT, CHESSBOT_ACK_TIMEOUT).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

import serial  # type: ignore

SERIAL_PORT: str = "/dev/ttyACM0"
BAUD: int = 115200
READ_TIMEOUT: float = 0.1
ACK_TIMEOUT: float = 30.0

T = TypeVar("T")


def _env(environ: Mapping[str, str], name: str, cast: Callable[[str], T], default: T) -> T:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name}={raw!r} is not a valid {cast.__name__}") from None


@dataclass
class LinkConfig:
    port: str = SERIAL_PORT
    baud: int = BAUD
    read_timeout: float = READ_TIMEOUT
    ack_timeout: Optional[float] = ACK_TIMEOUT  # None waits forever

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LinkConfig":
        """CHESSBOT_ACK_TIMEOUT=0 means wait for the board forever."""
        env = os.environ if environ is None else environ
        read_timeout = _env(env, "CHESSBOT_READ_TIMEOUT", float, READ_TIMEOUT)
        if read_timeout < 0:
            raise ValueError(f"CHESSBOT_READ_TIMEOUT={read_timeout} must not be negative")
        ack_timeout = _env(env, "CHESSBOT_ACK_TIMEOUT", float, ACK_TIMEOUT)
        if ack_timeout < 0:
            raise ValueError(f"CHESSBOT_ACK_TIMEOUT={ack_timeout} must not be negative")
        return cls(
            port=_env(env, "CHESSBOT_PORT", str, SERIAL_PORT),
            baud=_env(env, "CHESSBOT_BAUD", int, BAUD),
            read_timeout=read_timeout,
            ack_timeout=ack_timeout or None,
        )


def open_serial(cfg: LinkConfig) -> serial.Serial:
    """Open the board's port as 8N1."""
    ser = serial.Serial(
        cfg.port,
        cfg.baud,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        timeout=cfg.read_timeout,
    )
    ser.reset_input_buffer()
    return ser
