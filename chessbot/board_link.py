# -*- coding: utf-8 -*-
"""
Serial link to the board's microcontroller.
- Frames each command, writes it, then blocks until the board answers.
- MESSAGE frames arriving before the answer are logged and skipped.
- One command in flight at a time; no retries.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import serial  # type: ignore

from .config import ACK_TIMEOUT, LinkConfig, open_serial
from .coords import Coord, pack
from .errors import AckTimeout, ChannelError, ProtocolViolation
from .protocol import NACK_REASONS, QUERY_OPS, ActuationCommand, Op, Tag, encode_frame

log = logging.getLogger(__name__)

POLL_INTERVAL: float = 0.01


class BoardLink:
    """
    Owns the serial channel. Anything with write(bytes), read(n) -> bytes (empty when nothing
    arrived) and reset_input_buffer() will do; normally a pyserial Serial.
    """
    def __init__(self, ser, ack_timeout: Optional[float] = ACK_TIMEOUT, poll_interval: float = POLL_INTERVAL):
        self.ser = ser
        self.ack_timeout = ack_timeout
        self.poll_interval = poll_interval

    @classmethod
    def open(cls, cfg: LinkConfig) -> "BoardLink":
        try:
            ser = open_serial(cfg)
        except serial.SerialException as e:
            raise ChannelError(f"cannot open {cfg.port}: {e}") from e
        log.info("Opened %s @ %d baud", cfg.port, cfg.baud)
        return cls(ser, ack_timeout=cfg.ack_timeout)

    def close(self) -> None:
        try:
            self.ser.close()
        except (serial.SerialException, OSError) as e:
            log.warning("Closing serial port failed: %s", e)

    def __enter__(self) -> "BoardLink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Commands

    def send(self, op: int, payload: bytes = b"") -> Optional[bytes]:
        """
        Send one command and wait for the board's answer.

        Returns the response payload for query ops, None for everything else.
        Raises a NackError subclass when the board refuses the command,
        ProtocolViolation on garbage, AckTimeout when the board goes quiet and
        ChannelError when the port itself fails.
        """
        op = Op(op)
        frame = encode_frame(op, payload)
        log.debug("[->Board] %s %s", op.name, frame.hex())
        self._write(frame)

        deadline = None if self.ack_timeout is None else time.monotonic() + self.ack_timeout
        while True:
            tag = self._read_byte(op, deadline)

            if tag == Tag.MESSAGE:
                text = self._read_record(op, deadline)
                log.info("[Board] %s", text.decode("utf-8", errors="replace"))
                continue

            if tag == Tag.ACK:
                if op in QUERY_OPS:
                    data = self._read_record(op, deadline)
                    log.debug("[Board->] ACK %s %s", op.name, data.hex())
                    return data
                log.debug("[Board->] ACK %s", op.name)
                return None

            if tag == Tag.NACK:
                code = self._read_byte(op, deadline)
                err = NACK_REASONS.get(code)
                if err is None:
                    raise ProtocolViolation(f"unknown nack reason 0x{code:02x} for {op.name}", op)
                log.warning("[Board->] NACK %s reason=0x%02x", op.name, code)
                raise err(op)

            raise ProtocolViolation(f"unexpected byte 0x{tag:02x} in ack slot for {op.name}", op)

    def execute(self, cmd: ActuationCommand) -> Optional[bytes]:
        return self.send(cmd.op, cmd.payload)

    def read_angles(self) -> bytes:
        return self.send(Op.READ_ANGLE) or b""

    def read_position(self) -> bytes:
        return self.send(Op.READ_POS) or b""

    def define_corner(self, index: int) -> None:
        self.send(Op.CORNER_DEF, bytes([index]))

    def move_to_square(self, coord: Coord) -> None:
        self.send(Op.MOVE_CHESS_COORD, pack(coord))

    # Channel I/O

    def _write(self, data: bytes) -> None:
        # Late bytes from an earlier command must not answer this one.
        try:
            self.ser.reset_input_buffer()
            self.ser.write(data)
            self.ser.flush()
        except (serial.SerialException, OSError) as e:
            raise ChannelError(f"serial write failed: {e}") from e

    def _read_exact(self, n: int, op: Op, deadline: Optional[float]) -> bytes:
        buf = bytearray()
        while len(buf) < n:
            try:
                chunk = self.ser.read(n - len(buf))
            except (serial.SerialException, OSError) as e:
                raise ChannelError(f"serial read failed: {e}") from e
            if chunk:
                buf.extend(chunk)
                continue
            if deadline is not None and time.monotonic() >= deadline:
                raise AckTimeout(f"no answer from board for {op.name} after {self.ack_timeout}s", op)
            time.sleep(self.poll_interval)
        return bytes(buf)

    def _read_byte(self, op: Op, deadline: Optional[float]) -> int:
        return self._read_exact(1, op, deadline)[0]

    def _read_record(self, op: Op, deadline: Optional[float]) -> bytes:
        length = self._read_byte(op, deadline)
        return self._read_exact(length, op, deadline)
