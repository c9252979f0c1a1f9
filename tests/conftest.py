"""
Pytest will auto-discover / import this file called 'conftest.py'.
Fakes for the serial channel and the board link, shared by several test modules.
"""

from typing import Callable, Dict, Iterable, List, Optional

import pytest

from chessbot.board_link import BoardLink
from chessbot.protocol import ActuationCommand


class FakeSerial:
    """Stands in for serial.Serial. Each write() queues the next scripted reply."""

    def __init__(self, replies: Iterable[bytes] = ()):
        self.replies = list(replies)
        self.rx = bytearray()
        self.written: List[bytes] = []
        self.closed = False
        self.discarded = 0

    def write(self, data: bytes) -> int:
        self.written.append(bytes(data))
        if self.replies:
            self.rx.extend(self.replies.pop(0))
        return len(data)

    def flush(self) -> None:
        pass

    def reset_input_buffer(self) -> None:
        self.discarded += len(self.rx)
        self.rx.clear()

    def read(self, n: int = 1) -> bytes:
        out = bytes(self.rx[:n])
        del self.rx[:n]
        return out

    def close(self) -> None:
        self.closed = True


class RecordingLink:
    """Collects commands instead of framing them. Raises errors[i] on the i-th command."""

    def __init__(self, errors: Optional[Dict[int, Exception]] = None):
        self.commands: List[ActuationCommand] = []
        self.errors = errors or {}

    def execute(self, cmd: ActuationCommand) -> None:
        index = len(self.commands)
        self.commands.append(cmd)
        if index in self.errors:
            raise self.errors[index]


@pytest.fixture
def make_link() -> Callable[..., BoardLink]:
    """Board link on a scripted fake port with a short ack timeout."""

    def _make(*replies: bytes, ack_timeout: float = 0.05) -> BoardLink:
        return BoardLink(FakeSerial(replies), ack_timeout=ack_timeout, poll_interval=0.001)

    return _make


@pytest.fixture
def recording_link() -> RecordingLink:
    return RecordingLink()
