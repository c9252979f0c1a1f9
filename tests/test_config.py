"""Unit tests for chessbot/config.py"""

import pytest
import serial  # type: ignore

from chessbot.config import ACK_TIMEOUT, BAUD, SERIAL_PORT, LinkConfig, open_serial


def test_defaults() -> None:
    cfg = LinkConfig.from_env({})
    assert cfg == LinkConfig(port=SERIAL_PORT, baud=BAUD, ack_timeout=ACK_TIMEOUT)


def test_environment_overrides() -> None:
    cfg = LinkConfig.from_env(
        {
            "CHESSBOT_PORT": "/dev/ttyUSB1",
            "CHESSBOT_BAUD": "9600",
            "CHESSBOT_READ_TIMEOUT": "0.5",
            "CHESSBOT_ACK_TIMEOUT": "5",
        }
    )
    assert cfg.port == "/dev/ttyUSB1"
    assert cfg.baud == 9600
    assert cfg.read_timeout == 0.5
    assert cfg.ack_timeout == 5.0


def test_blank_values_fall_back() -> None:
    assert LinkConfig.from_env({"CHESSBOT_BAUD": "  "}).baud == BAUD


def test_bad_number_names_the_variable() -> None:
    with pytest.raises(ValueError, match="CHESSBOT_BAUD"):
        LinkConfig.from_env({"CHESSBOT_BAUD": "fast"})


def test_zero_ack_timeout_waits_forever() -> None:
    assert LinkConfig.from_env({"CHESSBOT_ACK_TIMEOUT": "0"}).ack_timeout is None


@pytest.mark.parametrize("name", ["CHESSBOT_ACK_TIMEOUT", "CHESSBOT_READ_TIMEOUT"])
def test_negative_timeouts_are_refused(name: str) -> None:
    with pytest.raises(ValueError, match=name):
        LinkConfig.from_env({name: "-1"})


class RecordingPort:
    """Captures how serial.Serial was called."""

    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.flushed_input = False

    def reset_input_buffer(self) -> None:
        self.flushed_input = True


def test_open_serial_is_8n1(monkeypatch) -> None:
    monkeypatch.setattr(serial, "Serial", RecordingPort)
    port = open_serial(LinkConfig(port="/dev/ttyUSB0", baud=57600, read_timeout=0.25))

    assert port.args == ("/dev/ttyUSB0", 57600)
    assert port.kwargs == {
        "bytesize": serial.EIGHTBITS,
        "parity": serial.PARITY_NONE,
        "stopbits": serial.STOPBITS_ONE,
        "timeout": 0.25,
    }
    assert port.flushed_input
