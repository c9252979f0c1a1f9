# -*- coding: utf-8 -*-
"""Square label <-> (file, rank) coordinate helpers.

Coordinates are zero indexed: a1 is (0, 0), h8 is (7, 7). Reserve rows used for
promotion pieces sit just off the board at rank -1 (white) and rank 8 (black).
"""

from __future__ import annotations

from typing import Tuple

Coord = Tuple[int, int]

FILES = "abcdefgh"
RANKS = "12345678"


def encode(label: str) -> Coord:
    """'e2' -> (4, 1)."""
    if len(label) != 2 or label[0] not in FILES or label[1] not in RANKS:
        raise ValueError(f"not a square: {label!r}")
    return ord(label[0]) - ord("a"), int(label[1]) - 1


def decode(coord: Coord) -> str:
    file, rank = coord
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"off-board coordinate: {coord!r}")
    return f"{FILES[file]}{rank + 1}"


def pack(*coords: Coord) -> bytes:
    # Off-board ranks go out as two's-complement bytes (-1 -> 0xFF).
    out = bytearray()
    for file, rank in coords:
        out.append(file & 0xFF)
        out.append(rank & 0xFF)
    return bytes(out)
