from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import IntEnum
from uuid import uuid4

import numpy as np

from lifeboard.errors import CorruptState, InvalidInput


class CellState(IntEnum):
    DEAD = 0
    ALIVE = 1


_HEADER_FIELD = re.compile(r"[0-9]+")
_ROW = re.compile(r"[01]+")
_ZERO = ord("0")


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True, eq=False)
class Board:
    """A finite Game of Life grid plus its identity and generation counter.

    `cells` is a read-only (height, width) uint8 array indexed as cells[y, x];
    width and height are derived from it. Boards are values: transitions build
    new instances and never touch an existing one.
    """

    cells: np.ndarray
    generation: int = 0
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        cells = np.array(self.cells, dtype=np.uint8)
        if cells.ndim != 2 or cells.shape[0] < 1 or cells.shape[1] < 1:
            raise ValueError("Board dimensions must be positive")
        if cells.max() > 1:
            raise ValueError("Cells must be 0 or 1")
        if self.generation < 0:
            raise ValueError("Generation must be non-negative")
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.id == other.id
            and self.generation == other.generation
            and self.created_at == other.created_at
            and np.array_equal(self.cells, other.cells)
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @classmethod
    def blank(cls, width: int, height: int) -> Board:
        return cls(cells=np.zeros((height, width), dtype=np.uint8))

    @classmethod
    def from_binary_grid(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Build a fresh generation-0 board from a row-major 0/1 grid."""

        if not rows or not rows[0]:
            raise InvalidInput("Invalid board input")

        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                raise InvalidInput("All rows must have the same length")
            for value in row:
                # bool is an int subclass; floats like 1.0 compare equal to 1.
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value not in (0, 1):
                    raise InvalidInput("Board must only contain 0s and 1s")

        return cls(cells=np.array(rows, dtype=np.uint8))

    def to_binary_grid(self) -> list[list[int]]:
        return self.cells.astype(int).tolist()

    def cell(self, x: int, y: int) -> CellState:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width}x{self.height} board")
        return CellState(int(self.cells[y, x]))

    def _row_strings(self) -> list[str]:
        chars = self.cells + np.uint8(_ZERO)
        return [row.tobytes().decode("ascii") for row in chars]

    def fingerprint(self) -> str:
        """Cell states only, as a row-major string of '0'/'1'."""

        return (self.cells + np.uint8(_ZERO)).tobytes().decode("ascii")

    def live_count(self) -> int:
        return int(self.cells.sum())

    def is_empty(self) -> bool:
        return not self.cells.any()

    def clone(self) -> Board:
        return replace(self, cells=self.cells.copy())

    def with_generation(self, generation: int) -> Board:
        return replace(self, generation=generation)

    def serialize(self) -> str:
        lines = [f"{self.width},{self.height},{self.generation}", *self._row_strings()]
        return "\n".join(lines) + "\n"

    @classmethod
    def deserialize(cls, board_id: str, text: str) -> Board:
        """Parse the durable text form; `board_id` becomes the board's id."""

        lines = text.splitlines()
        # Tolerate trailing blank lines left by editors or CRLF conversions.
        while lines and not lines[-1].strip():
            lines.pop()
        if not lines:
            raise CorruptState(f"Board {board_id}: empty record")

        header = lines[0].split(",")
        if len(header) != 3 or not all(_HEADER_FIELD.fullmatch(part) for part in header):
            raise CorruptState(f"Board {board_id}: malformed header {lines[0]!r}")
        width, height, generation = (int(part) for part in header)
        if width < 1 or height < 1:
            raise CorruptState(f"Board {board_id}: invalid header values {lines[0]!r}")

        rows = lines[1:]
        if len(rows) != height:
            raise CorruptState(f"Board {board_id}: expected {height} rows, found {len(rows)}")

        for y, row in enumerate(rows):
            if len(row) != width:
                raise CorruptState(f"Board {board_id}: row {y} has length {len(row)}, expected {width}")
            if not _ROW.fullmatch(row):
                raise CorruptState(f"Board {board_id}: invalid cell character in row {y}")

        raw = np.frombuffer("".join(rows).encode("ascii"), dtype=np.uint8) - np.uint8(_ZERO)
        return cls(cells=raw.reshape(height, width), generation=generation, id=board_id)
