"""Conway's Game of Life transition rule over finite, hard-edged boards."""

from __future__ import annotations

from dataclasses import replace

import numpy as np

from lifeboard.board import Board
from lifeboard.errors import InvalidArgument

_OFFSETS = tuple((dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0))


def live_neighbours(cells: np.ndarray) -> np.ndarray:
    """Count live Moore neighbours of every cell.

    The grid is zero-padded rather than rolled: positions outside the board do
    not exist, so edge cells simply have fewer neighbours.
    """

    height, width = cells.shape
    padded = np.pad(cells, 1)
    counts = np.zeros((height, width), dtype=np.uint8)
    for dx, dy in _OFFSETS:
        counts += padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return counts


def apply_rule(cells: np.ndarray, neighbours: np.ndarray) -> np.ndarray:
    alive = cells == 1
    survives = alive & ((neighbours == 2) | (neighbours == 3))
    born = ~alive & (neighbours == 3)
    return (survives | born).astype(np.uint8)


def count_live_neighbours(board: Board, x: int, y: int) -> int:
    return int(live_neighbours(board.cells)[y, x])


def step(board: Board) -> Board:
    """Return the next generation of `board` as a new Board."""

    next_cells = apply_rule(board.cells, live_neighbours(board.cells))
    return replace(board, cells=next_cells, generation=board.generation + 1)


def step_n(board: Board, generations: int) -> Board:
    """Apply `step` exactly `generations` times, materializing every generation."""

    if generations < 0:
        raise InvalidArgument("Number of generations must be non-negative")

    current = board.clone()
    for _ in range(generations):
        current = step(current)
    return current
