from __future__ import annotations

from dataclasses import dataclass

from lifeboard.board import Board
from lifeboard.engine import step
from lifeboard.errors import InvalidArgument, SimulationTimeout


@dataclass(frozen=True, slots=True)
class TrajectoryResult:
    """Where a board's trajectory concluded.

    - `board`: the concluding state. On a cycle its generation is the first
      generation at which that state was seen.
    - `cycle_detected`: False when the board died out instead.
    - `cycle_start_generation`: set only when a cycle was detected.
    """

    board: Board
    cycle_detected: bool
    cycle_start_generation: int | None = None


def run_to_conclusion(board: Board, max_generations: int) -> TrajectoryResult:
    """Advance `board` until it repeats a state or dies out.

    At most `max_generations` states are examined; the map of seen states is
    keyed by the full fingerprint, so it holds at most that many entries.
    """

    if max_generations < 1:
        raise InvalidArgument("max_generations must be positive")

    current = board.clone()
    first_seen: dict[str, int] = {}

    for _ in range(max_generations):
        fingerprint = current.fingerprint()

        previous = first_seen.get(fingerprint)
        if previous is not None:
            return TrajectoryResult(
                board=current.with_generation(previous),
                cycle_detected=True,
                cycle_start_generation=previous,
            )

        if current.is_empty():
            return TrajectoryResult(board=current, cycle_detected=False)

        first_seen[fingerprint] = current.generation
        current = step(current)

    raise SimulationTimeout(max_generations)
