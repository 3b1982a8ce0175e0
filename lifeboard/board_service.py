from __future__ import annotations

import logging
from collections.abc import Sequence

from lifeboard.board import Board
from lifeboard.board_store import BoardStore
from lifeboard.engine import step, step_n
from lifeboard.errors import BoardNotFound, InvalidArgument, SimulationTimeout
from lifeboard.lock import board_lock
from lifeboard.settings import DEFAULT_MAX_GENERATIONS
from lifeboard.trajectory import run_to_conclusion


logger = logging.getLogger(__name__)


def create_board(*, store: BoardStore, initial_state: Sequence[Sequence[int]]) -> Board:
    board = Board.from_binary_grid(initial_state)
    store.save(board)
    logger.info("Created new board with ID: %s (%dx%d)", board.id, board.width, board.height)
    return board


def get_board(*, store: BoardStore, board_id: str) -> Board:
    board = store.get(board_id)
    if board is None:
        raise BoardNotFound(board_id)
    return board


def delete_board(*, store: BoardStore, board_id: str) -> str:
    if not store.delete(board_id):
        logger.warning("Board with ID %s not found", board_id)
        raise BoardNotFound(board_id)
    return f"Successfully deleted board {board_id}"


def next_state(*, store: BoardStore, board_id: str) -> Board:
    with board_lock(board_id):
        board = get_board(store=store, board_id=board_id)
        next_board = step(board)
        store.save(next_board)

    logger.info("Computed next state for board %s, generation %d", board_id, next_board.generation)
    return next_board


def state_after_generations(*, store: BoardStore, board_id: str, generations: int) -> Board:
    if generations < 0:
        raise InvalidArgument("Number of generations must be non-negative")

    with board_lock(board_id):
        board = get_board(store=store, board_id=board_id)
        result = step_n(board, generations)
        store.save(result)

    logger.info("Computed state after %d generations for board %s", generations, board_id)
    return result


def final_state(
    *,
    store: BoardStore,
    board_id: str,
    max_generations: int = DEFAULT_MAX_GENERATIONS,
) -> Board:
    """Run a board until it cycles or dies out, then persist the concluding state.

    On a cycle the saved generation is the first occurrence of the repeating state.
    """

    if max_generations < 1:
        raise InvalidArgument("max_generations must be positive")

    with board_lock(board_id):
        board = get_board(store=store, board_id=board_id)
        try:
            outcome = run_to_conclusion(board, max_generations)
        except SimulationTimeout:
            logger.warning(
                "Board %s did not reach conclusion after %d generations", board_id, max_generations
            )
            raise
        store.save(outcome.board)

    if outcome.cycle_detected:
        logger.info(
            "Board %s stabilized into a cycle starting at generation %s",
            board_id,
            outcome.cycle_start_generation,
        )
    else:
        logger.info("Board %s reached empty state at generation %d", board_id, outcome.board.generation)
    return outcome.board
