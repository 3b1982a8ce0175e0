from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool

from lifeboard.api.deps import get_settings, get_store
from lifeboard.api.models import BoardCreatedResponse, BoardCreateRequest, BoardResponse, MessageResponse
from lifeboard.board_service import (
    create_board,
    delete_board,
    final_state,
    get_board,
    next_state,
    state_after_generations,
)
from lifeboard.board_store import BoardStore
from lifeboard.errors import (
    BoardBusy,
    BoardNotFound,
    InvalidArgument,
    InvalidInput,
    LifeBoardError,
    SimulationTimeout,
)
from lifeboard.settings import Settings

router = APIRouter()
logger = logging.getLogger(__name__)


_STATUS_BY_ERROR: tuple[tuple[type[LifeBoardError], int], ...] = (
    (InvalidInput, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidArgument, status.HTTP_400_BAD_REQUEST),
    (BoardNotFound, status.HTTP_404_NOT_FOUND),
    (SimulationTimeout, status.HTTP_408_REQUEST_TIMEOUT),
    (BoardBusy, status.HTTP_409_CONFLICT),
)


def _http_error(e: LifeBoardError) -> HTTPException:
    for kind, code in _STATUS_BY_ERROR:
        if isinstance(e, kind):
            return HTTPException(status_code=code, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/boards", response_model=BoardCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_board_route(payload: BoardCreateRequest, store: BoardStore = Depends(get_store)) -> BoardCreatedResponse:
    try:
        board = create_board(store=store, initial_state=payload.initial_state)
    except LifeBoardError as e:
        logger.warning("Invalid board creation request: %s", e)
        raise _http_error(e) from e
    return BoardCreatedResponse(id=board.id)


@router.get("/boards/{board_id}", response_model=BoardResponse)
async def get_board_route(board_id: str, store: BoardStore = Depends(get_store)) -> BoardResponse:
    try:
        board = get_board(store=store, board_id=board_id)
    except LifeBoardError as e:
        raise _http_error(e) from e
    return BoardResponse.from_board(board)


@router.delete("/boards/{board_id}", response_model=MessageResponse)
async def delete_board_route(board_id: str, store: BoardStore = Depends(get_store)) -> MessageResponse:
    try:
        message = delete_board(store=store, board_id=board_id)
    except LifeBoardError as e:
        raise _http_error(e) from e
    return MessageResponse(message=message)


@router.post("/boards/{board_id}/next", response_model=BoardResponse)
async def next_state_route(board_id: str, store: BoardStore = Depends(get_store)) -> BoardResponse:
    try:
        board = await run_in_threadpool(next_state, store=store, board_id=board_id)
    except LifeBoardError as e:
        raise _http_error(e) from e
    return BoardResponse.from_board(board)


@router.post("/boards/{board_id}/advance/{generations}", response_model=BoardResponse)
async def advance_route(board_id: str, generations: int, store: BoardStore = Depends(get_store)) -> BoardResponse:
    try:
        board = await run_in_threadpool(
            state_after_generations,
            store=store,
            board_id=board_id,
            generations=generations,
        )
    except LifeBoardError as e:
        raise _http_error(e) from e
    return BoardResponse.from_board(board)


@router.post("/boards/{board_id}/final", response_model=BoardResponse)
async def final_state_route(
    board_id: str,
    max_generations: int | None = Query(default=None),
    store: BoardStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> BoardResponse:
    """Run the board until it dies out or repeats a state.

    Without `max_generations` the server-wide default budget applies.
    """

    budget = max_generations if max_generations is not None else settings.max_generations
    try:
        board = await run_in_threadpool(final_state, store=store, board_id=board_id, max_generations=budget)
    except LifeBoardError as e:
        raise _http_error(e) from e
    return BoardResponse.from_board(board)
