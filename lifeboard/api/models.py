from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt

from lifeboard.board import Board


class BoardCreateRequest(BaseModel):
    # Row-major grid of 0 (dead) / 1 (alive); shape and values are checked by Board.
    initial_state: list[list[StrictInt]] = Field(..., min_length=1)


class BoardCreatedResponse(BaseModel):
    id: str


class BoardResponse(BaseModel):
    id: str
    width: int
    height: int
    generation: int
    created_at: datetime
    state: list[list[int]]

    @classmethod
    def from_board(cls, board: Board) -> BoardResponse:
        return cls(
            id=board.id,
            width=board.width,
            height=board.height,
            generation=board.generation,
            created_at=board.created_at,
            state=board.to_binary_grid(),
        )


class MessageResponse(BaseModel):
    message: str
