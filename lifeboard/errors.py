from __future__ import annotations


class LifeBoardError(Exception):
    """Base class for every domain error raised by lifeboard."""


class InvalidInput(LifeBoardError, ValueError):
    """The initial grid is empty, jagged, or holds values other than 0/1."""


class InvalidArgument(LifeBoardError, ValueError):
    """A generation count or budget is out of range."""


class BoardNotFound(LifeBoardError, LookupError):
    def __init__(self, board_id: str) -> None:
        super().__init__(f"Board with ID {board_id} not found")
        self.board_id = board_id


class CorruptState(LifeBoardError, ValueError):
    """A durable board record could not be parsed."""


class SimulationTimeout(LifeBoardError, TimeoutError):
    def __init__(self, max_generations: int) -> None:
        super().__init__(f"Board did not reach conclusion after {max_generations} generations")
        self.max_generations = max_generations


class BoardBusy(LifeBoardError):
    def __init__(self, board_id: str) -> None:
        super().__init__(f"Board {board_id} is busy")
        self.board_id = board_id
