from __future__ import annotations

import logging
import threading

from lifeboard.backends import BoardBackend
from lifeboard.board import Board
from lifeboard.errors import CorruptState


logger = logging.getLogger(__name__)

_ID_LOCK_STRIPES = 64


class BoardStore:
    """Read-through, write-through cache of boards over a durable backend.

    Contract:
      - `get` serves from memory, loading from the backend on a miss.
      - `save` writes the backend first and only then replaces the cached entry,
        so a failed write leaves the cache untouched and the error propagates.
      - `delete` drops both copies.

    Backend I/O for an id runs under that id's stripe lock; the cache dict has its
    own short-held lock, so work on unrelated boards does not queue behind it.
    Boards are immutable, so cached instances are handed out directly.
    """

    def __init__(self, backend: BoardBackend) -> None:
        self._backend = backend
        self._cache: dict[str, Board] = {}
        self._cache_lock = threading.Lock()
        self._id_locks = tuple(threading.Lock() for _ in range(_ID_LOCK_STRIPES))

    @property
    def backend(self) -> BoardBackend:
        return self._backend

    def _lock_for(self, board_id: str) -> threading.Lock:
        return self._id_locks[hash(board_id) % _ID_LOCK_STRIPES]

    def _cached(self, board_id: str) -> Board | None:
        with self._cache_lock:
            return self._cache.get(board_id)

    def __contains__(self, board_id: object) -> bool:
        return isinstance(board_id, str) and self.get(board_id) is not None

    def __len__(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    def ids(self) -> list[str]:
        with self._cache_lock:
            return sorted(self._cache)

    def load_all(self) -> int:
        """Populate the cache from every durable record.

        Records that fail to parse are logged and skipped.
        """

        loaded = 0
        for board_id in self._backend.ids():
            with self._lock_for(board_id):
                try:
                    board = self._load(board_id)
                except CorruptState:
                    logger.exception("Skipping unreadable board record %s", board_id)
                    continue
                if board is None:
                    continue
                with self._cache_lock:
                    self._cache[board_id] = board
            loaded += 1
        logger.info("Loaded %d boards from durable storage", loaded)
        return loaded

    def _load(self, board_id: str) -> Board | None:
        record = self._backend.read(board_id)
        if record is None:
            return None
        return Board.deserialize(board_id, record)

    def get(self, board_id: str) -> Board | None:
        cached = self._cached(board_id)
        if cached is not None:
            return cached

        with self._lock_for(board_id):
            # Another caller may have loaded or saved it while we waited.
            cached = self._cached(board_id)
            if cached is not None:
                return cached

            try:
                board = self._load(board_id)
            except CorruptState:
                logger.exception("Error loading board %s from durable storage", board_id)
                return None
            if board is None:
                logger.warning("Board with ID %s not found", board_id)
                return None

            with self._cache_lock:
                self._cache[board_id] = board
            return board

    def save(self, board: Board) -> None:
        with self._lock_for(board.id):
            try:
                self._backend.write(board.id, board.serialize())
            except Exception:
                logger.exception("Error saving board %s", board.id)
                raise
            with self._cache_lock:
                self._cache[board.id] = board
        logger.debug("Saved board %s at generation %d", board.id, board.generation)

    def delete(self, board_id: str) -> bool:
        with self._lock_for(board_id):
            with self._cache_lock:
                cached = self._cache.pop(board_id, None)
            existed = self._backend.delete(board_id)
        if existed or cached is not None:
            logger.info("Deleted board %s", board_id)
            return True
        return False
