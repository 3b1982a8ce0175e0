from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from lifeboard.errors import BoardBusy


@dataclass(slots=True)
class _Entry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


_registry_lock = threading.Lock()
_board_locks: dict[str, _Entry] = {}


def _checkout(board_id: str) -> _Entry:
    with _registry_lock:
        entry = _board_locks.get(board_id)
        if entry is None:
            entry = _board_locks[board_id] = _Entry()
        entry.users += 1
        return entry


def _checkin(board_id: str, entry: _Entry) -> None:
    with _registry_lock:
        entry.users -= 1
        if entry.users == 0:
            del _board_locks[board_id]


@contextmanager
def board_lock(board_id: str) -> Iterator[None]:
    """Non-blocking per-board lock for read-advance-save sequences.

    In-process only; a second caller for the same board fails fast with BoardBusy
    rather than queueing behind a long simulation. Entries live only while
    someone holds or is trying the lock.
    """

    entry = _checkout(board_id)
    if not entry.lock.acquire(blocking=False):
        _checkin(board_id, entry)
        raise BoardBusy(board_id)
    try:
        yield
    finally:
        entry.lock.release()
        _checkin(board_id, entry)
