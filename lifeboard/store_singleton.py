from __future__ import annotations

from lifeboard.backends import BoardBackend, FileBoardBackend, RedisBoardBackend
from lifeboard.board_store import BoardStore
from lifeboard.infra.redis_client import create_redis
from lifeboard.settings import Settings


_STORE: BoardStore | None = None


def build_backend(settings: Settings) -> BoardBackend:
    if settings.backend == "file":
        return FileBoardBackend(settings.data_dir)
    return RedisBoardBackend(create_redis(settings.redis_url))


def init_store(*, settings: Settings | None = None, backend: BoardBackend | None = None) -> BoardStore:
    """Create the process-wide store once and warm its cache.

    Safe to call multiple times; subsequent calls return the existing instance.
    """

    global _STORE
    if _STORE is None:
        if backend is None:
            if settings is None:
                raise ValueError("init_store() needs either settings or a backend")
            backend = build_backend(settings)
        store = BoardStore(backend)
        store.load_all()
        _STORE = store
    return _STORE


def reset_store_for_tests() -> None:
    """Forget the cached store so tests can initialize one over their own backend."""

    global _STORE
    _STORE = None


def get_store() -> BoardStore:
    if _STORE is None:
        raise RuntimeError("Board store not initialized. Call init_store() at startup.")
    return _STORE
