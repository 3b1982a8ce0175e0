from __future__ import annotations

from functools import lru_cache

from lifeboard.board_store import BoardStore
from lifeboard.settings import Settings, load_settings
from lifeboard.store_singleton import get_store as _get_store


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def get_store() -> BoardStore:
    # Routes depend on this wrapper so tests can swap the store via dependency_overrides.
    return _get_store()
