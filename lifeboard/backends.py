"""Durable keyed storage for serialized boards (one record per board id)."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

import redis


BOARDS_SET_KEY = "lifeboard:boards"
BOARD_KEY_PREFIX = "lifeboard:board:"  # + {board_id}

BOARD_FILE_SUFFIX = ".board"

# Ids become file names, so keep them to a conservative character set.
_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,128}")


class BoardBackend(ABC):
    """Raw text records keyed by board id. Parsing is the store's job."""

    @abstractmethod
    def read(self, board_id: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def write(self, board_id: str, record: str) -> None:
        """Replace the record for `board_id` in full."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, board_id: str) -> bool:
        """Remove the record; return whether one existed."""
        raise NotImplementedError

    @abstractmethod
    def ids(self) -> list[str]:
        raise NotImplementedError


def _board_key(board_id: str) -> str:
    return f"{BOARD_KEY_PREFIX}{board_id}"


class RedisBoardBackend(BoardBackend):
    def __init__(self, r: redis.Redis) -> None:
        self._r = r

    def read(self, board_id: str) -> str | None:
        raw = self._r.get(_board_key(board_id))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return raw

    def write(self, board_id: str, record: str) -> None:
        pipe = self._r.pipeline()
        pipe.set(_board_key(board_id), record)
        pipe.sadd(BOARDS_SET_KEY, board_id)
        pipe.execute()

    def delete(self, board_id: str) -> bool:
        pipe = self._r.pipeline()
        pipe.delete(_board_key(board_id))
        pipe.srem(BOARDS_SET_KEY, board_id)
        removed, _ = pipe.execute()
        return bool(removed)

    def ids(self) -> list[str]:
        out: list[str] = []
        for raw in self._r.smembers(BOARDS_SET_KEY):
            out.append(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        return sorted(out)


class FileBoardBackend(BoardBackend):
    """One `<id>.board` text file per board under `data_dir`."""

    def __init__(self, data_dir: Path) -> None:
        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._dir

    def _path(self, board_id: str) -> Path | None:
        if not _SAFE_ID.fullmatch(board_id):
            return None
        return self._dir / f"{board_id}{BOARD_FILE_SUFFIX}"

    def read(self, board_id: str) -> str | None:
        path = self._path(board_id)
        if path is None or not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, board_id: str, record: str) -> None:
        path = self._path(board_id)
        if path is None:
            raise ValueError(f"Board id {board_id!r} cannot be stored as a file")
        # newline="" keeps the record byte-identical across platforms.
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(record)

    def delete(self, board_id: str) -> bool:
        path = self._path(board_id)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def ids(self) -> list[str]:
        return sorted(p.stem for p in self._dir.glob(f"*{BOARD_FILE_SUFFIX}") if p.is_file())
