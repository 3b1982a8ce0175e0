from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient

from lifeboard.backends import FileBoardBackend, RedisBoardBackend
from lifeboard.board import Board
from lifeboard.board_store import BoardStore


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def store(redis_client: fakeredis.FakeRedis) -> BoardStore:
    return BoardStore(RedisBoardBackend(redis_client))


@pytest.fixture()
def file_store(tmp_path: Path) -> BoardStore:
    return BoardStore(FileBoardBackend(tmp_path / "BoardData"))


@pytest.fixture()
def client_and_store(store: BoardStore) -> Generator[tuple[TestClient, BoardStore], None, None]:
    """TestClient whose app-wide store sits on fakeredis instead of a live Redis.

    The singleton is seeded before the app starts so the startup hook reuses it.
    """

    from lifeboard.main import app
    from lifeboard.store_singleton import init_store, reset_store_for_tests

    reset_store_for_tests()
    app_store = init_store(backend=store.backend)

    with TestClient(app) as c:
        yield c, app_store
    reset_store_for_tests()


@pytest.fixture()
def client(client_and_store: tuple[TestClient, BoardStore]) -> TestClient:
    return client_and_store[0]


def grid(*rows: str) -> list[list[int]]:
    """Build a 0/1 grid from strings like "010"."""

    return [[int(ch) for ch in row] for row in rows]


def board_from(*rows: str) -> Board:
    return Board.from_binary_grid(grid(*rows))


BLINKER_VERTICAL = ("010", "010", "010")
BLINKER_HORIZONTAL = ("000", "111", "000")
BLOCK_4X4 = ("0000", "0110", "0110", "0000")
GLIDER_8X8 = (
    "01000000",
    "00100000",
    "11100000",
    "00000000",
    "00000000",
    "00000000",
    "00000000",
    "00000000",
)
