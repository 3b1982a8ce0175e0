from __future__ import annotations

from pathlib import Path

import pytest

from lifeboard.backends import FileBoardBackend


def test_file_backend_writes_board_files(tmp_path: Path) -> None:
    backend = FileBoardBackend(tmp_path / "data")

    backend.write("abc-123", "1,1,0\n1\n")

    assert (tmp_path / "data" / "abc-123.board").read_text() == "1,1,0\n1\n"
    assert backend.ids() == ["abc-123"]
    assert backend.read("abc-123") == "1,1,0\n1\n"


def test_file_backend_ignores_other_files(tmp_path: Path) -> None:
    backend = FileBoardBackend(tmp_path)
    (tmp_path / "notes.txt").write_text("hello")
    backend.write("b1", "1,1,0\n0\n")

    assert backend.ids() == ["b1"]


@pytest.mark.parametrize("board_id", ["../escape", "a/b", "", "x" * 200, "dot.ted"])
def test_file_backend_treats_unsafe_ids_as_absent(tmp_path: Path, board_id: str) -> None:
    backend = FileBoardBackend(tmp_path / "data")

    assert backend.read(board_id) is None
    assert backend.delete(board_id) is False
    with pytest.raises(ValueError):
        backend.write(board_id, "1,1,0\n0\n")
    assert not (tmp_path / "escape.board").exists()


def test_file_backend_delete_reports_existence(tmp_path: Path) -> None:
    backend = FileBoardBackend(tmp_path)
    backend.write("b1", "1,1,0\n0\n")

    assert backend.delete("b1") is True
    assert backend.delete("b1") is False
