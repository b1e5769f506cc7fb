"""Tests for the import_bookings command line script."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from conftest import SAMPLE_TEXT
from tourdesk.scripts.import_bookings import import_file


def make_session_ctx(db: AsyncMock) -> AsyncMock:
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=db)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


async def test_dry_run_prints_preview_without_storing(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bookings.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")

    with patch("tourdesk.scripts.import_bookings.AsyncSessionLocal") as mock_session:
        ok = await import_file(path, created_by="cli", dry_run=True)

    assert ok is True
    mock_session.assert_not_called()
    out = capsys.readouterr().out
    assert "2 bookings found" in out
    assert "GYG456DEF" in out
    assert "Jemaa el-Fna" in out


async def test_unparseable_file_fails(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bookings.txt"
    path.write_text("nothing to see here", encoding="utf-8")

    assert await import_file(path, created_by="cli") is False
    assert "Could not parse" in capsys.readouterr().out


async def test_stores_and_commits(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bookings.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")
    db = AsyncMock()
    db.add = MagicMock()

    with patch(
        "tourdesk.scripts.import_bookings.AsyncSessionLocal",
        return_value=make_session_ctx(db),
    ):
        ok = await import_file(path, created_by="cli")

    assert ok is True
    db.commit.assert_awaited_once()
    assert "Stored group" in capsys.readouterr().out


async def test_storage_failure_is_reported(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bookings.txt"
    path.write_text(SAMPLE_TEXT, encoding="utf-8")
    db = AsyncMock()
    db.add = MagicMock()
    db.flush.side_effect = RuntimeError("connection lost")

    with patch(
        "tourdesk.scripts.import_bookings.AsyncSessionLocal",
        return_value=make_session_ctx(db),
    ):
        ok = await import_file(path, created_by="cli")

    assert ok is False
    assert "Import failed" in capsys.readouterr().out
