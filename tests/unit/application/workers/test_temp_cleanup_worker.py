"""Tests for TempFileCleanupWorker."""

import asyncio
from pathlib import Path

import pytest

from soundhaven.application.workers import TempFileCleanupWorker


class TestTempFileCleanupWorker:
    @pytest.fixture
    def temp_dir(self, tmp_path: Path) -> Path:
        directory = tmp_path / "uploads"
        directory.mkdir()
        return directory

    async def test_sweep_deletes_files_only(self, temp_dir: Path) -> None:
        (temp_dir / "a.mp3").write_bytes(b"x")
        (temp_dir / "b.jpg").write_bytes(b"y")
        (temp_dir / "keep").mkdir()
        worker = TempFileCleanupWorker(temp_dir)

        deleted = await worker.sweep()

        assert deleted == 2
        assert [p.name for p in temp_dir.iterdir()] == ["keep"]

    async def test_sweep_missing_directory_is_noop(self, tmp_path: Path) -> None:
        worker = TempFileCleanupWorker(tmp_path / "does-not-exist")

        assert await worker.sweep() == 0

    async def test_stats_accumulate(self, temp_dir: Path) -> None:
        worker = TempFileCleanupWorker(temp_dir, interval_seconds=60)
        (temp_dir / "a").write_bytes(b"x")
        await worker.sweep()
        (temp_dir / "b").write_bytes(b"x")
        (temp_dir / "c").write_bytes(b"x")
        await worker.sweep()

        stats = worker.get_stats()

        assert stats["total_files_deleted"] == 3
        assert stats["files_deleted_last_sweep"] == 2
        assert stats["last_sweep_at"] is not None
        assert stats["interval_seconds"] == 60
        assert stats["running"] is False

    async def test_start_sweeps_until_stopped(self, temp_dir: Path) -> None:
        (temp_dir / "stale.tmp").write_bytes(b"x")
        worker = TempFileCleanupWorker(temp_dir, interval_seconds=3600)

        task = asyncio.create_task(worker.start())
        for _ in range(50):
            await asyncio.sleep(0.01)
            if worker.get_stats()["total_files_deleted"]:
                break
        worker.stop()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert not (temp_dir / "stale.tmp").exists()
        assert worker.get_stats()["running"] is False

    async def test_failing_sweep_does_not_kill_loop(
        self, temp_dir: Path, mocker
    ) -> None:
        worker = TempFileCleanupWorker(temp_dir, interval_seconds=0)
        calls = 0

        def flaky() -> int:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise OSError("boom")
            worker.stop()
            return 0

        mocker.patch.object(worker, "_sweep_sync", side_effect=flaky)

        await asyncio.wait_for(worker.start(), timeout=5)

        assert calls == 2
