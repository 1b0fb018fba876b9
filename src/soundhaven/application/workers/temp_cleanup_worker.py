"""Temp File Cleanup Worker - sweeps the temporary upload directory.

Hey future me - uploads land in storage.temp_dir before the upload collaborator moves them
to their final home. Whatever is left behind (aborted uploads, crashed requests) piles up
forever unless somebody sweeps it. This worker does exactly that, once an hour by default.

It has no data dependency on the catalog - it just deletes regular files in one folder.
Subdirectories are left alone.
"""

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TempFileCleanupWorker:
    """Worker that periodically deletes files from the temp upload directory.

    Lifecycle:
    - Created in lifecycle.py during app startup
    - Runs as asyncio task via start()
    - Stopped gracefully via stop() during shutdown
    """

    def __init__(self, temp_dir: Path, interval_seconds: int = 3600) -> None:
        """Initialize the worker.

        Args:
            temp_dir: Directory whose files are swept
            interval_seconds: Seconds between sweeps (default: 1 hour)
        """
        self._temp_dir = temp_dir
        self._interval = interval_seconds
        self._running = False
        self._stats: dict[str, Any] = {
            "total_files_deleted": 0,
            "files_deleted_last_sweep": 0,
            "last_sweep_at": None,
        }

    async def start(self) -> None:
        """Run sweeps until stop() is called."""
        self._running = True
        logger.info(
            "TempFileCleanupWorker started (dir=%s, interval=%ss)",
            self._temp_dir,
            self._interval,
        )

        while self._running:
            try:
                await self.sweep()
            except Exception as e:
                # Next cycle gets another chance.
                logger.exception("TempFileCleanupWorker error: %s", e)

            await asyncio.sleep(self._interval)

    def stop(self) -> None:
        """Signal the worker to stop."""
        self._running = False
        logger.info("TempFileCleanupWorker stopping...")

    async def sweep(self) -> int:
        """Delete regular files in the temp directory.

        Returns:
            Number of files deleted
        """
        deleted = await asyncio.to_thread(self._sweep_sync)

        self._stats["total_files_deleted"] += deleted
        self._stats["files_deleted_last_sweep"] = deleted
        self._stats["last_sweep_at"] = datetime.now(UTC)

        if deleted:
            logger.info("Removed %d temp files from %s", deleted, self._temp_dir)
        return deleted

    def _sweep_sync(self) -> int:
        if not self._temp_dir.is_dir():
            logger.debug("Temp dir %s does not exist, nothing to sweep", self._temp_dir)
            return 0

        deleted = 0
        for entry in self._temp_dir.iterdir():
            if not entry.is_file():
                continue
            try:
                entry.unlink()
                deleted += 1
            except OSError as e:
                # A file still being written on some platforms, or already gone.
                logger.warning("Could not delete temp file %s: %s", entry, e)
        return deleted

    def get_stats(self) -> dict[str, Any]:
        """Get worker statistics."""
        return {
            **self._stats,
            "running": self._running,
            "interval_seconds": self._interval,
            "temp_dir": str(self._temp_dir),
        }
