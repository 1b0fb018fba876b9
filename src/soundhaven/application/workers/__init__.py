"""Background workers."""

from soundhaven.application.workers.temp_cleanup_worker import TempFileCleanupWorker

__all__ = ["TempFileCleanupWorker"]
