import asyncio
import logging
import os
import time
import uuid
from contextlib import suppress
from typing import Optional

from video_downloader.config.settings import config

logger = logging.getLogger(__name__)


class ScratchSpace:
    """
    Shared directory for staged downloads.

    Every allocated path carries a uuid4 token, so concurrent jobs never
    collide and no locking is needed.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = root or config.download.scratch_dir

    def allocate(self, ext: str) -> str:
        os.makedirs(self.root, exist_ok=True)
        return os.path.join(self.root, f"video_{uuid.uuid4().hex}.{ext}")

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def size(self, path: str) -> int:
        return os.path.getsize(path)

    def delete(self, path: str) -> bool:
        """Remove a staged file. Failures are logged, never raised."""
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Error cleaning up {path}: {str(e)}")
            return False
        logger.debug(f"Cleaned up {path}")
        return True

    def sweep(self, max_age_seconds: float, now: Optional[float] = None) -> int:
        """Delete files older than max_age_seconds. Returns how many were removed."""
        if not os.path.isdir(self.root):
            return 0

        now = now if now is not None else time.time()
        removed = 0
        for entry in os.scandir(self.root):
            if not entry.is_file():
                continue
            try:
                age = now - entry.stat().st_mtime
            except FileNotFoundError:
                continue
            if age > max_age_seconds and self.delete(entry.path):
                removed += 1

        if removed:
            logger.info(f"Swept {removed} abandoned file(s) from {self.root}")
        return removed


async def run_sweeper(scratch: ScratchSpace, interval: float, max_age: float) -> None:
    """Periodically remove abandoned scratch files until cancelled"""
    while True:
        try:
            await asyncio.to_thread(scratch.sweep, max_age)
        except Exception:
            logger.exception("Scratch sweep failed")
        await asyncio.sleep(interval)


def start_sweeper(scratch: ScratchSpace) -> asyncio.Task:
    return asyncio.create_task(
        run_sweeper(
            scratch,
            interval=config.download.sweep_interval_seconds,
            max_age=config.download.scratch_max_age_seconds,
        )
    )


async def stop_sweeper(task: Optional[asyncio.Task]) -> None:
    if task is None:
        return
    task.cancel()
    with suppress(asyncio.CancelledError):
        await task
