import asyncio
import logging
import re
from typing import AsyncIterator, Optional

import aiofiles

from video_downloader.config.settings import config
from video_downloader.core.exceptions import (
    DownloadFailed,
    InvalidRequest,
    ToolProcessError,
    ToolUnavailable,
)
from video_downloader.models.internal import DownloadedFile, DownloadJob
from video_downloader.services.format import FormatDecision, media_type_for
from video_downloader.services.probe import ToolAvailabilityProbe
from video_downloader.services.scratch import ScratchSpace
from video_downloader.services.ytdlp import ExtractionTool
from video_downloader.utils.filename import sanitize_filename
from video_downloader.utils.url import safe_url_for_log

logger = logging.getLogger(__name__)

_VALID_EXT = re.compile(r"^[A-Za-z0-9]{1,10}$")


class DownloadOrchestrator:
    """Materialize a video into the scratch space and hand it to the transport"""

    def __init__(self, tool: ExtractionTool, probe: ToolAvailabilityProbe, scratch: ScratchSpace):
        self.tool = tool
        self.probe = probe
        self.scratch = scratch

    def prepare(self, url: str, quality: Optional[str], file_format: Optional[str],
                format_id: Optional[str] = None) -> DownloadJob:
        """Validate input and build the job for this request"""
        if not url:
            raise InvalidRequest("URL is required")

        quality = quality or "best"
        file_format = file_format or "mp4"
        if not _VALID_EXT.match(file_format):
            raise InvalidRequest("Invalid format", error=f"Unsupported format: {file_format[:20]}")

        return DownloadJob(
            url=url,
            quality=quality,
            format=file_format.lower(),
            format_id=format_id or None,
            output_path=self.scratch.allocate(file_format.lower()),
            format_selector=FormatDecision.decide(quality, format_id),
        )

    async def materialize(self, url: str, quality: Optional[str] = "best",
                          file_format: Optional[str] = "mp4",
                          format_id: Optional[str] = None) -> DownloadedFile:
        """
        Download to a scratch file and verify it exists.

        On any failure the partial file is removed before the error surfaces.
        On success the caller owns the file and must release it, normally
        through stream_file().
        """
        job = self.prepare(url, quality, file_format, format_id)

        if not await self.probe.is_available():
            raise ToolUnavailable("yt-dlp is not installed. Please install it first.")

        safe_url = safe_url_for_log(job.url)
        logger.info(f"Format decided: {job.format_selector} for {safe_url}")
        logger.info(f"Starting download to {job.output_path}")

        try:
            await self.tool.materialize(
                job.url,
                job.format_selector,
                job.output_path,
                timeout=config.download.timeout_seconds,
            )
        except ToolProcessError as e:
            logger.error(f"Download failed for {safe_url}: {e.message}")
            self.scratch.delete(job.output_path)
            raise DownloadFailed(e.message, timed_out=e.timed_out)
        except asyncio.CancelledError:
            self.scratch.delete(job.output_path)
            raise

        if not self.scratch.exists(job.output_path):
            raise DownloadFailed("file not found", message="Download failed - file not found")

        file_size = self.scratch.size(job.output_path)
        logger.info(f"Download finished. Streaming {file_size / 1024 / 1024:.1f} MB")

        return DownloadedFile(
            path=job.output_path,
            size=file_size,
            download_name=sanitize_filename(f"video.{job.format}"),
            media_type=media_type_for(job.format),
        )

    async def stream_file(self, downloaded: DownloadedFile,
                          chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
        """Yield the file in chunks, deleting it once the transfer ends either way"""
        chunk_size = chunk_size or config.download.chunk_size
        try:
            async with aiofiles.open(downloaded.path, 'rb') as f:
                while True:
                    chunk = await f.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
        except OSError as e:
            logger.error(f"Error sending file: {str(e)}")
            raise
        finally:
            self.scratch.delete(downloaded.path)
