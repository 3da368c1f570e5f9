import logging
from typing import Any, Dict
from video_downloader.config.settings import config
from video_downloader.core.exceptions import (
    ExtractionFailed,
    InvalidRequest,
    ToolProcessError,
    ToolUnavailable,
)
from video_downloader.models.response import VideoMetadata
from video_downloader.services.format import build_quality_ladder
from video_downloader.services.platform import detect_platform
from video_downloader.services.probe import ToolAvailabilityProbe
from video_downloader.services.ytdlp import ExtractionTool
from video_downloader.utils.url import safe_url_for_log

logger = logging.getLogger(__name__)

def pick_thumbnail(info: Dict[str, Any]) -> str:
    """Primary thumbnail, else the first of the thumbnails list"""
    thumbnail = info.get("thumbnail")
    if isinstance(thumbnail, str) and thumbnail:
        return thumbnail

    thumbnails = info.get("thumbnails")
    if isinstance(thumbnails, list) and thumbnails:
        first = thumbnails[0]
        if isinstance(first, dict):
            return str(first.get("url") or "")
        if isinstance(first, str):
            return first
    return ""

def pick_duration(info: Dict[str, Any]) -> float:
    duration = info.get("duration")
    if isinstance(duration, (int, float)) and not isinstance(duration, bool) and duration > 0:
        return duration
    return 0

def normalize_metadata(url: str, info: Dict[str, Any]) -> VideoMetadata:
    """Turn a raw yt-dlp document into the stable response shape"""
    title = info.get("title")
    return VideoMetadata(
        title=title if isinstance(title, str) and title else "Untitled",
        thumbnail=pick_thumbnail(info),
        duration=pick_duration(info),
        platform=detect_platform(url),
        available_qualities=build_quality_ladder(info.get("formats")),
    )

class MetadataExtractor:
    """Video info fetching service"""

    def __init__(self, tool: ExtractionTool, probe: ToolAvailabilityProbe):
        self.tool = tool
        self.probe = probe

    async def extract(self, url: str) -> VideoMetadata:
        """Validate, probe, then fetch metadata for a single URL"""
        if not url:
            raise InvalidRequest("URL is required")

        if not await self.probe.is_available():
            raise ToolUnavailable()

        return await self.fetch(url)

    async def fetch(self, url: str) -> VideoMetadata:
        """
        Run yt-dlp in metadata mode without probing first.
        The caller is responsible for the availability check.
        """
        timeout = config.download.info_timeout_seconds
        logger.info(f"Fetching info for {safe_url_for_log(url)}")

        try:
            info = await self.tool.dump_metadata(url, timeout=timeout)
        except ToolProcessError as e:
            logger.error(f"Info extraction failed for {safe_url_for_log(url)}: {e.message}")
            raise ExtractionFailed(e.message, timed_out=e.timed_out)

        metadata = normalize_metadata(url, info)
        logger.info(f"Info retrieved: {metadata.title}")
        return metadata
