import logging
from typing import Any, List
from video_downloader.core.exceptions import InvalidRequest, ToolUnavailable, VideoDownloaderError
from video_downloader.models.response import BatchResult
from video_downloader.services.info import MetadataExtractor
from video_downloader.services.probe import ToolAvailabilityProbe

logger = logging.getLogger(__name__)

class BatchCoordinator:
    """Sequential metadata lookups with per-URL failure isolation"""

    def __init__(self, extractor: MetadataExtractor, probe: ToolAvailabilityProbe):
        self.extractor = extractor
        self.probe = probe

    async def batch(self, urls: Any) -> List[BatchResult]:
        if not urls or not isinstance(urls, list):
            raise InvalidRequest("URLs array is required")

        if not await self.probe.is_available():
            raise ToolUnavailable("yt-dlp is not installed")

        results: List[BatchResult] = []
        for url in urls:
            results.append(await self._lookup(url))

        succeeded = sum(1 for r in results if r.success)
        logger.info(f"Batch finished: {succeeded}/{len(results)} succeeded")
        return results

    async def _lookup(self, url: Any) -> BatchResult:
        if not isinstance(url, str) or not url:
            return BatchResult(url=str(url), success=False, error="URL must be a non-empty string")

        try:
            metadata = await self.extractor.fetch(url)
        except VideoDownloaderError as e:
            return BatchResult(url=url, success=False, error=e.error or e.message)
        except Exception as e:
            logger.exception(f"Unexpected batch failure for {url}")
            return BatchResult(url=url, success=False, error=str(e))

        return BatchResult(
            url=url,
            success=True,
            title=metadata.title,
            thumbnail=metadata.thumbnail,
        )
