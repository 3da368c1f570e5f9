import logging
from video_downloader.core.exceptions import ToolProcessError
from video_downloader.core.state import state
from video_downloader.services.ytdlp import ExtractionTool

logger = logging.getLogger(__name__)

class ToolAvailabilityProbe:
    """Check that yt-dlp can be executed. Runs on every request that needs it."""

    def __init__(self, tool: ExtractionTool):
        self.tool = tool

    async def is_available(self) -> bool:
        try:
            version = await self.tool.version()
        except ToolProcessError as e:
            logger.warning(f"yt-dlp unavailable: {e.message}")
            return False
        except Exception as e:
            logger.warning(f"yt-dlp probe failed: {str(e)}")
            return False

        state.ytdlp_version = version or state.ytdlp_version
        logger.debug(f"yt-dlp available (version {state.ytdlp_version})")
        return True
