from fastapi import APIRouter, Request, Depends
from video_downloader.api.deps import get_extractor
from video_downloader.core.exceptions import VideoDownloaderError
from video_downloader.core.logging import log_info, log_error
from video_downloader.infra.rate_limit import rate_limiter
from video_downloader.models.request import InfoRequest
from video_downloader.models.response import VideoMetadata
from video_downloader.services.info import MetadataExtractor
from video_downloader.utils.url import safe_url_for_log

router = APIRouter()

@router.post("/info", response_model=VideoMetadata, dependencies=[Depends(rate_limiter)])
async def get_video_info(
    request: Request,
    info_request: InfoRequest,
    extractor: MetadataExtractor = Depends(get_extractor),
):
    """Get normalized video information and the quality ladder"""
    log_info(request, f"Info request for {safe_url_for_log(info_request.url or '')}")

    try:
        return await extractor.extract(info_request.url)
    except VideoDownloaderError as e:
        log_error(request, f"Error getting video info: {e.error or e.message}")
        raise
