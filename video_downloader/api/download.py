from fastapi import APIRouter, Request, Depends
from fastapi.responses import StreamingResponse
from video_downloader.api.deps import get_orchestrator
from video_downloader.core.exceptions import VideoDownloaderError
from video_downloader.core.logging import log_info, log_error
from video_downloader.infra.rate_limit import rate_limiter
from video_downloader.models.request import DownloadRequest
from video_downloader.services.download import DownloadOrchestrator
from video_downloader.utils.url import safe_url_for_log

router = APIRouter()

@router.post("/video", dependencies=[Depends(rate_limiter)])
async def download_video(
    request: Request,
    download_request: DownloadRequest,
    orchestrator: DownloadOrchestrator = Depends(get_orchestrator),
):
    """Download a video to the scratch space, then stream it to the caller"""
    safe_url = safe_url_for_log(download_request.url or "")
    log_info(request, f"Download request for {safe_url} (quality={download_request.quality}, format={download_request.format})")

    try:
        downloaded = await orchestrator.materialize(
            download_request.url,
            quality=download_request.quality,
            file_format=download_request.format,
            format_id=download_request.format_id,
        )
    except VideoDownloaderError as e:
        log_error(request, f"Error downloading video: {e.error or e.message}")
        raise

    safe_filename = downloaded.download_name.replace('"', '\\"')
    headers = {
        'Content-Disposition': f'attachment; filename="{safe_filename}"',
        'X-Content-Type-Options': 'nosniff',
        'Cache-Control': 'no-cache',
        'Content-Length': str(downloaded.size),
    }

    return StreamingResponse(
        orchestrator.stream_file(downloaded),
        media_type=downloaded.media_type,
        headers=headers
    )
