from fastapi import APIRouter, Request, Depends
from video_downloader.api.deps import get_batch_coordinator
from video_downloader.core.logging import log_info
from video_downloader.infra.rate_limit import rate_limiter
from video_downloader.models.request import BatchRequest
from video_downloader.models.response import BatchResponse
from video_downloader.services.batch import BatchCoordinator

router = APIRouter()

@router.post("/batch", response_model=BatchResponse, dependencies=[Depends(rate_limiter)])
async def batch_info(
    request: Request,
    batch_request: BatchRequest,
    coordinator: BatchCoordinator = Depends(get_batch_coordinator),
):
    """Fetch title and thumbnail for several URLs, one at a time"""
    count = len(batch_request.urls) if isinstance(batch_request.urls, list) else 0
    log_info(request, f"Batch request for {count} URL(s)")
    return BatchResponse(results=await coordinator.batch(batch_request.urls))
