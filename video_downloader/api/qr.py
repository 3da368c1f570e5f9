from fastapi import APIRouter, Depends
from video_downloader.api.deps import get_link_encoder
from video_downloader.infra.rate_limit import rate_limiter
from video_downloader.models.request import QrRequest
from video_downloader.models.response import QrResponse
from video_downloader.services.qr import LinkEncoder

router = APIRouter()

@router.post("/qr", response_model=QrResponse, dependencies=[Depends(rate_limiter)])
async def generate_qr(qr_request: QrRequest, encoder: LinkEncoder = Depends(get_link_encoder)):
    """Generate a QR code data URI for a download link"""
    return QrResponse(qr_code=encoder.encode(qr_request.url))
