import time
from fastapi import APIRouter

from video_downloader.config.settings import config
from video_downloader.core.state import state

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Video Downloader API is running successfully!",
        "status": "ok",
        "version": config.api.version,
        "endpoints": {
            "download": "/api/download (POST /info, POST /video, POST /qr, POST /batch)",
            "videos": "/api/videos (GET /history, POST /save, DELETE /:id)"
        }
    }


@router.get("/health")
async def health_check():
    """Lightweight health check"""
    redis_status = "disabled"
    if state.redis:
        try:
            await state.redis.ping()
            redis_status = "connected"
        except Exception:
            redis_status = "disconnected"

    return {
        "status": "healthy",
        "redis": redis_status,
        "ytdlp_version": state.ytdlp_version,
        "uptime": round(time.monotonic() - state.started_at, 3)
    }
