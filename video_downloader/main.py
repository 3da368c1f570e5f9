import logging
from typing import Optional
import asyncio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from video_downloader.api import batch, download, health, info, qr, videos
from video_downloader.api.deps import scratch_space
from video_downloader.config.settings import config
from video_downloader.core.exceptions import VideoDownloaderError
from video_downloader.core.logging import setup_logging
from video_downloader.core.middleware import RequestIDMiddleware
from video_downloader.infra.database import init_db
from video_downloader.infra.redis import init_redis, close_redis
from video_downloader.services.scratch import start_sweeper, stop_sweeper

setup_logging()
logger = logging.getLogger("video_downloader")

app = FastAPI(
    title=config.api.title,
    description=config.api.description,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestIDMiddleware)

# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(info.router, prefix="/api/download", tags=["Download"])
app.include_router(download.router, prefix="/api/download", tags=["Download"])
app.include_router(qr.router, prefix="/api/download", tags=["Download"])
app.include_router(batch.router, prefix="/api/download", tags=["Download"])
app.include_router(videos.router, prefix="/api/videos", tags=["Videos"])

@app.exception_handler(VideoDownloaderError)
async def video_downloader_error_handler(request: Request, exc: VideoDownloaderError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": "Invalid request body", "error": errors})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "path": request.url.path, "method": request.method},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if config.api.debug else "Something went wrong",
        },
    )

sweeper_task: Optional[asyncio.Task] = None

@app.on_event("startup")
async def startup_event():
    global sweeper_task
    init_db()
    await init_redis()
    sweeper_task = start_sweeper(scratch_space)

@app.on_event("shutdown")
async def shutdown_event():
    await stop_sweeper(sweeper_task)
    await close_redis()
