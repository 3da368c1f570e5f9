from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from video_downloader.services.platform import Platform


class QualityOption(BaseModel):
    """One rung of the quality ladder"""
    quality: str
    format_id: str
    ext: str


class VideoMetadata(BaseModel):
    """Normalized video information response"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = "Untitled"
    thumbnail: str = ""
    duration: float = 0
    platform: Platform = Platform.UNKNOWN
    available_qualities: List[QualityOption] = Field(default_factory=list, alias="availableQualities")


class BatchResult(BaseModel):
    url: str
    success: bool
    title: Optional[str] = None
    thumbnail: Optional[str] = None
    error: Optional[str] = None


class BatchResponse(BaseModel):
    results: List[BatchResult]


class QrResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    qr_code: str = Field(alias="qrCode")


class SavedVideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: Optional[str] = None
    title: Optional[str] = None
    thumbnail: Optional[str] = None
    platform: Optional[str] = None
    quality: Optional[str] = None
    format: Optional[str] = None
    created_at: Optional[datetime] = None


class HistoryResponse(BaseModel):
    videos: List[SavedVideoOut]


class SaveVideoResponse(BaseModel):
    message: str
    video: SavedVideoOut


class MessageResponse(BaseModel):
    message: str
