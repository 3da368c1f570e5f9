from pydantic import BaseModel, Field
from typing import Any, Optional

class InfoRequest(BaseModel):
    url: Optional[str] = Field(None, description="Video URL")

class DownloadRequest(InfoRequest):
    quality: str = Field("best", description='"best", "audio" or "<height>p"')
    format: str = Field("mp4", description="Output container extension (e.g. mp4, webm, mp3)")
    format_id: Optional[str] = Field(None, description="Specific yt-dlp format id from the quality ladder")

class QrRequest(BaseModel):
    url: Optional[str] = Field(None, description="Text to encode")

class BatchRequest(BaseModel):
    # Shape is validated by the batch coordinator so malformed input maps to 400
    urls: Optional[Any] = Field(None, description="List of video URLs")

class SaveVideoRequest(BaseModel):
    url: Optional[str] = None
    title: Optional[str] = None
    thumbnail: Optional[str] = None
    platform: Optional[str] = None
    quality: Optional[str] = None
    format: Optional[str] = None
