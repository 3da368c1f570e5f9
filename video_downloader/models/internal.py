from pydantic import BaseModel
from typing import Optional

class DownloadJob(BaseModel):
    """Download job owned by a single request (separated from HTTP concerns)"""
    url: str
    quality: str = "best"
    format: str = "mp4"
    format_id: Optional[str] = None
    output_path: str
    format_selector: str

class DownloadedFile(BaseModel):
    """A materialized file ready for transfer"""
    path: str
    size: int
    download_name: str
    media_type: str
