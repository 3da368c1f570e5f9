from .internal import DownloadJob, DownloadedFile
from .request import BatchRequest, DownloadRequest, InfoRequest, QrRequest, SaveVideoRequest
from .response import BatchResult, QualityOption, VideoMetadata

__all__ = [
    "BatchRequest", "BatchResult", "DownloadJob", "DownloadRequest", "DownloadedFile",
    "InfoRequest", "QrRequest", "QualityOption", "SaveVideoRequest", "VideoMetadata",
]
