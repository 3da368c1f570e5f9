from typing import Any, Dict, Optional


class VideoDownloaderError(Exception):
    """Base error translated to a JSON body at the request boundary"""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        self.message = message
        self.error = error
        super().__init__(message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class InvalidRequest(VideoDownloaderError):
    """Missing or malformed input"""
    status_code = 400


class Unauthorized(VideoDownloaderError):
    status_code = 401

    def __init__(self, message: str = "Please authenticate"):
        super().__init__(message)


class ToolUnavailable(VideoDownloaderError):
    """yt-dlp is missing or broken"""

    def __init__(self, message: str = "yt-dlp is not installed. Please install it to use this service."):
        super().__init__(message, error="yt-dlp unavailable")

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["installInstructions"] = "Install yt-dlp: pip install yt-dlp or brew install yt-dlp"
        return body


class ExtractionFailed(VideoDownloaderError):
    """yt-dlp ran but metadata could not be obtained"""

    def __init__(self, error: str, timed_out: bool = False,
                 message: str = "Failed to get video information"):
        super().__init__(message, error=error)
        self.timed_out = timed_out

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["timedOut"] = self.timed_out
        return body


class DownloadFailed(VideoDownloaderError):
    """yt-dlp ran but no file could be materialized"""

    def __init__(self, error: str, timed_out: bool = False,
                 message: str = "Failed to download video"):
        super().__init__(message, error=error)
        self.timed_out = timed_out

    @property
    def hint(self) -> str:
        if self.timed_out:
            return "The download exceeded the time limit. Try a lower quality or a shorter video."
        return "The video may be private, region-locked or unsupported."

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["timedOut"] = self.timed_out
        body["hint"] = self.hint
        return body


class EncodingFailed(VideoDownloaderError):
    """QR code generation failed"""

    def __init__(self, error: str):
        super().__init__("Failed to generate QR code", error=error)


class PersistenceFailed(VideoDownloaderError):
    """History store error"""

    def __init__(self, error: str, message: str = "Failed to access video history"):
        super().__init__(message, error=error)


class ToolProcessError(Exception):
    """Raised by the yt-dlp adapter when the child process fails or times out"""

    def __init__(self, message: str, returncode: Optional[int] = None, timed_out: bool = False):
        self.message = message
        self.returncode = returncode
        self.timed_out = timed_out
        super().__init__(message)
