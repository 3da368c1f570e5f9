import re
from typing import Any, Dict, List, Optional
from video_downloader.config.settings import config
from video_downloader.models.response import QualityOption

BEST_OPTION = QualityOption(quality="best", format_id="best", ext="mp4")
AUDIO_OPTION = QualityOption(quality="audio", format_id="bestaudio", ext="mp3")

_HEIGHT_LABEL = re.compile(r"^(\d{2,4})p$")
_RESOLUTION = re.compile(r"^\s*\d+\s*x\s*(\d+)\s*$")

def resolve_height(fmt: Dict[str, Any]) -> Optional[int]:
    """Vertical resolution of a yt-dlp format entry, or None"""
    height = fmt.get("height")
    if isinstance(height, (int, float)) and not isinstance(height, bool) and height > 0:
        return int(height)

    resolution = fmt.get("resolution")
    if isinstance(resolution, str):
        match = _RESOLUTION.match(resolution)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return None

def _filesize(fmt: Dict[str, Any]) -> float:
    size = fmt.get("filesize")
    if isinstance(size, (int, float)) and not isinstance(size, bool):
        return size
    return 0

def build_quality_ladder(formats: Any) -> List[QualityOption]:
    """
    Build the quality ladder from yt-dlp's format list.

    One entry per distinct height (the largest file wins, ties go to the
    last seen), highest first, framed by the synthetic best and audio options.
    """
    if not isinstance(formats, list):
        return [BEST_OPTION, AUDIO_OPTION]

    by_height: Dict[int, Dict[str, Any]] = {}
    for fmt in formats:
        if not isinstance(fmt, dict):
            continue
        height = resolve_height(fmt)
        if height is None:
            continue
        current = by_height.get(height)
        if current is None or _filesize(fmt) >= _filesize(current):
            by_height[height] = fmt

    ladder = [
        QualityOption(
            quality=f"{height}p",
            format_id=str(by_height[height].get("format_id") or "best"),
            ext=by_height[height].get("ext") or "mp4",
        )
        for height in sorted(by_height, reverse=True)
    ]

    ladder.append(AUDIO_OPTION)
    ladder.insert(0, BEST_OPTION)
    return ladder

class FormatDecision:
    """Make format decisions"""

    @staticmethod
    def decide(quality: Optional[str], format_id: Optional[str] = None) -> str:
        """Decide the yt-dlp format selector for a download"""
        if quality == "audio":
            return config.ytdlp.audio_format

        if format_id:
            # Fall back to default if the format id is not offered
            return f"{format_id}/{config.ytdlp.default_format}"

        match = _HEIGHT_LABEL.match(quality or "")
        if match:
            return f"best[height<={match.group(1)}]/{config.ytdlp.default_format}"

        return config.ytdlp.default_format

MEDIA_TYPES = {
    'mp4': 'video/mp4',
    'webm': 'video/webm',
    'mkv': 'video/x-matroska',
    'mov': 'video/quicktime',
    'mp3': 'audio/mpeg',
    'm4a': 'audio/mp4',
    'opus': 'audio/ogg',
    'ogg': 'audio/ogg',
    'wav': 'audio/wav',
}

def media_type_for(ext: str) -> str:
    return MEDIA_TYPES.get(ext.lower(), 'application/octet-stream')
