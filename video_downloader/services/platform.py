from enum import Enum
from typing import Tuple

class Platform(str, Enum):
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    VIMEO = "vimeo"
    DAILYMOTION = "dailymotion"
    PINTEREST = "pinterest"
    LINKEDIN = "linkedin"
    REDDIT = "reddit"
    SNAPCHAT = "snapchat"
    UNKNOWN = "unknown"

# Ordered: first match wins
PLATFORM_PATTERNS: Tuple[Tuple[Tuple[str, ...], Platform], ...] = (
    (("youtube.com", "youtu.be"), Platform.YOUTUBE),
    (("tiktok.com",), Platform.TIKTOK),
    (("instagram.com",), Platform.INSTAGRAM),
    (("facebook.com",), Platform.FACEBOOK),
    (("twitter.com", "x.com"), Platform.TWITTER),
    (("vimeo.com",), Platform.VIMEO),
    (("dailymotion.com",), Platform.DAILYMOTION),
    (("pinterest.com",), Platform.PINTEREST),
    (("linkedin.com",), Platform.LINKEDIN),
    (("reddit.com",), Platform.REDDIT),
    (("snapchat.com",), Platform.SNAPCHAT),
)

def detect_platform(url: str) -> Platform:
    """Map a URL to its platform by substring matching"""
    lowered = (url or "").lower()
    for needles, platform in PLATFORM_PATTERNS:
        if any(needle in lowered for needle in needles):
            return platform
    return Platform.UNKNOWN
