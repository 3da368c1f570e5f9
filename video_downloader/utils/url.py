from urllib.parse import urlparse
from video_downloader.config.settings import config

def safe_url_for_log(url: str) -> str:
    """Safe URL for logging"""
    try:
        parsed = urlparse(url)
        base_url = f"{parsed.scheme}://{parsed.netloc}{parsed.path}"

        if config.logging.level == "DEBUG" and parsed.query:
            return f"{base_url}?..."

        return base_url
    except (TypeError, ValueError, AttributeError):
        return "invalid_url"
