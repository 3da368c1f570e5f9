import re
import unicodedata

_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')


def sanitize_filename(name: str, fallback: str = "video", max_length: int = 100) -> str:
    """Make a caller-facing download name safe for Content-Disposition and any OS"""
    name = unicodedata.normalize("NFKC", name or "")
    name = _UNSAFE.sub('_', name).strip(" .")
    return name[:max_length] or fallback
