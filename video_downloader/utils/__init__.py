from .filename import sanitize_filename
from .url import safe_url_for_log

__all__ = ["safe_url_for_log", "sanitize_filename"]
