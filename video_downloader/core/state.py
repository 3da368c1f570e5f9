import time
from dataclasses import dataclass, field
from typing import Optional
from redis.asyncio import Redis

@dataclass
class RuntimeState:
    """Centralized runtime state"""
    redis: Optional[Redis] = None
    ytdlp_version: str = "unknown"
    started_at: float = field(default_factory=time.monotonic)

state = RuntimeState()
