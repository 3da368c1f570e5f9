from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class RedisConfig(BaseModel):
    url: Optional[str] = Field(default=None, description="Redis connection URL (rate limiting disabled when unset)")
    socket_timeout: int = Field(default=5, description="Redis socket timeout in seconds")

class RateLimitConfig(BaseModel):
    enabled: bool = Field(default=True, description="Enable rate limiting")
    max_requests: int = Field(default=100, ge=1, description="Max requests per window")
    window_seconds: int = Field(default=900, ge=1, description="Rate limit window in seconds")

class DownloadConfig(BaseModel):
    info_timeout_seconds: float = Field(default=30.0, gt=0, description="Metadata extraction timeout in seconds")
    timeout_seconds: float = Field(default=120.0, gt=0, description="Download timeout in seconds")
    scratch_dir: str = Field(default="/tmp/video_downloader", description="Directory for staged downloads")
    scratch_max_age_seconds: int = Field(default=3600, ge=1, description="Age after which abandoned files are swept")
    sweep_interval_seconds: int = Field(default=300, ge=1, description="Interval between scratch sweeps")
    chunk_size: int = Field(default=1024 * 1024, ge=1024, description="Transfer chunk size in bytes")

class YtDlpConfig(BaseModel):
    binary: str = Field(default="yt-dlp", description="Extraction tool executable")
    probe_timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout for the version probe")
    default_format: str = Field(default="best", description="Default format selector")
    audio_format: str = Field(default="bestaudio/best", description="Selector used for audio-only downloads")

class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @validator('level')
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

class DatabaseConfig(BaseModel):
    url: str = Field(default="sqlite:///./video_downloader.db", description="SQLAlchemy database URL")

class AuthConfig(BaseModel):
    jwt_secret: str = Field(default="change-me", description="Secret used to verify bearer tokens")
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")

class ApiConfig(BaseModel):
    title: str = Field(default="Video Downloader API", description="API title")
    description: str = Field(default="Metadata, downloads and QR codes for public video links", description="API description")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode")

class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VIDEO_DOWNLOADER_", env_nested_delimiter="__")

    redis: RedisConfig = Field(default_factory=RedisConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

config = Config()
