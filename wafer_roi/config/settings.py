from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"
    stream_buffer_size: int = 256
    max_sessions: int = 1000
    session_idle_ttl_seconds: float = 3600.0

    class Config:
        env_file = ".env"
        env_prefix = "WAFER_ROI_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
