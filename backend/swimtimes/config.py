"""
Application settings (Pydantic Settings).
"""
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

# .env next to backend/ (parent of swimtimes/)
_backend_dir = Path(__file__).resolve().parent.parent
_env_path = _backend_dir / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./swimtimes.db"
    # ActiveInTime: ACTIVEINTIME_API_KEY in .env (read once at process start)
    activeintime_api_key: str = ""
    activeintime_base_url: str = "https://api.activeintime.com/v1"
    # Upstream rejects default client identifiers
    activeintime_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122 Safari/537.36"
    )
    cache_dir: Path = _backend_dir / "data" / "cache"
    # SITE_IDS in .env: comma-separated upstream site ids, ingested in this order
    site_ids: Annotated[list[int], NoDecode] = []
    default_timezone: str = "Europe/London"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("activeintime_api_key", mode="after")
    @classmethod
    def strip_key(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("site_ids", mode="before")
    @classmethod
    def parse_site_ids(cls, v):
        if isinstance(v, str):
            return [int(s) for s in v.split(",") if s.strip()]
        if isinstance(v, int):
            return [v]
        return v


settings = Settings()
