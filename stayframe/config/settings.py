"""
Settings
========

Environment-driven configuration for the StayFrame editor service.
"""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime configuration."""
    sessions_dir: Optional[Path] = None
    unsplash_access_key: Optional[str] = None
    unsplash_api_url: str = "https://api.unsplash.com"
    image_search_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        sessions_dir = os.getenv("STAYFRAME_SESSIONS_DIR")
        origins = os.getenv("STAYFRAME_CORS_ORIGINS", "*")
        return cls(
            sessions_dir=Path(sessions_dir) if sessions_dir else None,
            unsplash_access_key=os.getenv("UNSPLASH_ACCESS_KEY") or None,
            unsplash_api_url=os.getenv("UNSPLASH_API_URL", "https://api.unsplash.com"),
            image_search_timeout=float(os.getenv("IMAGE_SEARCH_TIMEOUT", "10")),
            log_level=os.getenv("STAYFRAME_LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
