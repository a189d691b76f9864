"""Process-wide configuration read from the environment.

Values are read once and cached. Tests that tweak the environment call
``get_settings.cache_clear()`` afterwards.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

DEFAULT_PROVIDER = "google"
DEFAULT_CORS_ORIGINS = "http://localhost:8501,http://localhost:3000"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    insight_provider: str = DEFAULT_PROVIDER
    insight_model: str = ""
    insight_temperature: float = 0.7
    insight_max_tokens: int = 400
    log_level: str = "INFO"
    cors_origins: str = DEFAULT_CORS_ORIGINS

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            insight_provider=os.environ.get("INSIGHT_PROVIDER", DEFAULT_PROVIDER).strip().lower(),
            insight_model=os.environ.get("INSIGHT_MODEL", "").strip(),
            insight_temperature=float(os.environ.get("INSIGHT_TEMPERATURE", "0.7")),
            insight_max_tokens=int(os.environ.get("INSIGHT_MAX_TOKENS", "400")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            cors_origins=os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str = "") -> None:
    """Apply the root logging format used by every entrypoint."""
    logging.basicConfig(
        level=(level or get_settings().log_level),
        format=LOG_FORMAT,
    )
