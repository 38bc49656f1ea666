"""Configuration management for payroll-kata."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    host: str
    port: int
    debug: bool
    log_level: str
    quiet: bool
    chronograph: bool
    fail_open: bool
    prelude: str | None

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            host=os.getenv("PAYROLL_HOST", "127.0.0.1"),
            port=int(os.getenv("PAYROLL_PORT", "3000")),
            debug=_flag("PAYROLL_DEBUG"),
            log_level=os.getenv("PAYROLL_LOG_LEVEL", "WARNING").upper(),
            quiet=_flag("PAYROLL_QUIET"),
            chronograph=_flag("PAYROLL_CHRONOGRAPH"),
            fail_open=_flag("PAYROLL_FAIL_OPEN"),
            prelude=os.getenv("PAYROLL_PRELUDE") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
