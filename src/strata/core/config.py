"""
Configuration management for Strata.

Uses pydantic-settings for environment variable binding.
All settings can be overridden via environment variables with STRATA_ prefix.
"""

import logging
import sys
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable binding."""

    model_config = SettingsConfigDict(
        env_prefix="STRATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================
    # Source (network)
    # ==========================================
    base_url: str = "https://jsonplaceholder.typicode.com"
    """Base address the default HTTP source is relative to."""

    http_timeout: float = 10.0
    """Seconds before an HTTP fetch is abandoned."""

    # ==========================================
    # Cache (filesystem)
    # ==========================================
    cache_dir: Path = Path.home() / ".cache" / "strata"
    """Root directory of the default disk cache."""

    # ==========================================
    # Observation
    # ==========================================
    log_sink_ref: str = "log"
    """Reference LoggingStore writes its entries under."""

    # ==========================================
    # Logging
    # ==========================================
    log_level: str = "INFO"
    log_file: Path | None = None

    def ensure_directories(self) -> None:
        """Create the cache directory if it doesn't exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    log_level = level or settings.log_level

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        handlers=handlers,
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(f"strata.{name}")
