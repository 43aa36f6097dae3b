"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Data source
    source_type: str = field(default_factory=lambda: os.getenv("SOURCE_TYPE", "mock"))
    registry_base_url: str = field(default_factory=lambda: os.getenv("REGISTRY_BASE_URL", ""))
    request_timeout: int = field(default_factory=lambda: int(os.getenv("REQUEST_TIMEOUT", "30")))
    max_retries: int = field(default_factory=lambda: int(os.getenv("MAX_RETRIES", "3")))

    # Mock source
    mock_seed: Optional[int] = field(default_factory=lambda: _optional_int("MOCK_SEED"))
    mock_latency_seconds: float = field(
        default_factory=lambda: float(os.getenv("MOCK_LATENCY_SECONDS", "0"))
    )

    # Reports
    reports_dir: str = field(default_factory=lambda: os.getenv("REPORTS_DIR", "./reports"))

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "source_type": self.source_type,
            "registry_base_url": self.registry_base_url,
            "request_timeout": self.request_timeout,
            "max_retries": self.max_retries,
            "mock_seed": self.mock_seed,
            "mock_latency_seconds": self.mock_latency_seconds,
            "reports_dir": self.reports_dir,
        }
