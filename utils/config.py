"""Configuration management for the patent dashboard.

AppConfig reads every setting from environment variables with a default,
so the dashboard runs out of the box next to its two CSV files.
"""

import os as _os
from typing import Any, Dict, Optional


class Config:
    """Base configuration class for organizing application settings."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary, overriding defaults.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance with values from dictionary
        """
        config = cls()
        for key, value in data.items():
            setattr(config, key, value)
        return config


def _optional_float(raw: str) -> Optional[float]:
    """Parse a timeout value; empty, "0" or "none" mean no timeout."""
    if raw.strip().lower() in ("", "0", "none"):
        return None
    return float(raw)


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    Environment variables:
        APP_PATENTS_SOURCE: Path or URL of patents.csv (default: patents.csv)
        APP_CODES_SOURCE: Path or URL of mpk_codes.csv (default: mpk_codes.csv)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_LOG_LEVEL: Root log level (default: INFO)
        APP_FETCH_TIMEOUT: Seconds to wait for URL sources; 0 = no limit (default: 30)
        APP_TOP_N: Rows in the top-authors and top-directions views (default: 10)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        super().__init__()
        self.patents_source = _os.getenv("APP_PATENTS_SOURCE", "patents.csv")
        self.codes_source = _os.getenv("APP_CODES_SOURCE", "mpk_codes.csv")
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        self.log_level = _os.getenv("APP_LOG_LEVEL", "INFO").upper()
        self.fetch_timeout = _optional_float(_os.getenv("APP_FETCH_TIMEOUT", "30"))
        self.top_n = int(_os.getenv("APP_TOP_N", "10"))
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
