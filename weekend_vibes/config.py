# Config
"""
Configuration for the Weekend Vibes events proxy.

Values come from the environment (a local .env file is loaded first) and can be
overridden with keyword arguments, which is how tests build isolated settings.
"""

import os
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


def _split_methods(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    return [m.strip().upper() for m in value if m and m.strip()]


class Settings:
    # Logging
    log_level = "INFO"
    dev_mode = False
    log_file_path: Optional[Path] = None

    # Upstream (Gemini with Google Search grounding)
    upstream_api_key: Optional[str] = None
    gemini_model = "gemini-2.5-flash"
    enable_search_grounding = True
    upstream_timeout_ms: Optional[int] = None

    # Prompt
    timezone = "Asia/Taipei"
    search_range_end = "December 2026"

    # HTTP surface
    allowed_methods = ["GET", "OPTIONS"]
    host = "0.0.0.0"
    port = 8000

    def __init__(self, **overrides: Any) -> None:
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()
        self.dev_mode = _env_bool("DEV_MODE", self.dev_mode)
        log_file = os.getenv("LOG_FILE_PATH")
        self.log_file_path = Path(log_file) if log_file else None

        # GEMINI_API_KEY is still accepted for existing deployments
        self.upstream_api_key = os.getenv("UPSTREAM_API_KEY") or os.getenv("GEMINI_API_KEY")
        self.gemini_model = os.getenv("GEMINI_MODEL", self.gemini_model)
        self.enable_search_grounding = _env_bool(
            "ENABLE_SEARCH_GROUNDING", self.enable_search_grounding
        )
        self.upstream_timeout_ms = _env_int("UPSTREAM_TIMEOUT_MS")

        self.timezone = os.getenv("EVENTS_TIMEZONE", self.timezone)
        self.search_range_end = os.getenv("SEARCH_RANGE_END", self.search_range_end)

        self.allowed_methods = _split_methods(os.getenv("ALLOWED_METHODS", "GET,OPTIONS"))
        self.host = os.getenv("HOST", self.host)
        port = _env_int("PORT")
        self.port = self.port if port is None else port

        for key, value in overrides.items():
            if not hasattr(Settings, key):
                raise ValueError(f"Unknown setting: {key}")
            if key == "allowed_methods":
                value = _split_methods(value)
            elif key == "log_file_path" and value is not None:
                value = Path(value)
            setattr(self, key, value)

        self._validate()

    def _validate(self) -> None:
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.upstream_timeout_ms is not None and self.upstream_timeout_ms <= 0:
            raise ValueError("upstream_timeout_ms must be positive")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {self.timezone}")
        if not self.allowed_methods:
            raise ValueError("allowed_methods must not be empty")

    @property
    def has_upstream_credential(self) -> bool:
        return bool(self.upstream_api_key and self.upstream_api_key.strip())

    @property
    def allows_any_method(self) -> bool:
        return "*" in self.allowed_methods

    def get_log_file_path(self) -> Optional[Path]:
        if self.log_file_path:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        return self.log_file_path

    def __repr__(self) -> str:
        # the credential itself never appears in reprs or logs
        return (
            f"Settings(model={self.gemini_model!r}, timezone={self.timezone!r}, "
            f"allowed_methods={self.allowed_methods!r}, "
            f"credential={'set' if self.has_upstream_credential else 'missing'})"
        )


# Singleton instance
_settings = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
