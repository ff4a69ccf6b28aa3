"""Core configuration.

- Centralises environment variables (pydantic-settings) away from the CLI.
- Adapters (HTTP) and the CLI read the same `AppSettings` contract.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies).

    Lets an installed `apiclient` pick up settings without a `.env` in the
    working directory.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "apiclient"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "apiclient"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "apiclient"
    return Path.home() / ".config" / "apiclient"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Application settings, read from `APICLIENT_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APICLIENT_",
        extra="ignore",
        case_sensitive=False,
        # Project first, then the per-user file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=12.0,
        gt=0,
        description="Upper bound for one request, measured from dispatch (seconds).",
    )
    user_agent: str = Field(
        default="apiclient/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Let the transport follow redirects (default transport behaviour).",
    )

    debug: bool = Field(
        default=False,
        description="Verbose (DEBUG) logging.",
    )
    log_json: bool = Field(
        default=True,
        description="Emit log records as one JSON object per line.",
    )
