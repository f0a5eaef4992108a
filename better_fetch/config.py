"""Centralised settings for Better Fetch.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_BROWSER_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("USER_AGENT", _BROWSER_UA)
    )

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    server_host: str = field(
        default_factory=lambda: os.environ.get("SERVER_HOST", "127.0.0.1")
    )
    server_port: int = field(
        default_factory=lambda: int(os.environ.get("SERVER_PORT", "8787"))
    )
    mcp_transport: str = field(
        default_factory=lambda: os.environ.get("MCP_TRANSPORT", "stdio")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    fetch_log: bool = field(default_factory=lambda: _env_flag("FETCH_LOG", "1"))


# Module-level singleton — import this everywhere:
#   from better_fetch.config import settings
settings = Settings()
