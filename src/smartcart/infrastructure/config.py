"""Runtime configuration, read from the environment.

A ``.env`` file in the working directory is loaded first, so local
credentials can live outside the shell profile.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_TIMEOUT = 10.0


def _env(*names: str, default: str = "") -> str:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value.strip()
    return default


def _as_bool(raw: str) -> bool:
    return raw.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Service credentials plus the knobs the CLI exposes."""

    supabase_url: str = ""
    supabase_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url) and bool(self.supabase_key)

    @property
    def rest_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @staticmethod
    def from_env(dotenv: bool = True) -> Settings:
        if dotenv:
            load_dotenv()
        try:
            timeout = float(_env("SMARTCART_TIMEOUT", default=str(DEFAULT_TIMEOUT)))
        except ValueError:
            timeout = DEFAULT_TIMEOUT
        return Settings(
            supabase_url=_env("SMARTCART_SUPABASE_URL", "SUPABASE_URL"),
            supabase_key=_env("SMARTCART_SUPABASE_KEY", "SUPABASE_KEY"),
            timeout=timeout,
            log_level=_env("SMARTCART_LOG_LEVEL", default="INFO").upper(),
            log_json=_as_bool(_env("SMARTCART_LOG_JSON", default="false")),
        )
