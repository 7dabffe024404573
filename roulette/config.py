"""Bot configuration utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .constants import DEFAULT_POKEAPI_URL


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


@dataclass(slots=True)
class BotConfig:
    token: str
    pokeapi_url: str = DEFAULT_POKEAPI_URL
    provider_timeout: float = 10.0
    view_timeout: float = 900.0
    evolutions_path: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BotConfig":
        token = env("DISCORD_TOKEN")
        pokeapi_url = os.getenv("POKEAPI_URL", DEFAULT_POKEAPI_URL).strip()
        provider_timeout = float(os.getenv("PROVIDER_TIMEOUT", "10"))
        view_timeout = float(os.getenv("VIEW_TIMEOUT", "900"))
        raw_evolutions = os.getenv("EVOLUTIONS_PATH", "").strip()
        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

        provider_timeout = max(1.0, provider_timeout)
        view_timeout = max(provider_timeout, view_timeout)
        evolutions_path = Path(raw_evolutions).expanduser() if raw_evolutions else None

        return cls(
            token=token,
            pokeapi_url=pokeapi_url or DEFAULT_POKEAPI_URL,
            provider_timeout=provider_timeout,
            view_timeout=view_timeout,
            evolutions_path=evolutions_path,
            log_level=log_level,
        )


__all__ = ["BotConfig"]
