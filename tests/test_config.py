from __future__ import annotations

from pathlib import Path

import pytest

from roulette.config import BotConfig
from roulette.constants import DEFAULT_POKEAPI_URL

_VARIABLES = (
    "DISCORD_TOKEN",
    "POKEAPI_URL",
    "PROVIDER_TIMEOUT",
    "VIEW_TIMEOUT",
    "EVOLUTIONS_PATH",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARIABLES:
        monkeypatch.delenv(name, raising=False)


def test_token_is_required() -> None:
    with pytest.raises(RuntimeError, match="DISCORD_TOKEN"):
        BotConfig.from_env()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "secret")

    config = BotConfig.from_env()

    assert config.token == "secret"
    assert config.pokeapi_url == DEFAULT_POKEAPI_URL
    assert config.provider_timeout == 10.0
    assert config.view_timeout == 900.0
    assert config.evolutions_path is None
    assert config.log_level == "INFO"


def test_overrides_are_clamped(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "secret")
    monkeypatch.setenv("POKEAPI_URL", "http://localhost:8000/api/v2/pokemon")
    monkeypatch.setenv("PROVIDER_TIMEOUT", "0.1")
    monkeypatch.setenv("VIEW_TIMEOUT", "0")
    monkeypatch.setenv("EVOLUTIONS_PATH", str(tmp_path / "evolutions.toml"))
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = BotConfig.from_env()

    assert config.pokeapi_url == "http://localhost:8000/api/v2/pokemon"
    assert config.provider_timeout == 1.0
    assert config.view_timeout == 1.0
    assert config.evolutions_path == tmp_path / "evolutions.toml"
    assert config.log_level == "DEBUG"
