"""Configuration management with Pydantic Settings and YAML loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Sub-config models ---


class SystemConfig(BaseModel):
    """Top-level system settings."""

    log_level: str = "INFO"
    json_logs: bool = False


class DiscordConfig(BaseModel):
    """Discord gateway settings.

    A guild_id of 0 publishes the commands globally, which can take up to an
    hour to show up in clients. A non-zero id syncs to that guild only.
    """

    bot_token: str = ""
    guild_id: int = 0
    logo_path: str = "media/kaspa_logo.png"


class CommandsConfig(BaseModel):
    """Command behaviour settings."""

    cooldown_minutes: float = 15.0
    cooldown_commands: list[str] = Field(
        default_factory=lambda: ["kexchanges", "kcoingecko"]
    )
    exchange_limit: int = 9

    @property
    def cooldown_seconds(self) -> float:
        """Cooldown window in seconds."""
        return self.cooldown_minutes * 60.0


class ProvidersConfig(BaseModel):
    """Upstream HTTP data provider settings."""

    kaspa_api_url: str = "https://api.kaspa.org/"
    coingecko_api_url: str = "https://api.coingecko.com/api/v3/"
    coingecko_coin_id: str = "kaspa"
    coingecko_target_coin_id: str = "tether"
    request_timeout_s: float = 10.0
    user_agent: str = "kaspabot/0.1"


class HealthConfig(BaseModel):
    """Auxiliary HTTP listener settings (health check and metrics)."""

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 3000


# --- Main config ---


class AppConfig(BaseSettings):
    """Application configuration.

    Loads from YAML file, with environment variable overrides.
    """

    model_config = SettingsConfigDict(
        env_prefix="KASPABOT_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override YAML (init) values."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    system: SystemConfig = Field(default_factory=SystemConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    health: HealthConfig = Field(default_factory=HealthConfig)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries. Override values take precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _legacy_env_overrides() -> dict[str, Any]:
    """Pick up the plain DISCORD_BOT_TOKEN / PORT variables hosts usually set."""
    overrides: dict[str, Any] = {}
    token = os.environ.get("DISCORD_BOT_TOKEN")
    if token:
        overrides["discord"] = {"bot_token": token}
    port = os.environ.get("PORT")
    if port and port.isdigit():
        overrides["health"] = {"port": int(port)}
    return overrides


def load_config(
    config_dir: str | Path = "configs",
    config_file: str = "default.yaml",
) -> AppConfig:
    """Load application configuration from YAML with env var overrides.

    Precedence, highest first: ``KASPABOT_*`` variables, the plain
    ``DISCORD_BOT_TOKEN``/``PORT`` variables, the YAML file, defaults.

    Args:
        config_dir: Path to the configuration directory.
        config_file: Name of the main config YAML file.

    Returns:
        Validated AppConfig instance.
    """
    main_config_path = Path(config_dir) / config_file
    raw: dict[str, Any] = {}
    if main_config_path.exists():
        raw = _load_yaml(main_config_path)

    raw = _deep_merge(raw, _legacy_env_overrides())

    # Pydantic Settings will automatically apply env var overrides
    return AppConfig(**raw)
