"""Configuration models and loading."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "reencrypt-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_TARGET_URL = (
    "https://gist.githubusercontent.com/mattes/23e64faadb5fd4b5112f379903d2572e"
    "/raw/ddbf0a56001367467f71bda64347aa881d83533c/example.json"
)

# (section, field) overridden by each environment variable
ENV_OVERRIDES = {
    "PROXY_HOST": ("proxy", "host"),
    "PROXY_PORT": ("proxy", "port"),
    "PROXY_LOG_LEVEL": ("proxy", "log_level"),
    "PROXY_DASHBOARD": ("proxy", "dashboard"),
    "PROXY_ADDRESS": ("client", "proxy_address"),
    "TARGET_URL": ("client", "target_url"),
}


class ProxySettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    dashboard: bool = True


class ClientSettings(BaseModel):
    proxy_address: str = "http://localhost:3000"
    target_url: str = DEFAULT_TARGET_URL


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


def load_config(
    config_file: Path = CONFIG_FILE,
    environ: dict[str, str] | None = None,
) -> Config:
    """Load configuration from JSON file, then apply environment overrides."""
    config = _load_file(config_file)
    return apply_env_overrides(config, os.environ if environ is None else environ)


def apply_env_overrides(config: Config, environ: dict[str, str]) -> Config:
    """Return a copy of config with any set environment variables applied."""
    data = config.model_dump()
    for name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(name)
        if value:
            data[section][field] = value

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def _load_file(config_file: Path) -> Config:
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default
