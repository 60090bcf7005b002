"""Configuration loading for Tower inventory synchronisation."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .errors import ConfigurationError
from .models import TowerConfig
from .utils import is_blank

REQUIRED_SETTINGS = (
    ("url", "Ansible Tower URL"),
    ("api_version", "Ansible Tower API version"),
    ("username", "Ansible Tower Username"),
    ("password", "Ansible Tower Password"),
)


class TowerSettings(BaseSettings):
    """Tower settings from the YAML file, overridden by TOWER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TOWER_",
        extra="ignore",
        case_sensitive=False,
        coerce_numbers_to_str=True,
    )

    url: str = ""
    api_version: str = "v2"
    username: str = ""
    password: str = Field(default="", repr=False)
    verify_ssl: bool = True
    api_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout (seconds).")
    inventory_name: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment first, then values read from the config file.
        return env_settings, init_settings

    def to_config(self) -> TowerConfig:
        return TowerConfig(
            url=self.url.rstrip("/"),
            username=self.username,
            password=self.password,
            inventory_name=self.inventory_name,
            api_version=self.api_version,
            verify_ssl=self.verify_ssl,
            timeout=self.api_timeout,
        )


def read_config_file(config_path: Path) -> dict[str, Any]:
    """Read the raw YAML settings file."""
    if not config_path.exists():
        raise ConfigurationError(f"Ansible Tower configuration not found at {config_path}")
    with open(config_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root in {config_path} must be a mapping")
    return data


def build_config(settings: Mapping[str, Any]) -> TowerConfig:
    """Build a TowerConfig from tower_* keyed settings and the environment."""
    values = {
        key.removeprefix("tower_"): value
        for key, value in settings.items()
        if isinstance(key, str) and value is not None
    }
    try:
        return TowerSettings(**values).to_config()
    except ValidationError as e:
        problems = "; ".join(
            f"tower_{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid Ansible Tower configuration: {problems}") from e


def load_config(config_path: Path) -> TowerConfig:
    """Load Tower settings from a YAML file, with environment overrides."""
    return build_config(read_config_file(config_path))


def validate_config(config: TowerConfig | None) -> None:
    """Ensure every setting needed to talk to Tower is present."""
    if config is None:
        raise ConfigurationError("Ansible Tower configuration not found")
    for attr, label in REQUIRED_SETTINGS:
        if is_blank(getattr(config, attr)):
            raise ConfigurationError(f"{label} not set")
    if is_blank(config.inventory_name):
        raise ConfigurationError("Ansible Tower Inventory not defined")
