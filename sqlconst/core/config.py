from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when a config file cannot be read or does not validate."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SQLCONST_", extra="ignore")

    source_root: Optional[str] = None
    out_dir: Optional[str] = None

    package_suffix: str = "sql"
    name_suffix: str = "_"

    workers: int = Field(default=4, ge=1)
    log_level: str = "INFO"

    modules: list[str] = Field(default_factory=list)


def load_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    """
    Build Settings from an optional YAML file plus explicit overrides.

    Precedence, lowest first: defaults, environment / .env, YAML file, overrides.
    Overrides whose value is None are ignored so CLI flags left unset do not
    clobber file values.
    """
    values: dict[str, Any] = {}
    if config_path is not None:
        try:
            data = yaml.safe_load(Path(config_path).read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        values.update(data)

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


settings = Settings()
