"""
Configuration Management.

Loads settings from config/settings/*.yaml and optional environment
overrides from the process environment or config/.env.

Settings (YAML):
    client.yaml   - Server address, timeouts, directories, identity, polling
    logging.yaml  - Logging configuration

Environment overrides (prefix COMFY_):
    COMFY_SERVER_ADDRESS, COMFY_INPUT_DIR, COMFY_OUTPUT_DIR
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from comfy_offload.core.config_schema import ClientSchema, LoggingSchema


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Environment overrides for values that differ per machine."""

    server_address: str | None = None
    input_dir: str | None = None
    output_dir: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="COMFY_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Client configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._client = _load_validated(ClientSchema, "client.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def client(self) -> ClientSchema:
        """Offload client settings."""
        return self._client

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached environment overrides. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_server_address() -> str:
    """
    Get the configured server address string.

    COMFY_SERVER_ADDRESS takes precedence over client.yaml.
    """
    override = get_settings().server_address
    if override:
        return override
    return get_app_config().client.server.address


def get_directories() -> tuple[str, str]:
    """
    Get the (input, output) directory pair with environment overrides applied.
    """
    settings = get_settings()
    directories = get_app_config().client.directories
    input_dir = settings.input_dir if settings.input_dir is not None else directories.input
    output_dir = settings.output_dir if settings.output_dir is not None else directories.output
    return input_dir, output_dir
