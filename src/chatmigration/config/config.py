import logging
import os

import yaml
from pydantic import BaseModel, field_validator

from chatmigration.errors import ConfigError

DEFAULT_SETTINGS_PATH = "config/migration_config.yaml"


class Config(BaseModel):
    v1_dsn: str  # MariaDB/MySQL
    v2_dsn: str  # PostgreSQL


class LoggingSettings(BaseModel):
    level: str = 'INFO'
    save_path: str | None = None

    @field_validator('level')
    @classmethod
    def known_level(cls, level: str) -> str:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {level}")
        return level


class ToolSettings(BaseModel):
    logging: LoggingSettings = LoggingSettings()


def load_config_from_env(environ=None) -> Config:
    environ = os.environ if environ is None else environ

    v1_dsn = environ.get('V1_DSN', '')
    v2_dsn = environ.get('V2_DSN', '')

    if v1_dsn == '':
        raise ConfigError("V1_DSN environment variable is required")
    if v2_dsn == '':
        raise ConfigError("V2_DSN environment variable is required")

    return Config(v1_dsn=v1_dsn, v2_dsn=v2_dsn)


def load_tool_settings(path: str = None) -> ToolSettings:
    """
    Load the optional YAML settings file.

    The path comes from the MIGRATION_CONFIG environment variable when not given.
    A missing file means the built-in defaults are used.
    """
    if path is None:
        path = os.environ.get('MIGRATION_CONFIG', DEFAULT_SETTINGS_PATH)

    if not os.path.exists(path):
        return ToolSettings()

    try:
        with open(path, encoding='UTF-8') as yml:
            raw = yaml.full_load(yml)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid settings file {path}: {e}") from e

    if raw is None:
        return ToolSettings()
    if not isinstance(raw, dict):
        raise ConfigError(f"invalid settings file {path}: expected a mapping")

    try:
        return ToolSettings(**raw)
    except ValueError as e:
        raise ConfigError(f"invalid settings file {path}: {e}") from e
