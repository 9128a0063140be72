# pluglog/config.py
"""
Logging configuration: YAML files, level spec strings and environment.

A level spec is a colon-separated list of entries. A bare level sets the
default for unconfigured modules; ``module=level`` sets a single module:

    PLUGLOG_LEVEL="info:svc=debug:db=warning"

YAML files carry the same information plus caller-info flags, either at the
top level or under a ``logging:`` key:

    logging:
      default_level: info
      modules:
        svc: debug
        db: warning
      caller_info:
        svc: [critical, debug]

Usage:
    from pluglog.config import apply_config, config_from_env

    config = config_from_env()
    if config is not None:
        apply_config(config)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pluglog.levels import DEFAULT_LEVEL, Level, LevelParseError, parse_level

logger = logging.getLogger(__name__)

LEVEL_ENV_VAR = "PLUGLOG_LEVEL"
CONFIG_ENV_VAR = "PLUGLOG_CONFIG"


# =============================================================================
# Errors
# =============================================================================


class ConfigError(Exception):
    """A logging config could not be read or did not describe valid settings."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


class ConfigNotFoundError(ConfigError):
    """The logging config path is missing or is not a regular file."""


class ConfigParseError(ConfigError):
    """The file is not YAML, or its root is not a mapping of settings."""


class ConfigValidationError(ConfigError):
    """A level name, module name or key in the settings is invalid."""


# =============================================================================
# Schema
# =============================================================================


def _as_level(value: Any) -> Level:
    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        return parse_level(value)
    raise ValueError(f"level must be a level name, got {value!r}")


class LoggingConfig(BaseModel):
    """
    Per-module logging settings.

    Examples:
        >>> LoggingConfig(default_level="warning", modules={"svc": "debug"})
    """

    default_level: Level = Field(DEFAULT_LEVEL, description="Level for unconfigured modules")
    modules: Dict[str, Level] = Field(default_factory=dict, description="Module name -> level")
    caller_info: Dict[str, List[Level]] = Field(
        default_factory=dict,
        description="Module name -> levels whose lines include the call site",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("default_level", mode="before")
    @classmethod
    def _parse_default_level(cls, v: Any) -> Level:
        return _as_level(v)

    @field_validator("modules", mode="before")
    @classmethod
    def _parse_module_levels(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        return {module: _as_level(level) for module, level in v.items()}

    @field_validator("caller_info", mode="before")
    @classmethod
    def _parse_caller_info(cls, v: Any) -> Any:
        if not isinstance(v, Mapping):
            return v
        parsed = {}
        for module, levels in v.items():
            if isinstance(levels, (str, Level)):
                levels = [levels]
            parsed[module] = [_as_level(level) for level in levels]
        return parsed

    @field_validator("modules", "caller_info")
    @classmethod
    def _reject_empty_module_names(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if any(not module for module in v):
            raise ValueError("module names must be non-empty")
        return v


# =============================================================================
# Level Specs
# =============================================================================


def parse_level_spec(spec: str) -> LoggingConfig:
    """
    Parse a level spec such as ``"info:svc=debug:db=warning"``.

    Args:
        spec: Colon-separated entries, each ``level`` or ``module=level``

    Returns:
        LoggingConfig with the default level and module levels from the spec

    Raises:
        ConfigValidationError: If an entry is malformed or names an unknown level
    """
    values: Dict[str, Any] = {}
    modules: Dict[str, Level] = {}

    for entry in spec.split(":"):
        entry = entry.strip()
        if not entry:
            continue

        module, sep, level_name = entry.partition("=")
        try:
            if not sep:
                values["default_level"] = parse_level(module)
                continue

            module = module.strip()
            if not module:
                raise ConfigValidationError(f"Missing module name in level spec entry {entry!r}")
            modules[module] = parse_level(level_name.strip())
        except LevelParseError as e:
            raise ConfigValidationError(f"Invalid level spec entry {entry!r}: {e}") from e

    # default_level stays out of model_fields_set unless the spec names one
    return LoggingConfig(**values, modules=modules)


# =============================================================================
# Loading
# =============================================================================


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a logging config file into a dictionary.

    An empty file yields an empty dictionary (all defaults).

    Raises:
        ConfigNotFoundError: If the path is not an existing file
        ConfigParseError: If the YAML is malformed or not a mapping
    """
    p = Path(path)
    if not p.is_file():
        raise ConfigNotFoundError("no logging config file here", path=p)

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigParseError(f"logging config is not valid YAML: {e}", path=p) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"logging config must be a mapping, got {type(data).__name__}", path=p
        )

    logger.debug(f"Read logging config {p}")
    return data


def load_logging_config(path: Union[str, Path]) -> LoggingConfig:
    """
    Load and validate a logging config file.

    The settings may sit under a ``logging:`` key or at the top level.

    Raises:
        ConfigNotFoundError: If file doesn't exist
        ConfigParseError: If YAML is invalid
        ConfigValidationError: If values don't match the schema
    """
    p = Path(path)
    data = load_yaml(p)
    section = data.get("logging", data)

    if not isinstance(section, dict):
        raise ConfigValidationError("'logging' section must be a mapping", path=p)

    try:
        return LoggingConfig(**section)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid logging config: {e}", path=p) from e


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[LoggingConfig]:
    """
    Build a config from PLUGLOG_CONFIG and PLUGLOG_LEVEL.

    The file is loaded first; module levels from the spec override it, and
    a default level in the spec replaces the file's default.

    Returns:
        LoggingConfig, or None if neither variable is set
    """
    env = os.environ if environ is None else environ
    config_path = env.get(CONFIG_ENV_VAR)
    level_spec = env.get(LEVEL_ENV_VAR)

    if not config_path and not level_spec:
        return None

    config = load_logging_config(config_path) if config_path else LoggingConfig()
    if not level_spec:
        return config

    overrides = parse_level_spec(level_spec)
    has_default = "default_level" in overrides.model_fields_set
    return config.model_copy(
        update={
            "default_level": overrides.default_level if has_default else config.default_level,
            "modules": {**config.modules, **overrides.modules},
        }
    )


# =============================================================================
# Applying
# =============================================================================


def apply_config(config: LoggingConfig, context: Any = None) -> None:
    """
    Push a config into a logging context's level registry.

    Args:
        config: Settings to apply
        context: LoggingContext to update (default: the global context)
    """
    if context is None:
        from pluglog.provider import LoggingContext

        context = LoggingContext.get_global()

    registry = context.registry
    registry.set_default_level(config.default_level)

    for module, level in config.modules.items():
        registry.set_level(module, level)

    for module, levels in config.caller_info.items():
        for level in levels:
            registry.show_caller_info(module, level)

    logger.debug(
        f"Applied logging config: default={config.default_level.name}, "
        f"{len(config.modules)} module level(s), {len(config.caller_info)} caller-info module(s)"
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "LEVEL_ENV_VAR",
    "LoggingConfig",
    "apply_config",
    "config_from_env",
    "load_logging_config",
    "load_yaml",
    "parse_level_spec",
]
