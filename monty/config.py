"""
Runtime configuration.

Values are resolved from defaults, then an optional YAML file, then
environment variables; CLI flags are applied last by the caller.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from .core.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")

ENV_PREFIX = "MONTY_"
ENV_CONFIG_PATH = "MONTY_CONFIG"


@dataclass(frozen=True)
class MontyConfig:
    log_level: str = "WARNING"
    log_format: str = "console"
    max_stack_size: Optional[int] = None  # None means unbounded

    def validated(self) -> "MontyConfig":
        """Return a normalised copy, raising ConfigError on bad values."""
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"invalid log level {self.log_level!r}")
        log_format = str(self.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ConfigError(f"invalid log format {self.log_format!r}")
        max_size = self.max_stack_size
        if max_size is not None:
            try:
                max_size = int(max_size)
            except (TypeError, ValueError):
                raise ConfigError(f"invalid max stack size {self.max_stack_size!r}") from None
            if max_size < 0:
                raise ConfigError(f"invalid max stack size {self.max_stack_size!r}")
        return replace(self, log_level=level, log_format=log_format, max_stack_size=max_size)

    def merged(self, overrides: Mapping[str, Any]) -> "MontyConfig":
        """Apply non-None overrides whose keys name config fields."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(sorted(unknown))}")
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a YAML mapping of config values.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Can't read config file {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Can't parse config file {path}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for f in fields(MontyConfig):
        value = environ.get(ENV_PREFIX + f.name.upper())
        if value:
            overrides[f.name] = value
    return overrides


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    **cli_overrides: Any,
) -> MontyConfig:
    environ = os.environ if environ is None else environ
    config = MontyConfig()
    config_path = config_path or environ.get(ENV_CONFIG_PATH)
    if config_path:
        config = config.merged(load_config_file(config_path))
    config = config.merged(env_overrides(environ))
    config = config.merged(cli_overrides)
    return config.validated()
