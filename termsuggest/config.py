"""Configuration: typed access to the TOML file plus process options for shell calls."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import CONFIG_FILE, DEFAULT_ENCODING, ENV_SHELL_OVERRIDE, ENV_TIMEOUT_OVERRIDE
from .models import TermSuggestError

__all__ = [
    "ConfigError",
    "Configuration",
    "ExecOptions",
    "load_config",
]

ConfigValueType = float | bool | str | list | dict

SHELL_DEFAULTS: dict[str, ConfigValueType] = {
    "shell": "zsh",
    "encoding": DEFAULT_ENCODING,
    "enrichment": "builtins",
}


class ConfigError(TermSuggestError):
    """The configuration file exists but cannot be read."""


class Configuration(dict):
    """A config section with defaults and typed getters."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        defaults: dict[str, ConfigValueType] | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        super().__init__(*args, **kwargs)
        self.log = logger
        self._defaults = dict(defaults or {})

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Get a value, falling back to the section defaults then to `default`."""
        if name in self:
            return self[name]
        return self._defaults.get(name, default)

    def get_float(self, name: str, default: float = 0.0) -> float:
        """Get a float value.

        Args:
            name: The key name
            default: Default value if key is missing or invalid

        Returns:
            The float value
        """
        value = self.get(name)
        if value is None:
            return default
        try:
            return float(value)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            self.log.warning("Invalid float value for %s: %s", name, value)
            return default

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        value = self.get(name)
        if value is None:
            return default
        return str(value)


@dataclass
class ExecOptions:
    """Options passed through to the shell invoker."""

    shell: str = "zsh"
    encoding: str = DEFAULT_ENCODING
    cwd: str | None = None
    env: dict[str, str] | None = None
    timeout: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Configuration) -> ExecOptions:
        """Build options from a shell section."""
        timeout = config.get_float("timeout", 0.0)
        return cls(
            shell=config.get_str("shell", "zsh"),
            encoding=config.get_str("encoding", DEFAULT_ENCODING),
            cwd=config.get_str("cwd") or None,
            timeout=timeout if timeout > 0 else None,
        )


def _read_toml(path: Path, log: logging.Logger) -> dict[str, Any]:
    if not path.exists():
        log.debug("No config file at %s, using defaults", path)
        return {}
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e
    log.info("Loaded config from %s", path)
    return data


def load_config(path: str | Path | None, log: logging.Logger, shell: str = "zsh") -> Configuration:
    """Load the `[<shell>]` section of the config file, applying environment overrides.

    A missing file is not an error; an unreadable one raises `ConfigError`.
    """
    filename = Path(path).expanduser() if path else CONFIG_FILE
    section = _read_toml(filename, log).get(shell, {})
    if not isinstance(section, dict):
        msg = f"[{shell}] must be a table in {filename}"
        raise ConfigError(msg)

    config = Configuration(section, logger=log, defaults=SHELL_DEFAULTS)
    if os.environ.get(ENV_SHELL_OVERRIDE):
        config["shell"] = os.environ[ENV_SHELL_OVERRIDE]
    if os.environ.get(ENV_TIMEOUT_OVERRIDE):
        config["timeout"] = os.environ[ENV_TIMEOUT_OVERRIDE]
    return config
