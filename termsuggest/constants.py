"""Shared constants for termsuggest."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_ENCODING",
    "DOT_SOURCE_DETAIL",
    "ENV_SHELL_OVERRIDE",
    "ENV_TIMEOUT_OVERRIDE",
    "ZSH_CACHE_FILE",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "termsuggest" / "config.toml"

# Static description snapshots live next to the code
DATA_DIR = Path(__file__).parent / "data"
ZSH_CACHE_FILE = DATA_DIR / "zsh_builtins_cache.json"

DEFAULT_ENCODING = "utf-8"

ENV_SHELL_OVERRIDE = "TERMSUGGEST_ZSH"
ENV_TIMEOUT_OVERRIDE = "TERMSUGGEST_TIMEOUT"

DOT_SOURCE_DETAIL = "Source a file in the current shell"
