"""Per-dialect knowledge: how to list aliases and builtins, and how to parse them."""

from __future__ import annotations

from .base import ShellDialect, shared_cache
from .zsh import ZSH

__all__ = ["DIALECTS", "ZSH", "ShellDialect", "shared_cache"]

DIALECTS: dict[str, ShellDialect] = {ZSH.name: ZSH}
