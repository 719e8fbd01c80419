"""Shell dialect description and the description caches shared per snapshot."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ..descriptions import DescriptionCache

__all__ = ["ShellDialect", "shared_cache"]


@dataclass(frozen=True)
class ShellDialect:
    """Everything needed to query one kind of shell.

    Quoting rules differ between shells, so each dialect carries its own
    alias pattern.
    """

    name: str
    alias_args: tuple[str, ...]
    builtin_args: tuple[str, ...]
    alias_pattern: re.Pattern[str]
    cache_file: Path


class _SharedCaches:
    """One DescriptionCache per snapshot file, for callers without a session."""

    caches: dict[Path, DescriptionCache] = {}


def shared_cache(dialect: ShellDialect) -> DescriptionCache:
    """Return the process-wide cache for the dialect's snapshot, creating it on first use."""
    cache = _SharedCaches.caches.get(dialect.cache_file)
    if cache is None:
        cache = DescriptionCache(dialect.cache_file)
        _SharedCaches.caches[dialect.cache_file] = cache
    return cache
