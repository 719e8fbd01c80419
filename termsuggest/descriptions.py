"""Builtin descriptions loaded from a static JSON snapshot.

DescriptionCache:
    Loads the snapshot at most once (`load_once`), then answers `lookup`
    calls. A missing or corrupt snapshot leaves the cache unavailable,
    which only means builtins are shown without descriptions.
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import cast

import aiofiles

from .logging_setup import get_logger
from .models import CommandDescription, DescriptionEntry

__all__ = ["CacheState", "DescriptionCache"]


class CacheState(Enum):
    """Load state. Moves forward only: UNATTEMPTED -> LOADED or UNAVAILABLE."""

    UNATTEMPTED = "unattempted"
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


class DescriptionCache:
    """Read-only mapping of command name -> DescriptionEntry, filled once from disk.

    Usage:
        cache = DescriptionCache(ZSH_CACHE_FILE)
        await cache.load_once()
        cache.lookup("cd")
    """

    def __init__(self, path: str | Path, log: logging.Logger | None = None) -> None:
        """Initialize.

        Args:
            path: Location of the JSON snapshot
            log: Logger to use (defaults to the "descriptions" logger)
        """
        self.path = Path(path)
        self.log = log or get_logger("descriptions")
        self._entries: MappingProxyType[str, DescriptionEntry] = MappingProxyType({})
        self._state = CacheState.UNATTEMPTED
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CacheState:
        """Current load state."""
        return self._state

    @property
    def available(self) -> bool:
        """True when the snapshot was loaded."""
        return self._state is CacheState.LOADED

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def names(self) -> list[str]:
        """Cached command names, in snapshot order."""
        return list(self._entries)

    async def load_once(self) -> None:
        """Load the snapshot unless a load was already attempted.

        Never raises: a missing file is logged as a warning, a corrupt one as
        an error. Concurrent callers wait on the same attempt.
        """
        if self._state is not CacheState.UNATTEMPTED:
            return
        async with self._lock:
            if self._state is not CacheState.UNATTEMPTED:
                return
            entries = await self._read()
            if entries is None:
                self._state = CacheState.UNAVAILABLE
            else:
                self._entries = MappingProxyType(
                    {name: MappingProxyType(entry) if isinstance(entry, dict) else entry for name, entry in entries.items()}  # type: ignore[misc]
                )
                self._state = CacheState.LOADED
                self.log.debug("Loaded %d descriptions from %s", len(entries), self.path)

    async def _read(self) -> dict[str, DescriptionEntry] | None:
        try:
            async with aiofiles.open(self.path, encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            self.log.warning("Description cache not found at %s", self.path)
            return None
        except OSError as e:
            self.log.error("Failed to read description cache %s: %s", self.path, e)
            return None

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            self.log.error("Failed to load description cache %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            self.log.error("Description cache %s is not a JSON object", self.path)
            return None
        return cast("dict[str, DescriptionEntry]", data)

    def lookup(self, name: str) -> CommandDescription | None:
        """Return what to display for `name`, or None if unknown.

        The summary prefers `shortDescription`; the documentation is always
        the long `description`.
        """
        entry = self._entries.get(name)
        if entry is None:
            return None
        short = entry.get("shortDescription")
        return CommandDescription(
            description=short or entry.get("description"),
            args=entry.get("args"),
            documentation=entry.get("description"),
        )
