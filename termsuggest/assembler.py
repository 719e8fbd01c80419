"""Merging aliases and builtins into one ordered completion list."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from .aliases import aliases_to_resources
from .constants import DOT_SOURCE_DETAIL
from .descriptions import DescriptionCache
from .logging_setup import get_logger
from .models import AliasRecord, CompletionItemKind, CompletionLabel, CompletionResource

__all__ = [
    "DOT_SOURCE",
    "EnrichmentSource",
    "ItemResult",
    "assemble",
    "describe_builtin",
    "dot_source_resource",
]

DOT_SOURCE = "."


class EnrichmentSource(StrEnum):
    """Which names get a builtin completion.

    BUILTINS: names reported by the shell, described from the cache when possible.
    CACHE: every name in the cache, whatever the shell reported.
    """

    BUILTINS = "builtins"
    CACHE = "cache"


@dataclass(frozen=True)
class ItemResult:
    """Outcome of building one builtin completion."""

    name: str
    value: CompletionResource | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def resource(self) -> CompletionResource:
        """The built completion, or a bare one when building failed."""
        if self.value is not None:
            return self.value
        return CompletionResource.bare(self.name)


def dot_source_resource() -> CompletionResource:
    """Fixed completion for the `.` builtin."""
    return CompletionResource(
        label=CompletionLabel(DOT_SOURCE),
        kind=CompletionItemKind.METHOD,
        detail=DOT_SOURCE_DETAIL,
    )


def _text(value: object, field: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    msg = f"{field} must be a string, got {type(value).__name__}"
    raise TypeError(msg)


def describe_builtin(name: str, cache: DescriptionCache) -> CompletionResource:
    """Build the completion for a builtin, described from the cache when it knows it.

    Raises whatever a malformed cache entry causes; `assemble` contains it.
    """
    info = cache.lookup(name)
    if info is None:
        return CompletionResource.bare(name)
    return CompletionResource(
        label=CompletionLabel(name, _text(info.description, "description")),
        kind=CompletionItemKind.METHOD,
        detail=_text(info.args, "args"),
        documentation=_text(info.documentation, "documentation"),
    )


def _build(name: str, cache: DescriptionCache) -> ItemResult:
    try:
        return ItemResult(name, value=describe_builtin(name, cache))
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        return ItemResult(name, error=e)


def _report(failures: Sequence[ItemResult], log: logging.Logger) -> None:
    if not failures:
        return
    log.error(
        "Malformed description for %d builtin(s), showing bare names: %s",
        len(failures),
        ", ".join(f"{item.name} ({item.error})" for item in failures),
    )


def assemble(
    alias_records: Iterable[AliasRecord],
    builtin_names: Sequence[str],
    cache: DescriptionCache,
    enrichment: EnrichmentSource = EnrichmentSource.BUILTINS,
    log: logging.Logger | None = None,
) -> list[CompletionResource]:
    """Combine aliases and builtins into one list.

    Order: aliases as listed, then the `.` entry when the shell has that
    builtin, then the remaining builtins. A builtin whose description cannot
    be built is kept as a bare name.

    Args:
        alias_records: Parsed aliases
        builtin_names: Builtin names reported by the shell (already filtered)
        cache: Description cache, loaded or not
        enrichment: Whether builtins come from the shell listing or the cache keys
        log: Logger for failures (defaults to the "assembler" logger)
    """
    completions = aliases_to_resources(alias_records)

    if DOT_SOURCE in builtin_names:
        completions.append(dot_source_resource())

    source = cache.names() if enrichment is EnrichmentSource.CACHE else builtin_names
    candidates = [name for name in source if name != DOT_SOURCE]

    results = [_build(name, cache) for name in candidates]
    _report([item for item in results if not item.ok], log or get_logger("assembler"))
    completions.extend(item.resource() for item in results)
    return completions
