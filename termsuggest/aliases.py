"""Alias listing: parse `name=value` lines reported by a shell into completions."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from .logging_setup import get_logger
from .models import AliasRecord, CompletionItemKind, CompletionLabel, CompletionResource

if TYPE_CHECKING:
    from .config import ExecOptions
    from .process import ShellInvoker

__all__ = ["alias_to_resource", "aliases_to_resources", "get_aliases", "parse_aliases"]

# Groups every dialect pattern must define
REQUIRED_GROUPS = frozenset({"alias", "quote", "resolved"})


def parse_aliases(output: str, pattern: re.Pattern[str], log: logging.Logger | None = None) -> list[AliasRecord]:
    """Parse an alias listing, one alias per line.

    `pattern` must define the `alias`, `quote` and `resolved` groups; it is
    expected to close the value with a back-reference to `quote` so that a
    quoted value only matches when the same quote character ends it.
    Lines that do not match are skipped.

    Args:
        output: Raw text printed by the shell's alias command
        pattern: Dialect-specific line pattern
        log: Logger receiving skipped lines (debug level)

    Returns:
        Alias records in the order the shell listed them
    """
    missing = REQUIRED_GROUPS - set(pattern.groupindex)
    if missing:
        msg = f"Alias pattern lacks groups: {', '.join(sorted(missing))}"
        raise ValueError(msg)

    records: list[AliasRecord] = []
    for line in output.splitlines():
        if not line:
            continue
        match = pattern.match(line)
        if match is None:
            if log:
                log.debug("Skipping unsupported alias line: %r", line)
            continue
        records.append(AliasRecord(name=match.group("alias"), value=match.group("resolved")))
    return records


def alias_to_resource(record: AliasRecord) -> CompletionResource:
    """Turn an alias into a completion showing its expansion."""
    return CompletionResource(
        label=CompletionLabel(record.name, record.value),
        kind=CompletionItemKind.ALIAS,
        detail=record.value,
        documentation=f"alias {record.name}={record.value}",
    )


def aliases_to_resources(records: Iterable[AliasRecord]) -> list[CompletionResource]:
    """Map alias records to completions, keeping their order."""
    return [alias_to_resource(record) for record in records]


async def get_aliases(
    invoker: ShellInvoker,
    shell_args: Sequence[str],
    pattern: re.Pattern[str],
    options: ExecOptions,
) -> list[AliasRecord]:
    """Ask the shell for its aliases and parse them.

    Invocation errors propagate to the caller.
    """
    log = get_logger("aliases")
    output = await invoker(options.shell, shell_args, options)
    records = parse_aliases(output, pattern, log)
    log.debug("Found %d aliases", len(records))
    return records
