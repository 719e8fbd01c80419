"""Builtin listing: candidate builtin names reported by a shell."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

from .logging_setup import get_logger

if TYPE_CHECKING:
    from .config import ExecOptions
    from .process import ShellInvoker

__all__ = ["enumerate_builtins", "get_builtin_names"]


def enumerate_builtins(output: str, existing_commands: Collection[str] | None = None) -> list[str]:
    """Split one-name-per-line output into builtin names.

    Blank lines, repeated names and names in `existing_commands` are dropped;
    the shell's order is kept.
    """
    excluded = existing_commands or ()
    seen: set[str] = set()
    names: list[str] = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name in excluded or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


async def get_builtin_names(
    invoker: ShellInvoker,
    shell_args: Sequence[str],
    options: ExecOptions,
    existing_commands: Collection[str] | None = None,
) -> list[str]:
    """Ask the shell for its builtins.

    Invocation errors propagate to the caller.
    """
    output = await invoker(options.shell, shell_args, options)
    names = enumerate_builtins(output, existing_commands)
    get_logger("builtins").debug("Found %d builtins", len(names))
    return names
