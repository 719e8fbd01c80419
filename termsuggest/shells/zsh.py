"""zsh: aliases from `alias`, builtins from the `$builtins` associative array."""

from __future__ import annotations

import re
from collections.abc import Collection
from typing import TYPE_CHECKING

from ..constants import ZSH_CACHE_FILE
from ..process import run_shell
from ..session import CompletionSession
from .base import ShellDialect, shared_cache

if TYPE_CHECKING:
    from ..config import ExecOptions
    from ..descriptions import DescriptionCache
    from ..models import Completion
    from ..process import ShellInvoker

__all__ = ["ZSH", "ZSH_ALIAS_PATTERN", "get_zsh_globals"]

# name=value, name='value' or name="value"; a quote must be closed by the same character
ZSH_ALIAS_PATTERN = re.compile(r"""^(?P<alias>[a-zA-Z0-9._:-]+)=(?P<quote>['"]?)(?P<resolved>.+?)(?P=quote)$""")

ZSH = ShellDialect(
    name="zsh",
    alias_args=("-ic", "alias"),
    builtin_args=("-ic", 'printf "%s\\n" ${(k)builtins}'),
    alias_pattern=ZSH_ALIAS_PATTERN,
    cache_file=ZSH_CACHE_FILE,
)


async def get_zsh_globals(
    options: ExecOptions,
    existing_commands: Collection[str] | None = None,
    invoker: ShellInvoker | None = None,
    cache: DescriptionCache | None = None,
) -> list[Completion]:
    """Aliases and builtins of the user's zsh, as completions.

    Without `cache`, every call shares the process-wide zsh cache, so the
    snapshot is read at most once.
    """
    session = CompletionSession(
        ZSH,
        cache=shared_cache(ZSH) if cache is None else cache,
        invoker=invoker or run_shell,
    )
    return list(await session.get_globals(options, existing_commands))
