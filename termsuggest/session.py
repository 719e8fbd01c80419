"""Completion session: owns the description cache and drives one shell dialect."""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from typing import TYPE_CHECKING

from .aliases import get_aliases
from .assembler import EnrichmentSource, assemble
from .builtin_names import get_builtin_names
from .descriptions import DescriptionCache
from .logging_setup import get_logger
from .process import ShellInvoker, run_shell

if TYPE_CHECKING:
    from .config import ExecOptions
    from .models import CompletionResource
    from .shells.base import ShellDialect

__all__ = ["CompletionSession"]


class CompletionSession:
    """Gathers shell-level completions for one dialect.

    The description cache is loaded on the first `get_globals` call and
    reused afterwards. Pass the same cache to several sessions to share it.
    """

    def __init__(
        self,
        dialect: ShellDialect,
        cache: DescriptionCache | None = None,
        invoker: ShellInvoker = run_shell,
        enrichment: EnrichmentSource = EnrichmentSource.BUILTINS,
    ) -> None:
        self.dialect = dialect
        self.log = get_logger(f"session.{dialect.name}")
        self.cache = cache if cache is not None else DescriptionCache(dialect.cache_file)
        self.invoker = invoker
        self.enrichment = enrichment

    async def get_globals(
        self,
        options: ExecOptions,
        existing_commands: Collection[str] | None = None,
    ) -> list[CompletionResource]:
        """Return aliases then builtins of the shell.

        Args:
            options: Process options for the shell invocations
            existing_commands: Names already suggested from another source

        Raises:
            ShellExecError: If either shell invocation fails
        """
        await self.cache.load_once()
        aliases, builtins = await asyncio.gather(
            get_aliases(self.invoker, self.dialect.alias_args, self.dialect.alias_pattern, options),
            get_builtin_names(self.invoker, self.dialect.builtin_args, options, existing_commands),
        )
        completions = assemble(aliases, builtins, self.cache, self.enrichment, self.log)
        self.log.debug("%d completions for %s", len(completions), self.dialect.name)
        return completions
