"""Command line entry point: print the shell-level completions of a shell."""

import argparse
import asyncio
import json
import sys

from .assembler import EnrichmentSource
from .config import ConfigError, ExecOptions, load_config
from .descriptions import DescriptionCache
from .logging_setup import get_logger, init_logger
from .models import CompletionResource, ExitCode
from .process import ShellExecError
from .session import CompletionSession
from .shells import DIALECTS

__all__ = ["main", "run"]


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser."""
    parser = argparse.ArgumentParser(prog="termsuggest", description="List shell aliases and builtins as completions")
    parser.add_argument("shell", nargs="?", default="zsh", choices=sorted(DIALECTS), help="shell dialect (default: zsh)")
    parser.add_argument("--exclude", "-x", action="append", default=[], metavar="NAME", help="command already known, not suggested")
    parser.add_argument("--json", action="store_true", help="print a JSON array")
    parser.add_argument("--config", metavar="PATH", help="configuration file")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser


def format_line(resource: CompletionResource) -> str:
    """One tab separated line: label, summary, detail."""
    return "\t".join((resource.name, resource.label.description or "", resource.detail or "")).rstrip("\t")


async def run(args: argparse.Namespace) -> int:
    """Gather and print completions, returning the exit code."""
    log = get_logger("cli")
    try:
        config = load_config(args.config, log, args.shell)
    except ConfigError as e:
        log.error("%s", e)
        return ExitCode.ENV_ERROR

    enrichment_name = config.get_str("enrichment", EnrichmentSource.BUILTINS)
    try:
        enrichment = EnrichmentSource(enrichment_name)
    except ValueError:
        log.error("Unknown enrichment %r, expected one of: %s", enrichment_name, ", ".join(EnrichmentSource))
        return ExitCode.USAGE_ERROR

    dialect = DIALECTS[args.shell]
    cache = DescriptionCache(config.get_str("cache_file") or dialect.cache_file)
    session = CompletionSession(dialect, cache=cache, enrichment=enrichment)
    try:
        completions = await session.get_globals(ExecOptions.from_config(config), set(args.exclude))
    except ShellExecError as e:
        log.error("%s", e)
        return ExitCode.COMMAND_ERROR

    if args.json:
        print(json.dumps([item.to_dict() for item in completions], indent=2))
    else:
        for item in completions:
            print(format_line(item))
    return ExitCode.SUCCESS


def main() -> None:
    """Console script entry point."""
    args = build_parser().parse_args()
    init_logger(force_debug=args.debug)
    sys.exit(asyncio.run(run(args)))
