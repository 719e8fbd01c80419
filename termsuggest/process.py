"""Running shell commands and capturing their output.

run_shell:
    Default shell invoker: spawns the shell binary with the given
    arguments, waits for it and returns decoded stdout.

ShellInvoker:
    Protocol satisfied by `run_shell` and by any replacement a caller
    injects (tests, remote shells...).
"""

from __future__ import annotations

__all__ = ["ShellExecError", "ShellInvoker", "run_shell"]

import asyncio
import contextlib
import shlex
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from .models import TermSuggestError

if TYPE_CHECKING:
    from .config import ExecOptions


class ShellExecError(TermSuggestError):
    """The shell could not be spawned, timed out or exited with a non-zero status."""

    def __init__(self, command: str, returncode: int | None, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = f"Failed to run `{command}`"
        else:
            message = f"`{command}` exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class ShellInvoker(Protocol):
    """Runs `shell *args` and returns its standard output."""

    async def __call__(self, shell: str, args: Sequence[str], options: ExecOptions) -> str: ...


async def run_shell(shell: str, args: Sequence[str], options: ExecOptions) -> str:
    """Run `shell` with `args` and return its decoded standard output.

    Args:
        shell: Shell binary (name or path)
        args: Arguments for the shell, e.g. ("-ic", "alias")
        options: Encoding, working directory, environment, timeout and extra
            keyword arguments for the subprocess

    Raises:
        ShellExecError: On spawn failure, timeout or non-zero exit status
    """
    command = shlex.join([shell, *args])
    try:
        proc = await asyncio.create_subprocess_exec(
            shell,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=options.cwd,
            env=options.env,
            **options.extra,
        )
    except OSError as e:
        raise ShellExecError(command, None, str(e)) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=options.timeout)
    except TimeoutError as e:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        raise ShellExecError(command, None, f"timed out after {options.timeout}s") from e

    if proc.returncode != 0:
        raise ShellExecError(command, proc.returncode, stderr.decode(options.encoding, errors="replace"))

    return stdout.decode(options.encoding, errors="replace")
