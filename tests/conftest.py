" generic fixtures "
import json
from collections.abc import Sequence

import pytest

from termsuggest.config import ExecOptions
from termsuggest.shells.zsh import ZSH

ALIAS_OUTPUT = "foo='ls -la'\nbar=\"git status\"\n"
BUILTIN_OUTPUT = ".\ncd\necho\n"

SAMPLE_CACHE = {
    "cd": {
        "shortDescription": "Change the current directory",
        "description": "Change the current directory to arg, or to $HOME.",
        "args": "cd [ -qsLP ] [ arg ]",
    },
    "echo": {
        "description": "Write each arg on the standard output.",
        "args": "echo [ -neE ] [ arg ... ]",
    },
    "pwd": {
        "shortDescription": "Print the working directory",
        "description": "Print the absolute pathname of the current working directory.",
    },
}


def pytest_configure():
    "Runs once before all"
    from termsuggest.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


class FakeShell:
    "Shell invoker answering from canned outputs, keyed by the command string"

    def __init__(self, aliases: str | BaseException = "", builtins: str | BaseException = ""):
        self.outputs = {ZSH.alias_args[-1]: aliases, ZSH.builtin_args[-1]: builtins}
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    async def __call__(self, shell: str, args: Sequence[str], options: ExecOptions) -> str:
        self.calls.append((shell, tuple(args)))
        result = self.outputs[args[-1]]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def fake_shell():
    "Shell answering with the reference alias and builtin listings"
    return FakeShell(ALIAS_OUTPUT, BUILTIN_OUTPUT)


@pytest.fixture
def options():
    return ExecOptions()


@pytest.fixture
def cache_file(tmp_path):
    "A snapshot file holding SAMPLE_CACHE"
    path = tmp_path / "cache.json"
    path.write_text(json.dumps(SAMPLE_CACHE), encoding="utf-8")
    return path
