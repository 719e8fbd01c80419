"""Completion resources and the records they are built from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any, NotRequired, TypedDict

__all__ = [
    "AliasRecord",
    "CommandDescription",
    "Completion",
    "CompletionItemKind",
    "CompletionLabel",
    "CompletionResource",
    "DescriptionEntry",
    "ExitCode",
    "TermSuggestError",
]


class TermSuggestError(Exception):
    """Base class for errors raised by termsuggest."""


class CompletionItemKind(StrEnum):
    """Kind of a completion, as understood by the host suggestion UI."""

    METHOD = "method"
    ALIAS = "alias"


@dataclass(frozen=True)
class CompletionLabel:
    """Label of a completion: the literal token plus an optional inline summary."""

    text: str
    description: str | None = None


@dataclass
class CompletionResource:
    """One suggestible entry handed to the host completion engine."""

    label: CompletionLabel
    kind: CompletionItemKind = CompletionItemKind.METHOD
    detail: str | None = None
    documentation: str | None = None

    @classmethod
    def bare(cls, name: str, kind: CompletionItemKind = CompletionItemKind.METHOD) -> CompletionResource:
        """Build a resource carrying nothing but the name."""
        return cls(label=CompletionLabel(name), kind=kind)

    @property
    def name(self) -> str:
        """Token the user would type."""
        return self.label.text

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the host shape, dropping unset fields."""
        label: str | dict[str, str] = self.label.text
        if self.label.description is not None:
            label = {"label": self.label.text, "description": self.label.description}
        result: dict[str, Any] = {"label": label, "kind": self.kind.value}
        if self.detail is not None:
            result["detail"] = self.detail
        if self.documentation is not None:
            result["documentation"] = self.documentation
        return result


Completion = str | CompletionResource


@dataclass(frozen=True)
class AliasRecord:
    """An alias as listed by the shell."""

    name: str
    value: str


class DescriptionEntry(TypedDict):
    """Snapshot record for a builtin (keys follow the JSON file)."""

    shortDescription: NotRequired[str]
    description: str
    args: NotRequired[str]


@dataclass(frozen=True)
class CommandDescription:
    """What gets displayed for a builtin.

    `description` is the summary (short form when available), while
    `documentation` always holds the long form.
    """

    description: str | None
    args: str | None
    documentation: str | None


class ExitCode(IntEnum):
    """Exit codes of the termsuggest command line."""

    SUCCESS = 0
    USAGE_ERROR = 1
    ENV_ERROR = 2
    COMMAND_ERROR = 4
