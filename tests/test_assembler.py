"""Tests for merging aliases and builtins."""

import json

import pytest
from pytest_asyncio import fixture

from termsuggest.assembler import (
    DOT_SOURCE,
    EnrichmentSource,
    ItemResult,
    assemble,
    describe_builtin,
    dot_source_resource,
)
from termsuggest.constants import DOT_SOURCE_DETAIL
from termsuggest.descriptions import DescriptionCache
from termsuggest.models import AliasRecord, CompletionItemKind, CompletionResource

ALIASES = [AliasRecord("foo", "ls -la"), AliasRecord("bar", "git status")]


@fixture
async def loaded_cache(cache_file):
    cache = DescriptionCache(cache_file)
    await cache.load_once()
    return cache


@fixture
async def empty_cache(tmp_path):
    cache = DescriptionCache(tmp_path / "absent.json")
    await cache.load_once()
    return cache


def labels(completions: list[CompletionResource]) -> list[str]:
    return [item.name for item in completions]


@pytest.mark.asyncio
async def test_order(loaded_cache):
    """Aliases first, then the dot entry, then builtins as reported."""
    completions = assemble(ALIASES, [".", "pwd", "cd"], loaded_cache)
    assert labels(completions) == ["foo", "bar", ".", "pwd", "cd"]


@pytest.mark.asyncio
async def test_builtin_is_enriched(loaded_cache):
    (cd,) = assemble([], ["cd"], loaded_cache)
    assert cd.label.description == "Change the current directory"
    assert cd.detail == "cd [ -qsLP ] [ arg ]"
    assert cd.documentation == "Change the current directory to arg, or to $HOME."
    assert cd.kind is CompletionItemKind.METHOD


@pytest.mark.asyncio
async def test_unknown_builtin_is_bare(loaded_cache):
    (item,) = assemble([], ["zmodload"], loaded_cache)
    assert item == CompletionResource.bare("zmodload")


@pytest.mark.asyncio
async def test_dot_entry_is_fixed(loaded_cache, empty_cache):
    """The dot entry does not depend on the cache."""
    for cache in (loaded_cache, empty_cache):
        dots = [item for item in assemble([], [".", "cd"], cache) if item.name == DOT_SOURCE]
        assert dots == [dot_source_resource()]
        assert dots[0].detail == DOT_SOURCE_DETAIL
        assert dots[0].kind is CompletionItemKind.METHOD


@pytest.mark.asyncio
async def test_no_dot_entry_without_dot_builtin(loaded_cache):
    assert DOT_SOURCE not in labels(assemble([], ["cd"], loaded_cache))


@pytest.mark.asyncio
async def test_unavailable_cache_gives_bare_names(empty_cache):
    completions = assemble(ALIASES, [".", "cd", "echo"], empty_cache)
    assert labels(completions) == ["foo", "bar", ".", "cd", "echo"]
    assert completions[-1] == CompletionResource.bare("echo")
    assert completions[0].detail == "ls -la"


@pytest.mark.asyncio
async def test_malformed_entry_falls_back_to_bare_name(tmp_path):
    """One broken entry never hides the others."""
    path = tmp_path / "cache.json"
    path.write_text(
        json.dumps(
            {
                "cd": {"description": "Change directory"},
                "bad": "not an object",
                "worse": {"description": 42},
                "echo": {"shortDescription": "Print", "description": "Print arguments"},
            }
        ),
        encoding="utf-8",
    )
    cache = DescriptionCache(path)
    await cache.load_once()

    completions = assemble([], ["cd", "bad", "worse", "echo"], cache)

    assert labels(completions) == ["cd", "bad", "worse", "echo"]
    assert completions[1] == CompletionResource.bare("bad")
    assert completions[2] == CompletionResource.bare("worse")
    assert completions[3].label.description == "Print"


@pytest.mark.asyncio
async def test_failures_logged_once(tmp_path, mocker):
    path = tmp_path / "cache.json"
    path.write_text(json.dumps({"a": "x", "b": "y", "c": {"description": "ok"}}), encoding="utf-8")
    cache = DescriptionCache(path)
    await cache.load_once()
    log = mocker.Mock()

    assemble([], ["a", "b", "c"], cache, log=log)

    log.error.assert_called_once()
    assert "a (" in log.error.call_args.args[-1]
    assert "b (" in log.error.call_args.args[-1]


@pytest.mark.asyncio
async def test_no_failure_no_error_log(loaded_cache, mocker):
    log = mocker.Mock()
    assemble(ALIASES, ["cd"], loaded_cache, log=log)
    log.error.assert_not_called()


@pytest.mark.asyncio
async def test_cache_driven_enrichment(loaded_cache):
    """CACHE mode lists every cached name, whatever the shell reported."""
    completions = assemble([], [".", "cd", "zmodload"], loaded_cache, EnrichmentSource.CACHE)
    assert labels(completions) == [".", "cd", "echo", "pwd"]


@pytest.mark.asyncio
async def test_describe_builtin(loaded_cache):
    resource = describe_builtin("pwd", loaded_cache)
    assert resource.label.description == "Print the working directory"
    assert resource.detail is None


def test_item_result():
    ok = ItemResult("cd", value=CompletionResource.bare("cd"))
    failed = ItemResult("bad", error=TypeError("nope"))
    assert ok.ok
    assert not failed.ok
    assert failed.resource() == CompletionResource.bare("bad")


def test_to_dict_shapes():
    assert CompletionResource.bare("cd").to_dict() == {"label": "cd", "kind": "method"}
    resource = dot_source_resource()
    assert resource.to_dict() == {"label": ".", "kind": "method", "detail": DOT_SOURCE_DETAIL}
