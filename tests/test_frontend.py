# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for bundle declaration parsing and source grouping."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from asset_bundler.frontend import asset_type_of, collect_sources, expand_globs, group_by_type, parse_source_list


def test_parse_source_list_reads_yaml_sequence() -> None:
    assert parse_source_list("- js/a.js\n- //cdn.example.com/b.js\n- css/c.css\n") == [
        "js/a.js",
        "//cdn.example.com/b.js",
        "css/c.css",
    ]


@pytest.mark.parametrize("text", ["- [unclosed\n", "key: value\n", "just a string\n", ""])
def test_parse_source_list_rejects_non_lists(text: str, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert parse_source_list(text) == []
    assert "YAML bundle" in caplog.text


@pytest.mark.parametrize(
    ("source", "expected"),
    [("js/app.JS", "js"), ("style.min.css", "css"), ("//cdn/x.js", "js"), ("Makefile", None), ("dir.d/file", None)],
)
def test_asset_type_of(source: str, expected: str | None) -> None:
    assert asset_type_of(source) == expected


def test_collect_sources_keeps_remote_and_existing(site_root: Path, write_source, caplog) -> None:
    write_source("js/a.js", "a")
    write_source("js/.hidden.js", "h")

    with caplog.at_level(logging.ERROR):
        kept = collect_sources(site_root, ["js/a.js", "https://cdn/x.js", "js/missing.js", "js/.hidden.js"])

    assert kept == ["js/a.js", "https://cdn/x.js"]
    assert "missing.js not found, ignoring" in caplog.text


def test_expand_globs_sorted_and_deduplicated(site_root: Path, write_source) -> None:
    write_source("js/b.js", "b")
    write_source("js/a.js", "a")
    write_source("js/.skip.js", "s")
    write_source("js/lib/c.js", "c")

    assert expand_globs(site_root, ["js/*.js", "js/**/*.js"]) == ["js/a.js", "js/b.js", "js/lib/c.js"]


def test_group_by_type_keeps_supported_types_in_order() -> None:
    groups = group_by_type(["b.css", "a.js", "c.coffee", "d.css", "e.JS"])

    assert list(groups) == ["css", "js"]
    assert groups == {"css": ["b.css", "d.css"], "js": ["a.js", "e.JS"]}
