# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for remote source detection and fetching."""

from __future__ import annotations

import logging
import urllib.error
from pathlib import Path

import pytest

from asset_bundler.cache import ContentAddressedCache
from asset_bundler.digest import md5_hex
from asset_bundler.remote import RemoteFetcher, is_remote, normalize_remote_uri


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("http://example.com/a.js", True),
        ("HTTPS://example.com/a.js", True),
        ("//cdn.example.com/a.js", True),
        ("js/app.js", False),
        ("/js/app.js", False),
        ("ftp://example.com/a.js", False),
    ],
)
def test_is_remote(source: str, expected: bool) -> None:
    assert is_remote(source) is expected


def test_normalize_remote_uri_uses_canonical_scheme() -> None:
    assert normalize_remote_uri("//cdn.example.com/a.js") == "http://cdn.example.com/a.js"
    assert normalize_remote_uri("https://cdn.example.com/a.js") == "http://cdn.example.com/a.js"
    assert normalize_remote_uri("http://cdn.example.com/a.js", scheme="https") == "https://cdn.example.com/a.js"


def test_fetch_memoises_body_on_disk(cache_dir: Path) -> None:
    requested: list[str] = []

    def opener(uri: str) -> bytes:
        requested.append(uri)
        return b"var remote = 1;"

    cache = ContentAddressedCache(cache_dir)
    fetcher = RemoteFetcher(cache, opener=opener)
    uri = "http://cdn.example.com/lib.js"

    assert fetcher.fetch(uri, "js") == "var remote = 1;"
    assert RemoteFetcher(cache, opener=opener).fetch(uri, "js") == "var remote = 1;"
    assert requested == [uri]
    assert (cache_dir / f"remote.{md5_hex(uri)}.js").is_file()


def test_failed_fetch_returns_empty_and_is_not_cached(cache_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
    def opener(uri: str) -> bytes:
        raise urllib.error.URLError("unreachable")

    cache = ContentAddressedCache(cache_dir)
    fetcher = RemoteFetcher(cache, opener=opener)
    uri = "http://cdn.example.com/missing.js"

    with caplog.at_level(logging.ERROR):
        assert fetcher.fetch(uri, "js") == ""

    assert not cache.contains(RemoteFetcher.cache_key(uri, "js"))
    assert uri in caplog.text
