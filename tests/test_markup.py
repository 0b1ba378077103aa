# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for bundle reference markup and template substitution."""

from __future__ import annotations

import pytest

from asset_bundler.bundle import Bundle
from asset_bundler.config import BundlerConfig
from asset_bundler.errors import ConfigError
from asset_bundler.markup import MarkupRenderer
from asset_bundler.templating import render_template


def _bundle(asset_type: str, *, nomerge: bool = False, sources: tuple[str, ...] = ("a",)) -> Bundle:
    return Bundle(
        sources=sources,
        asset_type=asset_type,
        filename="" if nomerge else f"abc123.{asset_type}",
        raw_content="",
        content="",
        digest="abc123",
        base_path="/bundles/",
        fingerprint="fp",
        nomerge=nomerge,
    )


def test_merged_bundle_url_includes_server_url() -> None:
    config = BundlerConfig(server_url="https://static.example.com")

    markup = MarkupRenderer(config).render(_bundle("css"))

    assert markup == (
        "<link rel='stylesheet' type='text/css' href='https://static.example.com/bundles/abc123.css' />\n"
    )


def test_nomerge_bundle_renders_each_source_verbatim() -> None:
    bundle = _bundle("js", nomerge=True, sources=("js/a.js", "//cdn.example.com/b.js"))

    markup = MarkupRenderer(BundlerConfig(server_url="https://ignored")).render(bundle)

    assert markup == (
        "<script type='text/javascript' src='js/a.js'></script>\n"
        "<script type='text/javascript' src='//cdn.example.com/b.js'></script>\n"
    )


def test_custom_template_is_used() -> None:
    config = BundlerConfig(markup_templates={"js": "<script defer src=\"{{ url }}\"></script>"})

    assert MarkupRenderer(config).render(_bundle("js")) == '<script defer src="/bundles/abc123.js"></script>'


def test_unknown_type_without_template_raises() -> None:
    with pytest.raises(ConfigError):
        MarkupRenderer(BundlerConfig()).render(_bundle("svg"))


def test_render_template_supports_dotted_names() -> None:
    rendered = render_template("{{ site.name }}/{{page.title}}/{{ missing }}", {"site": {"name": "s"}, "page": {"title": "t"}})

    assert rendered == "s/t/"
