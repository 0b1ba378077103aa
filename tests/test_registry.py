# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for bundle deduplication, compression caching and naming."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from asset_bundler.bundle import AssetSpec
from asset_bundler.compression import register_compressor, unregister_compressor
from asset_bundler.config import BundlerConfig
from asset_bundler.digest import md5_hex
from asset_bundler.engine import BundleEngine
from asset_bundler.errors import CompressionError
from asset_bundler.site import Site, StaticFile


class CountingPlugin:
    name = "counting"
    supported_types = frozenset({"js", "css"})

    def __init__(self, calls: list[str]) -> None:
        self._calls = calls

    def compress(self, content: str, asset_type: str) -> str:
        self._calls.append(asset_type)
        return content.replace("\n", "")


@pytest.fixture
def compress_calls() -> Iterator[list[str]]:
    calls: list[str] = []
    register_compressor("counting", lambda options: CountingPlugin(calls), replace=True)
    yield calls
    unregister_compressor("counting")


@pytest.fixture
def make_engine(site: Site, cache_dir: Path) -> Callable[..., BundleEngine]:
    def _make(**settings: Any) -> BundleEngine:
        config = BundlerConfig.model_validate({"cache_dir": cache_dir, **settings})
        return BundleEngine(site, config)

    return _make


def test_same_sources_build_once(make_engine, write_source, renderer, site: Site) -> None:
    write_source("a.js", "a")
    write_source("b.js", "b")
    engine = make_engine()

    first = engine.build(AssetSpec.create(["a.js", "b.js"], "js"))
    second = engine.build(AssetSpec.create(["a.js", "b.js"], "js"))

    assert first is second
    assert len(engine.registry) == 1
    assert renderer.calls == {"a.js": 1, "b.js": 1}
    assert [item.relative_path for item in site.static_files] == [first.relative_path]


def test_source_order_changes_fingerprint(make_engine, write_source) -> None:
    write_source("a.js", "a")
    write_source("b.js", "b")
    engine = make_engine()

    forward = engine.build(AssetSpec.create(["a.js", "b.js"], "js"))
    backward = engine.build(AssetSpec.create(["b.js", "a.js"], "js"))

    assert forward.fingerprint != backward.fingerprint
    assert forward.content == "a\nb\n"
    assert backward.content == "b\na\n"
    assert len(engine.registry) == 2


def test_filename_derived_from_content_digest(make_engine, write_source) -> None:
    write_source("css/site.css", "body{}")
    bundle = make_engine().build(AssetSpec.create(["css/site.css"], "css"))

    assert bundle.digest == md5_hex("body{}\n")
    assert bundle.filename == f"{bundle.digest}.css"
    assert bundle.relative_path == f"/bundles/{bundle.digest}.css"


def test_compressed_output_is_cached_across_runs(make_engine, write_source, compress_calls, cache_dir: Path) -> None:
    write_source("a.js", "var a;")
    write_source("b.js", "var b;")
    settings = {"compress": {"js": "counting"}}

    first = make_engine(**settings).build(AssetSpec.create(["a.js", "b.js"], "js"))
    second = make_engine(**settings).build(AssetSpec.create(["a.js", "b.js"], "js"))

    assert compress_calls == ["js"]
    assert first.content == second.content == "var a;var b;"
    assert first.raw_content == "var a;\nvar b;\n"
    assert any(path.suffix == ".js" for path in cache_dir.iterdir())


def test_dev_mode_references_sources_without_merging(make_engine, write_source, renderer, compress_calls, site) -> None:
    write_source("a.js", "a")
    write_source("b.js", "b")
    engine = make_engine(dev=True, compress={"js": "counting"})

    markup = engine.render_sources(["a.js", "b.js"])

    assert markup == (
        "<script type='text/javascript' src='a.js'></script>\n"
        "<script type='text/javascript' src='b.js'></script>\n"
    )
    assert compress_calls == []
    assert renderer.calls == {}
    assert site.static_files == []
    assert next(iter(engine.registry)).write_enabled() is False


def test_explicit_name_force_rebuild_replaces_bundle(make_engine, write_source, site: Site) -> None:
    write_source("a.js", "one")
    engine = make_engine()

    first = engine.build(AssetSpec.create(["a.js"], "js", name="app.js"))
    write_source("a.js", "two")
    cached = engine.build(AssetSpec.create(["a.js"], "js", name="app.js"))
    rebuilt = engine.build(AssetSpec.create(["a.js"], "js", name="app.js", force=True))

    assert cached is first
    assert rebuilt.content == "two\n"
    assert rebuilt.filename == "app.js"
    assert engine.registry.named("app.js") is rebuilt
    assert len(engine.registry) == 1
    assert [item.relative_path for item in site.static_files] == ["/bundles/app.js"]


def test_remove_bundled_drops_static_copies(make_engine, write_source, site: Site) -> None:
    write_source("a.js", "a")
    write_source("other.txt", "keep")
    site.collect_static_files()
    engine = make_engine(remove_bundled=True)

    bundle = engine.build(AssetSpec.create(["a.js"], "js"))

    static = [item.relative_path for item in site.static_files if isinstance(item, StaticFile)]
    assert static == ["/other.txt"]
    assert bundle in site.static_files


def test_compression_failure_registers_nothing(make_engine, write_source, site: Site) -> None:
    write_source("a.js", "a")
    engine = make_engine(compress={"js": "sh -c 'exit 1'"})

    with pytest.raises(CompressionError):
        engine.build(AssetSpec.create(["a.js"], "js"))

    assert len(engine.registry) == 0
    assert site.static_files == []


def test_forced_name_rebuild_with_new_sources_replaces_output(make_engine, write_source, site: Site) -> None:
    write_source("a.js", "a")
    write_source("b.js", "b")
    engine = make_engine()

    first = engine.build(AssetSpec.create(["a.js"], "js", name="app.js", force=True))
    second = engine.build(AssetSpec.create(["b.js"], "js", name="app.js", force=True))

    assert first.fingerprint != second.fingerprint
    assert engine.registry.named("app.js") is second
    assert len(engine.registry) == 2
    outputs = [item for item in site.static_files if item.relative_path == "/bundles/app.js"]
    assert outputs == [second]
    assert second.content == "b\n"


def test_forced_name_rebuild_keeps_other_fingerprints(make_engine, write_source, renderer) -> None:
    write_source("a.js", "a")
    write_source("b.js", "b")
    engine = make_engine()

    engine.build(AssetSpec.create(["a.js"], "js"))
    engine.build(AssetSpec.create(["a.js"], "js", name="app.js", force=True))
    engine.build(AssetSpec.create(["b.js"], "js", name="app.js", force=True))
    again = engine.build(AssetSpec.create(["a.js"], "js"))

    assert renderer.calls["a.js"] == 2
    assert again.sources == ("a.js",)
    assert engine.registry.named("app.js").sources == ("b.js",)


def test_remove_bundled_handles_leading_slash_sources(make_engine, write_source, site: Site) -> None:
    write_source("js/a.js", "a")
    site.collect_static_files()
    engine = make_engine(remove_bundled=True)

    engine.render_sources(["/js/a.js"])

    assert [item for item in site.static_files if isinstance(item, StaticFile)] == []
    (bundle,) = engine.registry
    assert bundle.content == "a\n"
