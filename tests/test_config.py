# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for bundle configuration resolution."""

from __future__ import annotations

import logging

import pytest

from asset_bundler.config import DEFAULT_MARKUP_TEMPLATES, BundlerConfig, resolve_config
from asset_bundler.errors import ConfigError


def test_defaults() -> None:
    config = resolve_config({})

    assert config.base_path == "/bundles/"
    assert config.server_url == ""
    assert config.dev is False
    assert config.remove_bundled is False
    assert config.compress.selector("js") is None
    assert config.compile == {"coffee": False, "less": False}
    assert config.markup_templates == dict(DEFAULT_MARKUP_TEMPLATES)
    assert config.remote_scheme == "http"


@pytest.mark.parametrize(("raw", "expected"), [("assets", "/assets/"), ("/assets", "/assets/"), ("/a/b/", "/a/b/")])
def test_base_path_is_normalised(raw: str, expected: str) -> None:
    assert resolve_config({"asset_bundler": {"base_path": raw}}).base_path == expected


def test_cdn_is_an_alias_for_server_url() -> None:
    assert resolve_config({"asset_bundler": {"cdn": "https://cdn.example.com"}}).server_url == "https://cdn.example.com"
    explicit = resolve_config({"asset_bundler": {"cdn": "https://cdn", "server_url": "https://origin"}})
    assert explicit.server_url == "https://origin"


def test_global_dev_overrides_section() -> None:
    assert resolve_config({"dev": False, "asset_bundler": {"dev": True}}).dev is False
    assert resolve_config({"dev": True}).dev is True


@pytest.mark.parametrize("flag", ["watch", "serving"])
def test_watch_and_serving_force_dev(flag: str) -> None:
    assert resolve_config({flag: True, "dev": False}).dev is True


def test_non_string_template_falls_back_to_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        config = resolve_config({"asset_bundler": {"markup_templates": {"js": 42, "css": "<css {{url}}>"}}})

    assert config.markup_templates["js"] == DEFAULT_MARKUP_TEMPLATES["js"]
    assert config.markup_templates["css"] == "<css {{url}}>"
    assert "markup_templates.js" in caplog.text


def test_compress_true_is_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_config({"asset_bundler": {"compress": {"js": True}}})


def test_section_must_be_a_table() -> None:
    with pytest.raises(ConfigError):
        resolve_config({"asset_bundler": ["not", "a", "table"]})


def test_compression_disabled_in_dev() -> None:
    config = BundlerConfig.model_validate({"compress": {"js": "yui", "css": False}})

    assert config.compress_enabled("js") is True
    assert config.compress_enabled("css") is False
    assert config.model_copy(update={"dev": True}).compress_enabled("js") is False


def test_serialized_compress_settings_are_stable() -> None:
    first = BundlerConfig.model_validate({"compress": {"css": "yui", "js": "closure"}})
    second = BundlerConfig.model_validate({"compress": {"js": "closure", "css": "yui"}})

    assert first.compress.serialized() == second.compress.serialized()
    assert first.compress.serialized() != BundlerConfig().compress.serialized()


def test_extra_types_accept_selectors() -> None:
    config = BundlerConfig.model_validate({"compress": {"less": "lessc :infile"}})

    assert config.compress.selector("less") == "lessc :infile"
