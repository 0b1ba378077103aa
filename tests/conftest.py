# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from pathlib import Path

import pytest

from asset_bundler.site import Site, SiteRenderer


class CountingRenderer(SiteRenderer):
    """Site renderer that records how often each source is rendered."""

    def __init__(self, source: Path) -> None:
        super().__init__(source)
        self.calls: Counter[str] = Counter()

    def render(self, directory: str, filename: str) -> str:
        self.calls[f"{directory}/{filename}" if directory else filename] += 1
        return super().render(directory, filename)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def write_source(site_root: Path) -> Callable[[str, str], Path]:
    """Return a helper writing ``content`` to ``relative`` under the site root."""

    def _write(relative: str, content: str) -> Path:
        path = site_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def renderer(site_root: Path) -> CountingRenderer:
    return CountingRenderer(site_root)


@pytest.fixture
def site(site_root: Path, tmp_path: Path, renderer: CountingRenderer) -> Site:
    return Site(
        source=site_root,
        dest=tmp_path / "_site",
        plugins_dir=site_root / "_plugins",
        _renderer=renderer,
    )


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"
