# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compression backends and backend selection."""

from __future__ import annotations

from pathlib import Path

from ..config import BundlerConfig
from .base import Compressor, NoOpCompressor
from .command import ExternalCommandCompressor
from .plugins import (
    NamedPluginCompressor,
    PluginOptions,
    get_compressor_factory,
    register_compressor,
    unregister_compressor,
)


def select_compressor(
    config: BundlerConfig,
    asset_type: str,
    *,
    work_dir: Path,
    source_dir: Path,
    tag: str = "bundle",
) -> Compressor:
    """Return the compressor configured for ``asset_type``.

    Dev mode and disabled selectors yield :class:`NoOpCompressor`. A selector
    naming a registered plugin yields that plugin; any other string is treated
    as an external command template.

    Args:
        config: Run configuration.
        asset_type: Bundle type tag.
        work_dir: Directory for temp files used by command templates.
        source_dir: Site source directory used to resolve extern files.
        tag: Label embedded in temp file names.

    Returns:
        Compressor: Backend to run over the merged content.
    """

    if not config.compress_enabled(asset_type):
        return NoOpCompressor()
    selector = config.compress.selector(asset_type)
    if selector is None:  # pragma: no cover - guarded by compress_enabled
        return NoOpCompressor()
    factory = get_compressor_factory(selector)
    if factory is not None:
        options = PluginOptions(source_dir=source_dir, externs=config.compress.js_externs)
        return NamedPluginCompressor(factory(options))
    return ExternalCommandCompressor(selector, work_dir=work_dir, tag=tag)


__all__ = [
    "Compressor",
    "ExternalCommandCompressor",
    "NamedPluginCompressor",
    "NoOpCompressor",
    "PluginOptions",
    "register_compressor",
    "select_compressor",
    "unregister_compressor",
]
