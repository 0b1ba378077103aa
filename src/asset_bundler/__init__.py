# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bundle web assets into fingerprinted, optionally compressed files."""

from __future__ import annotations

from importlib import metadata

from .bundle import AssetSpec, Bundle
from .config import BundlerConfig, resolve_config
from .engine import BundleEngine
from .errors import AssetBundlerError

__all__ = [
    "AssetBundlerError",
    "AssetSpec",
    "Bundle",
    "BundleEngine",
    "BundlerConfig",
    "__version__",
    "resolve_config",
]

try:
    __version__ = metadata.version("asset-bundler")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
