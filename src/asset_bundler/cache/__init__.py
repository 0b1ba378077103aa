# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Content-addressed cache used for remote bodies and compressed bundles."""

from __future__ import annotations

from .store import CACHE_DIR_NAME, BlobProducer, ContentAddressedCache, default_cache_dir

__all__ = ["CACHE_DIR_NAME", "BlobProducer", "ContentAddressedCache", "default_cache_dir"]
