# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Disk-backed, content-addressed blob cache."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Final

LOGGER = logging.getLogger(__name__)

CACHE_DIR_NAME: Final[str] = "_asset_bundler_cache"
_ENCODING: Final[str] = "utf-8"

BlobProducer = Callable[[], str]


def default_cache_dir(plugins_dir: Path) -> Path:
    """Return the cache directory that sits beside the host's plugin directory."""

    return (plugins_dir / ".." / CACHE_DIR_NAME).resolve()


class ContentAddressedCache:
    """Persist text blobs keyed by a digest of their logical input.

    Entries are never overwritten: a key that already has a blob on disk is
    served as-is, so the key must capture every input that influences the
    blob. Blobs are written to a temporary sibling first and moved into place
    atomically, so a reader never observes a partially written entry.
    """

    def __init__(self, directory: Path) -> None:
        """Initialise the cache rooted at ``directory``.

        Args:
            directory: Directory holding the cache blobs. Created on first use.
        """

        self._dir = directory

    @property
    def directory(self) -> Path:
        """Return the cache directory, creating it when missing."""

        self._dir.mkdir(parents=True, exist_ok=True)
        return self._dir

    def path_for(self, key: str) -> Path:
        """Return the blob path used for ``key``.

        Args:
            key: Cache key; used verbatim as the file name, so it must not
                contain path separators.

        Returns:
            Path: Location of the blob for ``key``.

        Raises:
            ValueError: If ``key`` is empty or would escape the cache directory.
        """

        if not key or key in {".", ".."} or "/" in key or (os.sep != "/" and os.sep in key):
            raise ValueError(f"invalid cache key: {key!r}")
        return self._dir / key

    def contains(self, key: str) -> bool:
        """Return whether a readable blob exists for ``key``."""

        return self.path_for(key).is_file()

    def get(self, key: str) -> str | None:
        """Return the blob stored for ``key`` or ``None`` on a miss."""

        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding=_ENCODING)

    def put(self, key: str, content: str) -> Path:
        """Persist ``content`` under ``key`` unless a blob is already stored.

        Args:
            key: Cache key naming the blob.
            content: Text to persist.

        Returns:
            Path: Location of the stored blob.
        """

        target = self.path_for(key)
        if target.is_file():
            return target
        directory = self.directory
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding=_ENCODING, newline="") as handle:
                handle.write(content)
            os.replace(tmp_name, target)
        finally:
            Path(tmp_name).unlink(missing_ok=True)
        return target

    def get_or_put(self, key: str, producer: BlobProducer) -> str:
        """Return the blob for ``key``, producing and persisting it on a miss.

        A hit never calls ``producer``. When ``producer`` raises, nothing is
        stored and the exception propagates.

        Args:
            key: Cache key naming the blob.
            producer: Zero-argument callable generating the blob content.

        Returns:
            str: Cached or freshly produced content.
        """

        cached = self.get(key)
        if cached is not None:
            LOGGER.debug("cache hit key=%s", key)
            return cached
        content = producer()
        self.put(key, content)
        LOGGER.debug("cache store key=%s bytes=%d", key, len(content))
        return content

    def clear(self) -> int:
        """Remove every blob in the cache directory and return how many were removed."""

        if not self._dir.is_dir():
            return 0
        removed = 0
        for child in self._dir.iterdir():
            if not child.is_file():
                continue
            try:
                child.unlink()
            except OSError:
                LOGGER.warning("unable to remove cache entry %s", child)
                continue
            removed += 1
        return removed


__all__ = ["CACHE_DIR_NAME", "BlobProducer", "ContentAddressedCache", "default_cache_dir"]
