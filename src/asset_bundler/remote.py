# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Best-effort download of remote bundle sources with disk memoisation."""

from __future__ import annotations

import http.client
import logging
import re
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Final

from .cache import ContentAddressedCache
from .digest import md5_hex
from .errors import RemoteFetchError

LOGGER = logging.getLogger(__name__)

REMOTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(https?:)?//", re.IGNORECASE)
_SCHEME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?:", re.IGNORECASE)
_USER_AGENT: Final[str] = "asset-bundler/1.0"

Opener = Callable[[str], bytes]


def is_remote(source: str) -> bool:
    """Return whether ``source`` refers to an ``http(s)`` or protocol-relative URL."""

    return REMOTE_PATTERN.match(source) is not None


def normalize_remote_uri(source: str, *, scheme: str = "http") -> str:
    """Rewrite ``source`` so every remote request uses ``scheme``.

    Args:
        source: Remote identifier, either absolute or protocol-relative.
        scheme: Canonical transport used for every request.

    Returns:
        str: Absolute URI using the canonical scheme.
    """

    if source.startswith("//"):
        return f"{scheme}:{source}"
    return _SCHEME_PATTERN.sub(f"{scheme}:", source, count=1)


def urlopen_body(uri: str) -> bytes:
    """Perform one blocking GET for ``uri`` and return the response body."""

    request = urllib.request.Request(uri, headers={"User-Agent": _USER_AGENT})
    with urllib.request.urlopen(request) as response:  # nosec B310 - scheme normalised to http(s)
        return response.read()


class RemoteFetcher:
    """Fetch remote sources once, memoising bodies in the content cache."""

    def __init__(self, cache: ContentAddressedCache, *, opener: Opener = urlopen_body) -> None:
        """Initialise the fetcher.

        Args:
            cache: Cache used to persist downloaded bodies.
            opener: Callable performing the actual GET; injectable for tests.
        """

        self._cache = cache
        self._opener = opener

    @staticmethod
    def cache_key(uri: str, asset_type: str) -> str:
        """Return the cache key for the body of ``uri``."""

        return f"remote.{md5_hex(uri)}.{asset_type}"

    def fetch(self, uri: str, asset_type: str) -> str:
        """Return the body of ``uri``, downloading it on a cache miss.

        Failures are logged and yield an empty string; they are not cached,
        so the next run tries again.

        Args:
            uri: Absolute URI to download.
            asset_type: Asset type used as the cache file extension.

        Returns:
            str: Response body, or ``""`` when the download failed.
        """

        key = self.cache_key(uri, asset_type)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        LOGGER.info("Asset Bundler - Downloading: %s", uri)
        try:
            body = self._opener(uri).decode("utf-8", errors="replace")
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            LOGGER.error("Asset Bundler - Error: %s", RemoteFetchError(uri, exc))
            return ""
        self._cache.put(key, body)
        return body


__all__ = [
    "REMOTE_PATTERN",
    "Opener",
    "RemoteFetcher",
    "is_remote",
    "normalize_remote_uri",
    "urlopen_body",
]
