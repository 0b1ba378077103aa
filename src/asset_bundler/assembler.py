# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concatenation of rendered and downloaded sources into one bundle body."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Sequence

from .errors import MissingSourceError
from .interfaces import SourceRenderer
from .remote import RemoteFetcher, is_remote, normalize_remote_uri

LOGGER = logging.getLogger(__name__)


class BundleAssembler:
    """Merge an ordered source list into a single text buffer."""

    def __init__(self, renderer: SourceRenderer, fetcher: RemoteFetcher, *, remote_scheme: str = "http") -> None:
        """Initialise the assembler.

        Args:
            renderer: Host renderer used for local sources.
            fetcher: Fetcher used for remote sources.
            remote_scheme: Canonical scheme every remote request is rewritten to.
        """

        self._renderer = renderer
        self._fetcher = fetcher
        self._remote_scheme = remote_scheme

    def assemble(self, sources: Sequence[str], asset_type: str) -> str:
        """Return the merged content of ``sources`` in list order.

        Every contribution is terminated by a newline, so two sources never
        share a line. Sources that fail to load and empty remote bodies
        contribute nothing.

        Args:
            sources: Ordered local paths and remote URLs.
            asset_type: Bundle type tag, used for remote cache naming.

        Returns:
            str: Merged content.
        """

        parts: list[str] = []
        for source in sources:
            chunk = self._contribution(source, asset_type)
            if chunk is None:
                continue
            parts.append(chunk if chunk.endswith("\n") else f"{chunk}\n")
        return "".join(parts)

    def _contribution(self, source: str, asset_type: str) -> str | None:
        if is_remote(source):
            body = self._fetcher.fetch(normalize_remote_uri(source, scheme=self._remote_scheme), asset_type)
            return body or None
        directory, filename = posixpath.split(source)
        try:
            return self._renderer.render(directory, filename)
        except FileNotFoundError:
            LOGGER.error("Asset Bundler Error - %s", MissingSourceError(source))
            return None
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Asset Bundler Error - unable to read %s, ignoring: %s", source, exc)
            return None


__all__ = ["BundleAssembler"]
