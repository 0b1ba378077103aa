# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compressor contract and the pass-through implementation."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class Compressor(Protocol):
    """Transform the merged content of one bundle.

    Implementations either return transformed content or raise
    :class:`~asset_bundler.errors.CompressionError`; they never return the
    input unchanged to signal a failure.
    """

    name: str

    @abstractmethod
    def compress(self, content: str, asset_type: str) -> str:
        """Return ``content`` compressed for ``asset_type``.

        Args:
            content: Merged bundle content.
            asset_type: Bundle type tag such as ``"js"`` or ``"css"``.

        Returns:
            str: Compressed content.
        """
        raise NotImplementedError


class NoOpCompressor:
    """Pass content through unchanged."""

    name = "noop"

    def compress(self, content: str, asset_type: str) -> str:
        del asset_type
        return content


__all__ = ["Compressor", "NoOpCompressor"]
