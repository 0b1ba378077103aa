# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the bundle engine."""

from __future__ import annotations


class AssetBundlerError(Exception):
    """Base class for every error raised by asset-bundler."""


class ConfigError(AssetBundlerError):
    """Raised when configuration input is invalid."""


class ConfigTemplateError(AssetBundlerError):
    """Raised when a configured markup template is not a usable string."""

    def __init__(self, asset_type: str, value: object) -> None:
        """Initialise the error with the offending template entry.

        Args:
            asset_type: Asset type whose template could not be used.
            value: Raw configuration value supplied for the template.
        """

        super().__init__(
            f"markup_templates.{asset_type} is not recognised as a template string "
            f"(got {type(value).__name__}); reverting to the default template",
        )
        self.asset_type = asset_type
        self.value = value


class SpecParseError(AssetBundlerError):
    """Raised when a bundle source list cannot be parsed into a list."""


class MissingSourceError(AssetBundlerError):
    """Raised when a local source file referenced by a bundle does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File: {path} not found, ignoring...")
        self.path = path


class RemoteFetchError(AssetBundlerError):
    """Raised when downloading a remote source fails."""

    def __init__(self, uri: str, reason: object) -> None:
        super().__init__(f"There was a problem downloading {uri}: {reason}")
        self.uri = uri
        self.reason = reason


class CompressionError(AssetBundlerError):
    """Raised when a compressor fails; fatal to the bundle being built."""

    def __init__(self, backend: str, asset_type: str, reason: object) -> None:
        """Initialise the error with the failing backend metadata.

        Args:
            backend: Identifier of the compressor that failed.
            asset_type: Asset type being compressed.
            reason: Underlying failure description or exception.
        """

        super().__init__(f"compression with '{backend}' failed for {asset_type} bundle: {reason}")
        self.backend = backend
        self.asset_type = asset_type
        self.reason = reason


__all__ = [
    "AssetBundlerError",
    "CompressionError",
    "ConfigError",
    "ConfigTemplateError",
    "MissingSourceError",
    "RemoteFetchError",
    "SpecParseError",
]
