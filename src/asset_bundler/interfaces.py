# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Contracts between the bundle engine and its host site."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Collection
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceRenderer(Protocol):
    """Render one local source file within the host site's context."""

    @abstractmethod
    def render(self, directory: str, filename: str) -> str:
        """Return the rendered content of ``directory/filename``.

        Args:
            directory: Directory portion of the source identifier, relative to
                the site source root.
            filename: File name portion of the source identifier.

        Returns:
            str: File content with embedded template directives substituted.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        raise NotImplementedError


@runtime_checkable
class OutputArtifact(Protocol):
    """Describe anything the host can write into its destination tree."""

    @property
    @abstractmethod
    def relative_path(self) -> str:
        """Return the artifact path relative to the destination root."""
        raise NotImplementedError

    @property
    @abstractmethod
    def path(self) -> str:
        """Return the path the host uses to identify the artifact."""
        raise NotImplementedError

    @abstractmethod
    def destination(self, dest: Path) -> Path:
        """Return the absolute output path beneath ``dest``."""
        raise NotImplementedError

    @abstractmethod
    def write_enabled(self) -> bool:
        """Return whether the host should write this artifact."""
        raise NotImplementedError

    @abstractmethod
    def write(self, dest: Path) -> bool:
        """Write the artifact beneath ``dest`` and return ``True`` on success."""
        raise NotImplementedError


@runtime_checkable
class SiteHost(Protocol):
    """Host site capabilities the engine relies on."""

    source: Path
    dest: Path
    plugins_dir: Path

    @property
    @abstractmethod
    def renderer(self) -> SourceRenderer:
        """Return the renderer used for local sources."""
        raise NotImplementedError

    @abstractmethod
    def add_output(self, artifact: OutputArtifact) -> None:
        """Register ``artifact`` as a generated output to be written."""
        raise NotImplementedError

    @abstractmethod
    def discard_static_files(self, paths: Collection[Path]) -> None:
        """Drop directly-emitted static copies whose source path is in ``paths``."""
        raise NotImplementedError


__all__ = ["OutputArtifact", "SiteHost", "SourceRenderer"]
