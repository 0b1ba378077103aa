# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Minimal host site used when the engine runs outside a site generator."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

from .interfaces import OutputArtifact, SourceRenderer
from .templating import render_template

LOGGER = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER: Final[str] = "---"
DEFAULT_DESTINATION: Final[str] = "_site"
DEFAULT_PLUGINS_DIR: Final[str] = "_plugins"


def split_front_matter(text: str) -> tuple[dict[str, Any] | None, str]:
    """Split a leading YAML front matter block from ``text``.

    Returns:
        tuple[dict[str, Any] | None, str]: Parsed front matter (``None`` when
        absent) and the remaining body.
    """

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        return None, text
    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONT_MATTER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            try:
                parsed = yaml.safe_load(header) or {}
            except yaml.YAMLError as exc:
                LOGGER.warning("ignoring unparsable front matter: %s", exc)
                return None, text
            return (parsed if isinstance(parsed, dict) else {}), body
    return None, text


class SiteRenderer(SourceRenderer):
    """Read local sources, substituting variables for files with front matter.

    Files that start with a YAML front matter block are rendered with
    ``site`` (the site payload) and ``page`` (the front matter) available to
    ``{{ ... }}`` references; the front matter itself is stripped. Other
    files are returned verbatim.
    """

    def __init__(self, source: Path, payload: Mapping[str, Any] | None = None) -> None:
        self._source = source
        self._payload = dict(payload or {})

    def render(self, directory: str, filename: str) -> str:
        path = self._source / directory.lstrip("/") / filename
        text = path.read_text(encoding="utf-8")
        front_matter, body = split_front_matter(text)
        if front_matter is None:
            return text
        return render_template(body, {"site": self._payload, "page": front_matter})


@dataclass(frozen=True, slots=True)
class StaticFile:
    """A source file the host copies to the destination unchanged."""

    site_source: Path
    relative: str

    @property
    def source_path(self) -> Path:
        return self.site_source / self.relative

    @property
    def relative_path(self) -> str:
        return f"/{self.relative}"

    @property
    def path(self) -> str:
        return str(self.source_path)

    def destination(self, dest: Path) -> Path:
        return dest / self.relative

    def write_enabled(self) -> bool:
        return True

    def write(self, dest: Path) -> bool:
        target = self.destination(dest)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(self.source_path, target)
        return True


@dataclass(slots=True)
class Site:
    """Host site: source tree, destination tree and the outputs to write."""

    source: Path
    dest: Path
    plugins_dir: Path
    payload: dict[str, Any] = field(default_factory=dict)
    static_files: list[OutputArtifact] = field(default_factory=list)
    _renderer: SourceRenderer | None = None

    @classmethod
    def from_config(cls, root: Path, site_config: Mapping[str, Any]) -> Site:
        """Build a site rooted at ``root`` from the host configuration mapping.

        Recognised keys: ``source`` (default ``.``), ``destination`` (default
        ``_site``) and ``plugins_dir`` (default ``_plugins``, relative to the
        source). The whole mapping becomes the ``site`` template payload.
        """

        source = (root / str(site_config.get("source", "."))).resolve()
        dest = (root / str(site_config.get("destination", DEFAULT_DESTINATION))).resolve()
        plugins_dir = (source / str(site_config.get("plugins_dir", DEFAULT_PLUGINS_DIR))).resolve()
        return cls(source=source, dest=dest, plugins_dir=plugins_dir, payload=dict(site_config))

    @property
    def renderer(self) -> SourceRenderer:
        if self._renderer is None:
            self._renderer = SiteRenderer(self.source, self.payload)
        return self._renderer

    def add_output(self, artifact: OutputArtifact) -> None:
        """Register ``artifact``, replacing any output at the same relative path."""

        self.static_files = [item for item in self.static_files if item.relative_path != artifact.relative_path]
        self.static_files.append(artifact)

    def discard_static_files(self, paths: Collection[Path]) -> None:
        """Drop static copies whose source path equals one of ``paths``."""

        resolved = {path.resolve() for path in paths}
        self.static_files = [
            item
            for item in self.static_files
            if not (isinstance(item, StaticFile) and item.source_path.resolve() in resolved)
        ]

    def iter_source_files(self) -> Iterator[str]:
        """Yield source-relative paths of files the host would copy verbatim.

        Entries whose name starts with ``_`` or ``.`` are skipped at every
        level, as is the destination tree.
        """

        for path in sorted(self.source.rglob("*")):
            if not path.is_file():
                continue
            if path.is_relative_to(self.dest):
                continue
            relative = path.relative_to(self.source)
            if any(part.startswith(("_", ".")) for part in relative.parts):
                continue
            yield relative.as_posix()

    def collect_static_files(self) -> int:
        """Register every copyable source file as a :class:`StaticFile`."""

        count = 0
        for relative in self.iter_source_files():
            self.static_files.append(StaticFile(site_source=self.source, relative=relative))
            count += 1
        return count

    def write(self) -> int:
        """Write every registered output and return how many were written."""

        written = 0
        for artifact in self.static_files:
            if artifact.write_enabled() and artifact.write(self.dest):
                written += 1
        return written


__all__ = ["Site", "SiteRenderer", "StaticFile", "split_front_matter"]
