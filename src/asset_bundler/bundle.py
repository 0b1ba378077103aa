# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value types describing bundle requests and built bundles."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .digest import fingerprint


@dataclass(frozen=True, slots=True)
class AssetSpec:
    """Ordered sources of one type that should become a single bundle."""

    sources: tuple[str, ...]
    asset_type: str
    name: str | None = None
    force: bool = False

    @classmethod
    def create(
        cls,
        sources: Iterable[str],
        asset_type: str,
        *,
        name: str | None = None,
        force: bool = False,
    ) -> AssetSpec:
        """Build a spec from any iterable of source identifiers."""

        return cls(sources=tuple(sources), asset_type=asset_type.lower(), name=name, force=force)

    @property
    def fingerprint(self) -> str:
        """Return the dedup key of the ordered source list."""

        return fingerprint(self.sources)


@dataclass(frozen=True, slots=True)
class Bundle:
    """Built bundle; also the output artifact the host writes to disk.

    ``content`` holds the final (possibly compressed) text and
    ``raw_content`` the merged text before compression. No-merge bundles,
    built in dev mode without an explicit name, carry no content and are
    never written; their markup references the original sources.
    """

    sources: tuple[str, ...]
    asset_type: str
    filename: str
    raw_content: str
    content: str
    digest: str
    base_path: str
    fingerprint: str
    nomerge: bool = False

    @property
    def relative_path(self) -> str:
        """Return the bundle path relative to the destination root."""

        return f"{self.base_path.rstrip('/')}/{self.filename}"

    @property
    def path(self) -> str:
        return self.relative_path

    @property
    def url_path(self) -> str:
        """Return ``base_path`` joined with ``filename`` as used in markup."""

        return f"{self.base_path}{self.filename}"

    def destination(self, dest: Path) -> Path:
        """Return the absolute output path beneath ``dest``."""

        return dest.joinpath(*[part for part in self.base_path.split("/") if part], self.filename)

    def write_enabled(self) -> bool:
        return not self.nomerge

    def write(self, dest: Path) -> bool:
        """Write the bundle content beneath ``dest``.

        Args:
            dest: Destination root of the site build.

        Returns:
            bool: ``True`` once the file is written; ``False`` for no-merge
            bundles, which have nothing to write.
        """

        if not self.write_enabled():
            return False
        target = self.destination(dest)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.content.encode("utf-8"))
        return True


__all__ = ["AssetSpec", "Bundle"]
