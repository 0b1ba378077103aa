# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn bundle declarations into ordered, typed source lists."""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Final

import yaml

from .config import SUPPORTED_TYPES
from .errors import MissingSourceError, SpecParseError
from .remote import is_remote

LOGGER = logging.getLogger(__name__)

_EXTENSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.([^.]+)$")


def parse_source_list(text: str) -> list[str]:
    """Parse a YAML bundle declaration into a list of source identifiers.

    A declaration that is not valid YAML, or does not describe a list, is
    logged and treated as an empty list.

    Args:
        text: YAML document, typically a block sequence of paths and URLs.

    Returns:
        list[str]: Source identifiers in declaration order.
    """

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        LOGGER.error("Asset Bundler - Error: %s", SpecParseError(f"Problem parsing a YAML bundle\n{text}\n\n{exc}"))
        return []
    if not isinstance(document, list):
        LOGGER.error("Asset Bundler - Error: %s", SpecParseError(f"YAML bundle is not an Array\n{text}"))
        return []
    return [str(item) for item in document if item is not None]


def asset_type_of(source: str) -> str | None:
    """Return the lower-cased extension of ``source`` or ``None`` when it has none."""

    match = _EXTENSION_PATTERN.search(posixpath.basename(source))
    return match.group(1).lower() if match else None


def collect_sources(source_dir: Path, entries: Iterable[str]) -> list[str]:
    """Keep remote URLs and existing local files, logging the rest.

    Local entries whose file name starts with a dot are ignored.
    """

    kept: list[str] = []
    for entry in entries:
        if is_remote(entry):
            kept.append(entry)
            continue
        path = source_dir / entry.lstrip("/")
        if not posixpath.basename(entry).startswith(".") and path.is_file():
            kept.append(entry)
            continue
        LOGGER.error("Asset Bundler Error - %s", MissingSourceError(str(path)))
    return kept


def expand_globs(source_dir: Path, patterns: Iterable[str]) -> list[str]:
    """Expand glob patterns relative to ``source_dir`` into source-relative paths.

    Matches keep the order of the patterns and, within one pattern, sorted
    order. Dot-files and directories are skipped.
    """

    expanded: list[str] = []
    for pattern in patterns:
        for match in sorted(source_dir.glob(pattern.lstrip("/"))):
            if match.name.startswith(".") or not match.is_file():
                continue
            relative = match.relative_to(source_dir).as_posix()
            if relative not in expanded:
                expanded.append(relative)
    return expanded


def group_by_type(entries: Iterable[str]) -> dict[str, list[str]]:
    """Group sources by supported asset type, preserving first-seen order."""

    groups: dict[str, list[str]] = {}
    for entry in entries:
        asset_type = asset_type_of(entry)
        if asset_type is None or asset_type not in SUPPORTED_TYPES:
            continue
        groups.setdefault(asset_type, []).append(entry)
    return groups


__all__ = [
    "asset_type_of",
    "collect_sources",
    "expand_globs",
    "group_by_type",
    "parse_source_list",
]
