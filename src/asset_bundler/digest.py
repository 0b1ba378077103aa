# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Digest helpers used for fingerprints, filenames and cache keys."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def md5_hex(text: str) -> str:
    """Return the hexadecimal MD5 digest of ``text`` encoded as UTF-8."""

    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()


def fingerprint(sources: Iterable[str]) -> str:
    """Return the dedup key for an ordered source list.

    The identifiers are joined without a separator, so ordering is part of
    the identity.
    """

    return md5_hex("".join(sources))


__all__ = ["fingerprint", "md5_hex"]
