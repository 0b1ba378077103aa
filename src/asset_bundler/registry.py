# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run-scoped registry guaranteeing one build per source list."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from threading import RLock

from .assembler import BundleAssembler
from .bundle import AssetSpec, Bundle
from .cache import ContentAddressedCache
from .compression import Compressor
from .config import BundlerConfig
from .digest import md5_hex
from .interfaces import SiteHost
from .remote import is_remote

LOGGER = logging.getLogger(__name__)

CompressorFactory = Callable[[str, str], Compressor]


class BundleRegistry:
    """Build bundles on demand and memoise them by fingerprint.

    A bundle is built at most once per fingerprint for the lifetime of the
    registry unless the caller forces a rebuild. Named bundles are also
    indexed by name; a forced rebuild of a name with a different source list
    repoints the index and replaces the host output, while the earlier
    fingerprint stays registered for other callers of that list.
    """

    def __init__(
        self,
        *,
        config: BundlerConfig,
        site: SiteHost,
        assembler: BundleAssembler,
        cache: ContentAddressedCache,
        compressor_for: CompressorFactory,
    ) -> None:
        """Initialise an empty registry.

        Args:
            config: Run configuration.
            site: Host receiving built bundles as outputs.
            assembler: Assembler producing merged content.
            cache: Cache holding compressed bundle bodies.
            compressor_for: Factory returning the compressor for an asset type
                and fingerprint.
        """

        self._config = config
        self._site = site
        self._assembler = assembler
        self._cache = cache
        self._compressor_for = compressor_for
        self._bundles: dict[str, Bundle] = {}
        self._named: dict[str, str] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        return len(self._bundles)

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._bundles

    def __iter__(self) -> Iterator[Bundle]:
        return iter(tuple(self._bundles.values()))

    def get(self, fingerprint: str) -> Bundle | None:
        """Return the bundle registered under ``fingerprint`` if any."""

        return self._bundles.get(fingerprint)

    def named(self, name: str) -> Bundle | None:
        """Return the latest bundle built with the explicit ``name``."""

        fingerprint = self._named.get(name)
        return self._bundles.get(fingerprint) if fingerprint is not None else None

    def build(self, spec: AssetSpec) -> Bundle:
        """Return the bundle for ``spec``, building it when needed.

        Args:
            spec: Sources, type and naming of the requested bundle.

        Returns:
            Bundle: Existing bundle for the fingerprint or a newly built one.

        Raises:
            CompressionError: If compression of a new bundle fails.
        """

        fingerprint = spec.fingerprint
        with self._lock:
            existing = self._bundles.get(fingerprint)
            if existing is not None and not spec.force:
                return existing
            bundle = self._build(spec, fingerprint)
            self._store(spec, bundle)
            return bundle

    def _build(self, spec: AssetSpec, fingerprint: str) -> Bundle:
        base_path = self._config.base_path
        if self._config.dev and spec.name is None:
            return Bundle(
                sources=spec.sources,
                asset_type=spec.asset_type,
                filename="",
                raw_content="",
                content="",
                digest="",
                base_path=base_path,
                fingerprint=fingerprint,
                nomerge=True,
            )

        raw = self._assembler.assemble(spec.sources, spec.asset_type)
        digest = md5_hex(raw)
        filename = spec.name or f"{digest}.{spec.asset_type}"
        content = self._compress(raw, digest, spec.asset_type, fingerprint)
        bundle = Bundle(
            sources=spec.sources,
            asset_type=spec.asset_type,
            filename=filename,
            raw_content=raw,
            content=content,
            digest=digest,
            base_path=base_path,
            fingerprint=fingerprint,
        )
        self._site.add_output(bundle)
        if self._config.remove_bundled:
            self._site.discard_static_files(self._local_paths(spec.sources))
        LOGGER.debug("built bundle %s from %d source(s)", bundle.relative_path, len(spec.sources))
        return bundle

    def _compress(self, raw: str, digest: str, asset_type: str, fingerprint: str) -> str:
        if not self._config.compress_enabled(asset_type):
            return raw
        settings = f"{digest}{self._config.compress.serialized()}{str(self._config.dev).lower()}"
        key = f"{md5_hex(settings)}.{asset_type}"
        compressor = self._compressor_for(asset_type, fingerprint)
        return self._cache.get_or_put(key, lambda: compressor.compress(raw, asset_type))

    def _local_paths(self, sources: tuple[str, ...]) -> list[Path]:
        return [self._site.source / source.lstrip("/") for source in sources if not is_remote(source)]

    def _store(self, spec: AssetSpec, bundle: Bundle) -> None:
        if spec.name is not None:
            self._named[spec.name] = bundle.fingerprint
        self._bundles[bundle.fingerprint] = bundle


__all__ = ["BundleRegistry", "CompressorFactory"]
