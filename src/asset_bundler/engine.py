# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bundle engine facade wiring cache, fetcher, assembler, registry and markup."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .assembler import BundleAssembler
from .bundle import AssetSpec, Bundle
from .cache import ContentAddressedCache, default_cache_dir
from .compression import Compressor, select_compressor
from .config import BundlerConfig, resolve_config
from .errors import ConfigError
from .frontend import asset_type_of, collect_sources, expand_globs, group_by_type, parse_source_list
from .interfaces import SiteHost
from .markup import MarkupRenderer
from .registry import BundleRegistry
from .remote import Opener, RemoteFetcher, urlopen_body

LOGGER = logging.getLogger(__name__)


class BundleEngine:
    """Entry point the host uses to turn bundle declarations into markup.

    One engine, and therefore one :class:`BundleRegistry`, should live for one
    site build. The configuration is fixed at construction time.
    """

    def __init__(self, site: SiteHost, config: BundlerConfig, *, opener: Opener = urlopen_body) -> None:
        """Wire the engine for ``site``.

        Args:
            site: Host site providing sources and receiving outputs.
            config: Configuration resolved for this run.
            opener: Callable performing remote GET requests.
        """

        self.site = site
        self.config = config
        self.cache = ContentAddressedCache(config.cache_dir or default_cache_dir(site.plugins_dir))
        self.fetcher = RemoteFetcher(self.cache, opener=opener)
        self.assembler = BundleAssembler(site.renderer, self.fetcher, remote_scheme=config.remote_scheme)
        self.registry = BundleRegistry(
            config=config,
            site=site,
            assembler=self.assembler,
            cache=self.cache,
            compressor_for=self._compressor_for,
        )
        self.markup = MarkupRenderer(config)

    @classmethod
    def from_site_config(cls, site: SiteHost, site_config: Mapping[str, Any]) -> BundleEngine:
        """Build an engine after resolving ``site_config``."""

        return cls(site, resolve_config(site_config))

    def _compressor_for(self, asset_type: str, fingerprint: str) -> Compressor:
        return select_compressor(
            self.config,
            asset_type,
            work_dir=self.cache.directory,
            source_dir=self.site.source,
            tag=fingerprint,
        )

    def build(self, spec: AssetSpec) -> Bundle:
        """Build (or reuse) the bundle for ``spec``."""

        return self.registry.build(spec)

    def render_sources(self, entries: Sequence[str], *, glob: bool = False) -> str:
        """Return markup for ``entries`` grouped into one bundle per type.

        Args:
            entries: Source identifiers or, when ``glob`` is true, glob patterns.
            glob: Expand ``entries`` as glob patterns relative to the source.

        Returns:
            str: Concatenated markup of every bundle.
        """

        sources = expand_globs(self.site.source, entries) if glob else collect_sources(self.site.source, entries)
        markup: list[str] = []
        for asset_type, files in group_by_type(sources).items():
            bundle = self.registry.build(AssetSpec.create(files, asset_type))
            markup.append(self.markup.render(bundle))
        return "".join(markup)

    def bundle_markup(self, declaration: str, *, glob: bool = False) -> str:
        """Parse a YAML bundle declaration and return its markup."""

        return self.render_sources(parse_source_list(declaration), glob=glob)

    def dev_assets(self, content: str) -> str:
        """Return ``content`` in dev mode and nothing otherwise."""

        return content if self.config.dev else ""

    def build_named_bundles(self, *, write: bool = True) -> list[Bundle]:
        """Force-build every ``named_bundles`` entry.

        Args:
            write: Write each bundle to the site destination immediately.

        Returns:
            list[Bundle]: Bundles in configuration order.

        Raises:
            ConfigError: If a bundle name carries no extension to derive its type.
        """

        built: list[Bundle] = []
        for name, sources in self.config.named_bundles.items():
            asset_type = asset_type_of(name)
            if asset_type is None:
                raise ConfigError(f"Cannot determine bundle type (js or css): {name}")
            bundle = self.registry.build(AssetSpec.create(sources, asset_type, name=name, force=True))
            if write:
                bundle.write(self.site.dest)
            LOGGER.info("built named bundle %s", bundle.relative_path)
            built.append(bundle)
        return built


__all__ = ["BundleEngine"]
