# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Registry of named compressor plugins.

Plugins are addressed by the identifier used in the ``compress`` section of
the configuration (``yui``, ``closure``, ``closure_advanced``). Third-party
packages contribute more through the ``asset_bundler.compressors``
entry-point group; each entry point resolves to a plugin factory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from pathlib import Path
from typing import Final, Protocol, TypeAlias, cast

from ..errors import CompressionError
from ..process import CommandOptions, SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)

COMPRESSOR_PLUGIN_GROUP: Final[str] = "asset_bundler.compressors"


@dataclass(frozen=True, slots=True)
class PluginOptions:
    """Inputs a plugin factory may use when building a compressor."""

    source_dir: Path
    externs: tuple[str, ...] = ()


class CompressorPlugin(Protocol):
    """In-process compressor addressed by name."""

    name: str
    supported_types: frozenset[str]

    def compress(self, content: str, asset_type: str) -> str:
        """Return ``content`` compressed; only called for supported types."""
        ...


PluginFactory: TypeAlias = Callable[[PluginOptions], CompressorPlugin]


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """Registered plugin metadata."""

    identifier: str
    factory: PluginFactory


_PLUGIN_REGISTRY: dict[str, PluginEntry] = {}
_ENTRY_POINTS_LOADED = False


def register_compressor(identifier: str, factory: PluginFactory, *, replace: bool = False) -> None:
    """Register ``factory`` under ``identifier``.

    Args:
        identifier: Name used in the ``compress`` configuration.
        factory: Callable building the plugin from :class:`PluginOptions`.
        replace: Allow overriding an existing registration.

    Raises:
        ValueError: If ``identifier`` is taken by a different factory and
            ``replace`` is ``False``.
    """

    existing = _PLUGIN_REGISTRY.get(identifier)
    if existing is not None and existing.factory is not factory and not replace:
        raise ValueError(f"compressor '{identifier}' is already registered")
    _PLUGIN_REGISTRY[identifier] = PluginEntry(identifier=identifier, factory=factory)


def unregister_compressor(identifier: str) -> None:
    """Remove the plugin registered under ``identifier`` if present."""

    _PLUGIN_REGISTRY.pop(identifier, None)


def get_compressor_factory(identifier: str) -> PluginFactory | None:
    """Return the factory registered for ``identifier``, loading entry points once."""

    _load_entry_point_plugins()
    entry = _PLUGIN_REGISTRY.get(identifier)
    return entry.factory if entry is not None else None


def _select_entry_points(entries: EntryPoints | Mapping[str, Sequence[EntryPoint]], group: str) -> Iterable[EntryPoint]:
    if isinstance(entries, Mapping):
        return entries.get(group, ())
    return entries.select(group=group)


def _load_entry_point_plugins() -> None:
    global _ENTRY_POINTS_LOADED
    if _ENTRY_POINTS_LOADED:
        return
    _ENTRY_POINTS_LOADED = True
    for entry in _select_entry_points(metadata.entry_points(), COMPRESSOR_PLUGIN_GROUP):
        try:
            factory = cast(PluginFactory, entry.load())
        except (AttributeError, ImportError, ValueError, RuntimeError) as exc:
            LOGGER.warning("unable to load compressor plugin %s: %s", entry.name, exc)
            continue
        if entry.name in _PLUGIN_REGISTRY:
            LOGGER.warning("compressor plugin %s shadows a built-in and was ignored", entry.name)
            continue
        register_compressor(entry.name, factory)


@dataclass(slots=True)
class _PipeToolPlugin:
    """Plugin that pipes content through a compressor executable."""

    name: str
    supported_types: frozenset[str]
    command: tuple[str, ...]
    type_flags: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def compress(self, content: str, asset_type: str) -> str:
        argv = [*self.command, *self.type_flags.get(asset_type, ())]
        completed = run_command(argv, options=CommandOptions(input=content))
        return completed.stdout or ""


def yui_plugin(options: PluginOptions) -> CompressorPlugin:
    """Build the YUI Compressor plugin (JavaScript and CSS)."""

    del options
    return _PipeToolPlugin(
        name="yui",
        supported_types=frozenset({"js", "css"}),
        command=("yuicompressor",),
        type_flags={"js": ("--type", "js"), "css": ("--type", "css")},
    )


def closure_plugin(options: PluginOptions) -> CompressorPlugin:
    """Build the Closure Compiler plugin with its default optimisations."""

    del options
    return _PipeToolPlugin(
        name="closure",
        supported_types=frozenset({"js"}),
        command=("google-closure-compiler",),
    )


def closure_advanced_plugin(options: PluginOptions) -> CompressorPlugin:
    """Build the Closure Compiler plugin in advanced mode.

    Extern files are resolved against the site source directory.
    """

    command = ["google-closure-compiler", "--compilation_level", "ADVANCED_OPTIMIZATIONS"]
    for extern in options.externs:
        command.extend(["--externs", str(options.source_dir / extern)])
    return _PipeToolPlugin(
        name="closure_advanced",
        supported_types=frozenset({"js"}),
        command=tuple(command),
    )


class NamedPluginCompressor:
    """Adapt a :class:`CompressorPlugin` to the compressor contract."""

    def __init__(self, plugin: CompressorPlugin) -> None:
        self._plugin = plugin
        self.name = plugin.name

    def compress(self, content: str, asset_type: str) -> str:
        """Compress supported types; other types pass through unchanged.

        Raises:
            CompressionError: If the plugin fails.
        """

        if asset_type not in self._plugin.supported_types:
            return content
        try:
            return self._plugin.compress(content, asset_type)
        except (SubprocessExecutionError, OSError, ValueError, RuntimeError) as exc:
            raise CompressionError(self.name, asset_type, exc) from exc


register_compressor("yui", yui_plugin)
register_compressor("closure", closure_plugin)
register_compressor("closure_advanced", closure_advanced_plugin)


__all__ = [
    "COMPRESSOR_PLUGIN_GROUP",
    "CompressorPlugin",
    "NamedPluginCompressor",
    "PluginEntry",
    "PluginFactory",
    "PluginOptions",
    "closure_advanced_plugin",
    "closure_plugin",
    "get_compressor_factory",
    "register_compressor",
    "unregister_compressor",
    "yui_plugin",
]
