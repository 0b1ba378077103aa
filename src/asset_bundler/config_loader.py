# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered loading of the host site configuration from TOML documents."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from .config import CONFIG_SECTION, BundlerConfig, deep_merge, resolve_config
from .errors import ConfigError

SITE_CONFIG_FILE: Final[str] = "_config.toml"
PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
DEFAULT_INCLUDE_KEY: Final[str] = "include"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class ConfigSource(Protocol):
    """A named fragment of site configuration."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment, or an empty mapping."""
        ...


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {key: _expand_env_value(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


class MappingConfigSource:
    """Configuration supplied directly as a mapping (CLI overrides, tests)."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self.name = name
        self._data = dict(data)

    def load(self) -> Mapping[str, Any]:
        return self._data


class TomlConfigSource:
    """Load configuration from a TOML document with ``include`` support.

    ``include`` may name one file or a list of files, resolved relative to
    the including document; included fragments are merged first so the
    including document wins. ``$VAR`` / ``${VAR}`` references in string
    values are expanded from the environment.
    """

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        resolved = path.resolve()
        if resolved in stack:
            chain = " -> ".join(str(entry) for entry in (*stack, resolved))
            raise ConfigError(f"Circular include detected: {chain}")
        try:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Configuration at {path} is not valid TOML: {exc}") from exc
        if not isinstance(data, MutableMapping):  # pragma: no cover - tomllib always yields a table
            raise ConfigError(f"Configuration at {path} must be a table")
        document: dict[str, Any] = dict(data)
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, resolved.parent):
            merged = deep_merge(merged, self._load(include_path, (*stack, resolved)))
        merged = deep_merge(merged, document)
        return _expand_env_value(merged, self._env)

    @staticmethod
    def _coerce_includes(raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
            raise ConfigError(f"Unsupported include declaration: {raw!r}")
        return [path if (path := Path(item)).is_absolute() else base_dir / path for item in raw]


class PyProjectConfigSource(TomlConfigSource):
    """Read the ``[tool.asset_bundler]`` table of ``pyproject.toml``."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, name=str(path))

    def load(self) -> Mapping[str, Any]:
        tool_section = super().load().get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(CONFIG_SECTION) or tool_section.get(CONFIG_SECTION.replace("_", "-"))
        if not isinstance(section, Mapping):
            return {}
        return {CONFIG_SECTION: dict(section)}


class ConfigLoader:
    """Merge configuration sources in order; later sources win."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        root: Path,
        *,
        site_config: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigLoader:
        """Build a loader for the project at ``root``.

        Precedence, lowest first: ``pyproject.toml`` ``[tool.asset_bundler]``,
        the site configuration file (``_config.toml`` by default), then
        ``overrides``.
        """

        root = root.resolve()
        sources: list[ConfigSource] = []
        pyproject = root / PYPROJECT_FILE
        if pyproject.exists():
            sources.append(PyProjectConfigSource(pyproject))
        config_path = site_config if site_config is not None else root / SITE_CONFIG_FILE
        sources.append(TomlConfigSource(config_path))
        if overrides:
            sources.append(MappingConfigSource(overrides))
        return cls(sources)

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        return tuple(self._sources)

    def load(self) -> dict[str, Any]:
        """Return the merged site configuration mapping."""

        merged: dict[str, Any] = {}
        for source in self._sources:
            if fragment := source.load():
                merged = deep_merge(merged, fragment)
        return merged

    def load_bundler_config(self) -> BundlerConfig:
        """Return the resolved bundle engine configuration."""

        return resolve_config(self.load())


__all__ = [
    "SITE_CONFIG_FILE",
    "ConfigLoader",
    "ConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
