# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the bundle engine."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError, ConfigTemplateError

LOGGER = logging.getLogger(__name__)

CONFIG_SECTION: Final[str] = "asset_bundler"
SUPPORTED_TYPES: Final[tuple[str, ...]] = ("js", "css")

DEFAULT_MARKUP_TEMPLATES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "js": "<script type='text/javascript' src='{{url}}'></script>\n",
        "coffee": "<script type='text/coffeescript' src='{{url}}'></script>\n",
        "css": "<link rel='stylesheet' type='text/css' href='{{url}}' />\n",
        "less": "<link rel='stylesheet/less' type='text/css' href='{{url}}' />\n",
    },
)

CompressSelector = bool | str


class CompressConfig(BaseModel):
    """Per-type compression selectors.

    Each asset type maps to ``False`` (disabled), a named compressor plugin
    such as ``"yui"`` or ``"closure_advanced"``, or an external command
    template using the ``:infile`` / ``:outfile`` placeholders. Types other
    than ``js`` and ``css`` are accepted as extra fields.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    js: CompressSelector = False
    css: CompressSelector = False
    js_externs: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_selectors(self) -> CompressConfig:
        for asset_type, value in self.selectors().items():
            if value is True:
                raise ValueError(
                    f"compress.{asset_type} must be false, a compressor name or a command template",
                )
            if not isinstance(value, (bool, str)):
                raise ValueError(f"compress.{asset_type} must be a boolean or a string")
        return self

    def selectors(self) -> dict[str, CompressSelector]:
        """Return the raw selector for every configured asset type."""

        values: dict[str, CompressSelector] = {"js": self.js, "css": self.css}
        for key, value in (self.model_extra or {}).items():
            values[key] = value
        return values

    def selector(self, asset_type: str) -> str | None:
        """Return the backend identifier for ``asset_type`` or ``None`` when disabled."""

        value = self.selectors().get(asset_type, False)
        if isinstance(value, str) and value.strip():
            return value
        return None

    def serialized(self) -> str:
        """Return a stable textual form used when deriving compression cache keys."""

        return json.dumps(self.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))


class BundlerConfig(BaseModel):
    """Resolved ``asset_bundler`` configuration for one run."""

    model_config = ConfigDict(frozen=True)

    compile: dict[str, bool] = Field(default_factory=lambda: {"coffee": False, "less": False})
    compress: CompressConfig = Field(default_factory=CompressConfig)
    base_path: str = "/bundles/"
    server_url: str = ""
    cdn: str | None = None
    remove_bundled: bool = False
    dev: bool = False
    markup_templates: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MARKUP_TEMPLATES))
    named_bundles: dict[str, list[str]] = Field(default_factory=dict)
    cache_dir: Path | None = None
    remote_scheme: Literal["http", "https"] = "http"

    @field_validator("base_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        # Must start with "/" to compose with a server_url prefix and end
        # with "/" so the filename can be appended directly.
        if not value.startswith("/"):
            value = f"/{value}"
        return value if value.endswith("/") else f"{value}/"

    @field_validator("markup_templates", mode="before")
    @classmethod
    def _coerce_templates(cls, value: Any) -> dict[str, str]:
        if value is None:
            return dict(DEFAULT_MARKUP_TEMPLATES)
        if not isinstance(value, Mapping):
            raise ValueError("markup_templates must be a table of template strings")
        templates = dict(DEFAULT_MARKUP_TEMPLATES)
        for asset_type, template in value.items():
            if isinstance(template, str):
                templates[str(asset_type)] = template
                continue
            LOGGER.error("Asset Bundler - Error: %s", ConfigTemplateError(str(asset_type), template))
        return templates

    @model_validator(mode="before")
    @classmethod
    def _apply_cdn(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("cdn") and not data.get("server_url"):
            return {**data, "server_url": data["cdn"]}
        return data

    def template_for(self, asset_type: str) -> str:
        """Return the markup template for ``asset_type``.

        Raises:
            ConfigError: If neither the configuration nor the defaults define one.
        """

        template = self.markup_templates.get(asset_type) or DEFAULT_MARKUP_TEMPLATES.get(asset_type)
        if template is None:
            raise ConfigError(f"no markup template configured for '{asset_type}' bundles")
        return template

    def compress_enabled(self, asset_type: str) -> bool:
        """Return whether bundles of ``asset_type`` are compressed this run."""

        return not self.dev and self.compress.selector(asset_type) is not None


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override``."""

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def resolve_config(site_config: Mapping[str, Any]) -> BundlerConfig:
    """Build the run configuration from a host site configuration mapping.

    The ``asset_bundler`` section is merged over the defaults. A global
    ``dev`` key overrides the section's ``dev`` flag, and a truthy global
    ``watch`` or ``serving`` key forces dev mode on.

    Args:
        site_config: Whole host configuration mapping.

    Returns:
        BundlerConfig: Validated configuration value for this run.

    Raises:
        ConfigError: If the section is not a table or fails validation.
    """

    section = site_config.get(CONFIG_SECTION) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'{CONFIG_SECTION}' configuration must be a table")
    payload = deep_merge(BundlerConfig().model_dump(exclude={"markup_templates"}), section)
    if "dev" in site_config:
        payload["dev"] = bool(site_config["dev"])
    if site_config.get("watch") or site_config.get("serving"):
        payload["dev"] = True
    try:
        return BundlerConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "CONFIG_SECTION",
    "DEFAULT_MARKUP_TEMPLATES",
    "SUPPORTED_TYPES",
    "BundlerConfig",
    "CompressConfig",
    "CompressSelector",
    "deep_merge",
    "resolve_config",
]
