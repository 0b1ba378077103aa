# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, configuration)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from ..config import BundlerConfig, resolve_config
from ..config_loader import ConfigLoader
from ..engine import BundleEngine
from ..errors import ConfigError
from ..logging import configure_logging
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn
from ..site import Site


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers respecting CLI emoji settings."""

    use_emoji: bool
    use_color: bool | None = None

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout verbatim."""

        typer.echo(message, nl=False)


def build_cli_logger(*, emoji: bool, verbose: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` and route engine diagnostics through Rich.

    Args:
        emoji: Whether output may include emoji glyphs.
        verbose: Whether debug diagnostics should be shown.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger honouring the emoji and colour preferences.
    """

    configure_logging(verbose=verbose, use_color=False if no_color else None)
    return CLILogger(use_emoji=emoji, use_color=False if no_color else None)


@dataclass(slots=True)
class SiteContext:
    """Site, configuration and engine prepared for one CLI invocation."""

    site: Site
    config: BundlerConfig
    engine: BundleEngine


def load_site_context(
    root: Path,
    *,
    config_path: Path | None,
    dev: bool | None,
    logger: CLILogger,
) -> SiteContext:
    """Load configuration for ``root`` and build the site and engine.

    Raises:
        CLIError: If the configuration is invalid.
    """

    overrides: dict[str, Any] = {}
    if dev is not None:
        overrides["dev"] = dev
    loader = ConfigLoader.for_root(root, site_config=config_path, overrides=overrides)
    try:
        site_config = loader.load()
        config = resolve_config(site_config)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc
    site = Site.from_config(root.resolve(), site_config)
    return SiteContext(site=site, config=config, engine=BundleEngine(site, config))


__all__ = ["CLIError", "CLILogger", "SiteContext", "build_cli_logger", "load_site_context"]
