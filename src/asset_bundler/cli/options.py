# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer option declarations shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Site root containing _config.toml."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Site configuration file (defaults to <root>/_config.toml)."),
]
DEV_OPTION = Annotated[
    bool | None,
    typer.Option("--dev/--no-dev", help="Force dev mode on or off, overriding the configuration."),
]
GLOB_OPTION = Annotated[
    bool,
    typer.Option("--glob", help="Treat declaration entries as glob patterns."),
]
WRITE_OPTION = Annotated[
    bool,
    typer.Option("--write/--no-write", help="Write generated bundles to the destination."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug diagnostics."),
]
NO_COLOR_OPTION = Annotated[
    bool,
    typer.Option("--no-color", help="Disable coloured output."),
]

__all__ = [
    "CONFIG_OPTION",
    "DEV_OPTION",
    "EMOJI_OPTION",
    "GLOB_OPTION",
    "NO_COLOR_OPTION",
    "ROOT_OPTION",
    "VERBOSE_OPTION",
    "WRITE_OPTION",
]
