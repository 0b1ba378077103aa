# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the bundle commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import CompressionError, ConfigError
from .options import (
    CONFIG_OPTION,
    DEV_OPTION,
    EMOJI_OPTION,
    GLOB_OPTION,
    NO_COLOR_OPTION,
    ROOT_OPTION,
    VERBOSE_OPTION,
    WRITE_OPTION,
)
from .shared import CLIError, build_cli_logger, load_site_context

app = typer.Typer(
    name="asset-bundler",
    help="Merge, compress and fingerprint web asset bundles.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command("build")
def build_command(
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    dev: DEV_OPTION = None,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Build every configured named bundle and write the site outputs."""

    logger = build_cli_logger(emoji=emoji, verbose=verbose, no_color=no_color)
    try:
        context = load_site_context(root, config_path=config, dev=dev, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    context.site.collect_static_files()
    try:
        bundles = context.engine.build_named_bundles(write=False)
    except (CompressionError, ConfigError) as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    if not bundles:
        logger.warn("No named_bundles configured; only static files were copied")
    written = context.site.write()
    for bundle in bundles:
        logger.info(f"{bundle.relative_path} <- {', '.join(bundle.sources)}")
    logger.ok(f"Built {len(bundles)} named bundle(s); wrote {written} file(s) to {context.site.dest}")


@app.command("markup")
def markup_command(
    declaration: Annotated[Path, typer.Argument(help="YAML file listing bundle sources.")],
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    dev: DEV_OPTION = None,
    glob: GLOB_OPTION = False,
    write: WRITE_OPTION = True,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Bundle the sources declared in DECLARATION and print the reference markup."""

    logger = build_cli_logger(emoji=emoji, verbose=verbose, no_color=no_color)
    try:
        context = load_site_context(root, config_path=config, dev=dev, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    try:
        text = declaration.read_text(encoding="utf-8")
    except OSError as exc:
        logger.fail(f"Unable to read {declaration}: {exc}")
        raise typer.Exit(code=1) from exc

    try:
        markup = context.engine.bundle_markup(text, glob=glob)
    except CompressionError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc

    if write:
        context.site.write()
    logger.echo(markup)


@app.command("clean-cache")
def clean_cache_command(
    root: ROOT_OPTION = Path("."),
    config: CONFIG_OPTION = None,
    emoji: EMOJI_OPTION = True,
    no_color: NO_COLOR_OPTION = False,
) -> None:
    """Remove cached remote downloads and compressed bundles."""

    logger = build_cli_logger(emoji=emoji, no_color=no_color)
    try:
        context = load_site_context(root, config_path=config, dev=None, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    removed = context.engine.cache.clear()
    logger.ok(f"Removed {removed} cache entr{'y' if removed == 1 else 'ies'} from {context.engine.cache.directory}")


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
