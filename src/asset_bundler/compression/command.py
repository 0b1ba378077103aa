# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""External command compressor driven by ``:infile`` / ``:outfile`` templates."""

from __future__ import annotations

import logging
import os
import shlex
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..errors import CompressionError
from ..process import CommandOptions, SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)

INFILE_PLACEHOLDER: Final[str] = ":infile"
OUTFILE_PLACEHOLDER: Final[str] = ":outfile"
_ENCODING: Final[str] = "utf-8"


def native_path(path: Path) -> str:
    """Return ``path`` normalised for the current platform's separators."""

    return os.path.normpath(str(path))


def substitute_placeholders(
    tokens: Sequence[str],
    *,
    infile: Path | None,
    outfile: Path | None,
) -> list[str]:
    """Replace the placeholders inside each command token.

    Only ``:infile`` and ``:outfile`` are recognised. The command is executed
    as an argument list, so the substituted paths are never re-parsed by a
    shell and need no further quoting.

    Args:
        tokens: Command template split into arguments.
        infile: Path substituted for ``:infile`` when allocated.
        outfile: Path substituted for ``:outfile`` when allocated.

    Returns:
        list[str]: Arguments ready for execution.
    """

    rendered: list[str] = []
    for token in tokens:
        if infile is not None:
            token = token.replace(INFILE_PLACEHOLDER, native_path(infile))
        if outfile is not None:
            token = token.replace(OUTFILE_PLACEHOLDER, native_path(outfile))
        rendered.append(token)
    return rendered


class ExternalCommandCompressor:
    """Compress content by running a configured command line.

    * With ``:infile`` the content is written to a temp file whose path
      replaces the placeholder; otherwise the content is piped to stdin.
    * With ``:outfile`` the command's output is read back from a temp file;
      otherwise stdout becomes the new content.

    Temp files live in ``work_dir`` and are removed once the command
    finishes, whether it succeeded or not.
    """

    def __init__(self, template: str, *, work_dir: Path, tag: str = "bundle") -> None:
        """Initialise the compressor.

        Args:
            template: Command line template.
            work_dir: Directory receiving the temp files.
            tag: Stable label (usually the bundle fingerprint) embedded in
                temp file names.
        """

        self.name = template
        self._template = template
        self._work_dir = work_dir
        self._tag = tag

    def _allocate(self, role: str, asset_type: str) -> Path:
        self._work_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(dir=self._work_dir, prefix=f"{role}.{self._tag}.", suffix=f".{asset_type}")
        os.close(fd)
        return Path(name)

    def compress(self, content: str, asset_type: str) -> str:
        """Run the command template over ``content``.

        Raises:
            CompressionError: If the template is malformed, the executable is
                missing, or the command exits with a non-zero status.
        """

        try:
            tokens = shlex.split(self._template)
        except ValueError as exc:
            raise CompressionError(self.name, asset_type, exc) from exc
        if not tokens:
            raise CompressionError(self.name, asset_type, "empty command template")

        uses_infile = any(INFILE_PLACEHOLDER in token for token in tokens)
        uses_outfile = any(OUTFILE_PLACEHOLDER in token for token in tokens)
        used_files: list[Path] = []
        try:
            infile: Path | None = None
            outfile: Path | None = None
            if uses_infile:
                infile = self._allocate("infile", asset_type)
                used_files.append(infile)
                infile.write_text(content, encoding=_ENCODING)
            if uses_outfile:
                outfile = self._allocate("outfile", asset_type)
                used_files.append(outfile)

            argv = substitute_placeholders(tokens, infile=infile, outfile=outfile)
            options = CommandOptions(discard_stdin=infile is not None)
            if infile is None:
                options = options.with_input(content)
            LOGGER.debug("compress command=%s type=%s", argv[0], asset_type)
            completed = run_command(argv, options=options)

            if outfile is not None:
                return outfile.read_text(encoding=_ENCODING)
            return completed.stdout or ""
        except (SubprocessExecutionError, OSError, ValueError) as exc:
            raise CompressionError(self.name, asset_type, exc) from exc
        finally:
            for path in used_files:
                path.unlink(missing_ok=True)


__all__ = [
    "INFILE_PLACEHOLDER",
    "OUTFILE_PLACEHOLDER",
    "ExternalCommandCompressor",
    "native_path",
    "substitute_placeholders",
]
