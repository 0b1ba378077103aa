# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the subprocess wrapper."""

from __future__ import annotations

import pytest

from asset_bundler.process import CommandOptions, SubprocessExecutionError, run_command


def test_run_command_feeds_stdin() -> None:
    completed = run_command(["cat"], options=CommandOptions().with_input("payload"))

    assert completed.stdout == "payload"


def test_run_command_raises_on_failure() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(["sh", "-c", "echo oops >&2; exit 4"])

    assert excinfo.value.returncode == 4
    assert "oops" in (excinfo.value.stderr or "")


def test_run_command_without_check_returns_status() -> None:
    completed = run_command(["sh", "-c", "exit 2"], options=CommandOptions(check=False))

    assert completed.returncode == 2


def test_missing_executable_raises() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["asset-bundler-no-such-tool"])
    with pytest.raises(ValueError):
        run_command([])
