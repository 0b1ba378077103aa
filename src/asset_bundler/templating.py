# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Minimal ``{{ variable }}`` substitution shared by markup and source rendering."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

_VARIABLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{\s*([A-Za-z_][\w-]*(?:\.[A-Za-z_][\w-]*)*)\s*\}\}")


def _lookup(variables: Mapping[str, Any], dotted: str) -> Any:
    current: Any = variables
    for part in dotted.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """Substitute ``{{ name }}`` and ``{{ name.key }}`` references in ``template``.

    Unknown variables render as an empty string. No other template syntax is
    interpreted.

    Args:
        template: Template text.
        variables: Values available for substitution; nested mappings are
            reachable with dotted names.

    Returns:
        str: Rendered text.
    """

    def _replace(match: re.Match[str]) -> str:
        value = _lookup(variables, match.group(1))
        return "" if value is None else str(value)

    return _VARIABLE_PATTERN.sub(_replace, template)


__all__ = ["render_template"]
