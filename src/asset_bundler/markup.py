# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reference markup for built bundles."""

from __future__ import annotations

from .bundle import Bundle
from .config import BundlerConfig
from .templating import render_template


class MarkupRenderer:
    """Render the ``<script>`` / ``<link>`` markup that references a bundle."""

    def __init__(self, config: BundlerConfig) -> None:
        self._config = config

    def render(self, bundle: Bundle) -> str:
        """Return the markup for ``bundle``.

        Merged bundles produce one template application whose ``url`` is
        ``server_url + base_path + filename``. No-merge bundles produce one
        application per original source, each using the identifier verbatim.
        """

        template = self._config.template_for(bundle.asset_type)
        if bundle.nomerge:
            return "".join(render_template(template, {"url": source}) for source in bundle.sources)
        return render_template(template, {"url": f"{self._config.server_url}{bundle.url_path}"})


__all__ = ["MarkupRenderer"]
