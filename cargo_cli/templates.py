"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads the fixed Jinja2 templates
shipped in ``cargo_cli/templates/`` and renders them with the project
context.  The templates only ever reference the ``name`` binding; no control
flow, partials or escaping are used.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .catalog import LicenseAssets
from .errors import TemplateError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the catalog's Jinja2 templates.

    Rendering is deterministic: the same template and context always produce
    the same text.  Any Jinja2 failure (missing template, bad syntax, unknown
    binding) is a programmer error in the catalog and surfaces as
    ``TemplateError``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"clap/main.rs.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Cannot render template {template_path!r}: {exc}") from exc

    def render_optional(
        self, template_path: str | None, context: dict[str, Any]
    ) -> str | None:
        """Render *template_path*, or return ``None`` when there is no template."""
        if template_path is None:
            return None
        return self.render(template_path, context)

    def render_source(
        self,
        template_path: str,
        license_assets: LicenseAssets,
        context: dict[str, Any],
    ) -> str:
        """Render a Rust source template prefixed with the license header."""
        body = self.render(template_path, context)
        if license_assets.has_license and license_assets.header_template:
            return self.render(license_assets.header_template, context) + body
        return body
