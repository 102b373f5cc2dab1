"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads templates from the
``smacss_gen/scaffolder/templates/`` directory.  Templated sources (``*.j2``)
are rendered with a context dictionary; every other file is a static source
that is read back as raw bytes for a verbatim copy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from smacss_gen.utils import humanize, slugify


class TemplateRenderError(Exception):
    """Raised when a template is missing or references an undefined placeholder."""

    def __init__(self, source_key: str, message: str) -> None:
        self.source_key = source_key
        super().__init__(f"{source_key}: {message}")


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders and reads template sources for project scaffolding.

    Rendering uses ``StrictUndefined``: a placeholder missing from the context
    raises ``TemplateRenderError`` instead of producing an empty string or
    leaving the placeholder text in the output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify
        self.env.filters["humanize"] = humanize

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"angular-app/index.html.j2"``).
            context: Dictionary of variables available inside the template.

        Raises:
            TemplateRenderError: The template does not exist, fails to parse,
                or uses a variable absent from *context*.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateError as exc:
            raise TemplateRenderError(template_path, exc.message or type(exc).__name__) from exc

    # -- Static sources ----------------------------------------------------

    def read_static(self, source_key: str) -> bytes:
        """Return the raw bytes of a static (verbatim-copy) source."""
        path = self.template_dir / source_key
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TemplateRenderError(source_key, f"cannot read static source ({exc.strerror})") from exc
