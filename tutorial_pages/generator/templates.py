"""Load the Jinja templates used for tutorial pages exactly once."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from tutorial_pages._constants import (
    EXAMPLE_TEMPLATE,
    INDEX_TEMPLATE,
    NOT_FOUND_TEMPLATE,
)

if typ.TYPE_CHECKING:
    from tutorial_pages.catalog import ExampleDescriptor

    from .models import ExampleModel

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class TemplateLoadError(RuntimeError):
    """Raised when a required template is missing at startup."""


class TemplateRenderer:
    """Render tutorial pages from templates loaded at construction time."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        site_name: str = "Go+ Tutorial",
        playground_url: str = "https://play.goplus.org/",
    ) -> None:
        """Initialize the Jinja environment and eagerly load every template.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        site_name : str, optional
            Site name shown in page titles and headers.
        playground_url : str, optional
            Endpoint that runnable examples are submitted to.

        Raises
        ------
        TemplateLoadError
            If any of the page templates cannot be found.
        """
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.site_name = site_name
        self.playground_url = playground_url
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
            auto_reload=False,
        )
        try:
            self._example = self.env.get_template(EXAMPLE_TEMPLATE)
            self._index = self.env.get_template(INDEX_TEMPLATE)
            self._not_found = self.env.get_template(NOT_FOUND_TEMPLATE)
        except TemplateNotFound as exc:
            msg = f"Template '{exc.name}' not found in {self.templates_dir}"
            raise TemplateLoadError(msg) from exc

    def render_example(self, model: ExampleModel) -> bytes:
        """Render an example page model to UTF-8 bytes."""
        return self._render(self._example, example=model)

    def render_index(self, examples: list[ExampleDescriptor]) -> bytes:
        """Render the landing page listing ``examples`` in catalog order."""
        return self._render(self._index, examples=examples)

    def render_not_found(self) -> bytes:
        """Render the fixed not-found page."""
        return self._render(self._not_found)

    def _render(self, template: typ.Any, **context: typ.Any) -> bytes:
        html = template.render(
            site_name=self.site_name,
            playground_url=self.playground_url,
            **context,
        )
        if not html.endswith("\n"):
            html += "\n"
        return html.encode("utf-8")


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateLoadError", "TemplateRenderer"]
