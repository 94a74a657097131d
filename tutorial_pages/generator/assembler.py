"""Assemble every file of a tutorial example into one rendered page.

:class:`ExampleAssembler` reads each file in an example directory, segments it
with :func:`tutorial_pages.segmenter.parse_segments`, renders the segments with
:class:`~tutorial_pages.generator.renderer.HtmlContentRenderer`, and hands the
resulting :class:`~tutorial_pages.generator.models.ExampleModel` to the
template engine. A failure anywhere aborts the whole page; no partial page is
ever returned.

Example
-------
>>> from pathlib import Path
>>> from tutorial_pages.catalog import build_catalog
>>> from tutorial_pages.generator import ExampleAssembler, TemplateRenderer
>>> root = Path("tutorial")  # doctest: +SKIP
>>> catalog = build_catalog(root)  # doctest: +SKIP
>>> assembler = ExampleAssembler(root, catalog, TemplateRenderer())  # doctest: +SKIP
>>> page = assembler.assemble(catalog[0])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ

from tutorial_pages.segmenter import parse_segments

from .models import ExampleFile, ExampleModel
from .renderer import HtmlContentRenderer, SourceKind

if typ.TYPE_CHECKING:
    from pathlib import Path

    from tutorial_pages.catalog import Catalog, ExampleDescriptor

    from .templates import TemplateRenderer


class ExampleBuildError(RuntimeError):
    """Raised when an example page cannot be read or rendered."""


class ExampleAssembler:
    """Turn an example directory into the bytes of its rendered page."""

    def __init__(
        self,
        root: Path,
        catalog: Catalog,
        templates: TemplateRenderer,
        *,
        renderer: HtmlContentRenderer | None = None,
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        root : Path
            Tutorial root containing the ``NN-Title`` example directories.
        catalog : Catalog
            Catalog used to resolve previous/next navigation.
        templates : TemplateRenderer
            Template engine that produces the final HTML.
        renderer : HtmlContentRenderer, optional
            Segment renderer; defaults to one using the ``monokai`` style.
        """
        self.root = root
        self.catalog = catalog
        self.templates = templates
        self.renderer = renderer or HtmlContentRenderer()

    def assemble(self, descriptor: ExampleDescriptor) -> bytes:
        """Render the page for ``descriptor``.

        Raises
        ------
        ExampleBuildError
            If the directory or any of its files cannot be read or rendered.
        """
        directory = self.root / descriptor.name
        model = ExampleModel(
            descriptor=descriptor,
            previous=self.catalog.previous(descriptor),
            next=self.catalog.next(descriptor),
            files=tuple(self.parse_example(directory)),
            pygments_css=self.renderer.stylesheet,
        )
        try:
            return self.templates.render_example(model)
        except Exception as exc:
            msg = f"Failed to render page for example '{descriptor.name}': {exc}"
            raise ExampleBuildError(msg) from exc

    def parse_example(self, directory: Path) -> list[ExampleFile]:
        """Parse and render every regular file in ``directory`` by name."""
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            msg = f"Unable to list example directory '{directory}': {exc}"
            raise ExampleBuildError(msg) from exc
        return [self.parse_file(entry) for entry in entries if entry.is_file()]

    def parse_file(self, source_path: Path) -> ExampleFile:
        """Segment and render one source file."""
        try:
            content = source_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Unable to read '{source_path}': {exc}"
            raise ExampleBuildError(msg) from exc

        source_kind = SourceKind.from_path(source_path)
        try:
            segments = tuple(
                self.renderer.render_segment(segment, source_kind, source_path.name)
                for segment in parse_segments(content)
            )
        except Exception as exc:
            msg = f"Failed to render '{source_path}': {exc}"
            raise ExampleBuildError(msg) from exc
        return ExampleFile(
            name=source_path.name,
            segments=segments,
            run_code=content if source_kind.runnable else None,
        )


__all__ = ["ExampleAssembler", "ExampleBuildError"]
