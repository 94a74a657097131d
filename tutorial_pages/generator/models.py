"""Shared dataclasses used by the tutorial page pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from tutorial_pages.catalog import ExampleDescriptor
    from tutorial_pages.segmenter import Segment


@dc.dataclass(frozen=True, slots=True)
class RenderedSegment:
    """A segment together with its rendered HTML fragments.

    Attributes
    ----------
    segment : Segment
        Source segment the fragments were derived from.
    docs_html : str or None
        Markdown rendering of the documentation lines; ``None`` when the
        segment carries no documentation.
    code_html : str or None
        Highlighted code block; ``None`` when the segment carries no code.
    run_code : str or None
        Raw code joined with newlines, kept only for runnable source kinds
        and emitted as the code cell's ``data-code`` attribute.
    """

    segment: Segment
    docs_html: str | None = None
    code_html: str | None = None
    run_code: str | None = None

    @property
    def docs(self) -> tuple[str, ...]:
        return self.segment.docs

    @property
    def code(self) -> tuple[str, ...]:
        return self.segment.code


@dc.dataclass(frozen=True, slots=True)
class ExampleFile:
    """Rendered segments for one file of an example directory.

    Attributes
    ----------
    name : str
        File name within the example directory.
    segments : tuple[RenderedSegment, ...]
        Rendered segments in source order.
    run_code : str or None
        Full file text for runnable sources; drives the "try it" link.
    """

    name: str
    segments: tuple[RenderedSegment, ...]
    run_code: str | None = None

    @property
    def runnable(self) -> bool:
        return self.run_code is not None


@dc.dataclass(frozen=True, slots=True)
class ExampleModel:
    """Structured data passed to the example page template."""

    descriptor: ExampleDescriptor
    previous: ExampleDescriptor | None
    next: ExampleDescriptor | None
    files: tuple[ExampleFile, ...]
    pygments_css: str


__all__ = ["ExampleFile", "ExampleModel", "RenderedSegment"]
