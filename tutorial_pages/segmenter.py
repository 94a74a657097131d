r"""Split literate source files into ordered documentation/code segments.

This module powers the tutorial renderer by classifying every source line as
documentation, code, or blank and grouping consecutive runs into
:class:`Segment` objects. Comment lines (``//``) and markdown headings become
prose; everything else keeps its original indentation so code renders exactly
as written.

Example
-------
>>> from tutorial_pages.segmenter import parse_segments
>>> segments = parse_segments("// Say hello\nprintln \"hi\"\n")
>>> segments[0].docs
('Say hello',)
>>> segments[0].code
('println "hi"', '')
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import (
    COMMENT_MARKER,
    HEADING_DEMOTION,
    HEADING_MARKER,
    TAB_REPLACEMENT,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class LineKind(enum.Enum):
    """Classification of a single source line."""

    NONE = "none"
    CODE = "code"
    DOC = "doc"
    BLANK = "blank"


@dc.dataclass(frozen=True, slots=True)
class Segment:
    """One documentation block followed by one code block.

    Attributes
    ----------
    docs : tuple[str, ...]
        Markdown lines with comment markers stripped; empty entries mark
        paragraph breaks.
    code : tuple[str, ...]
        Tab-normalized source lines with their original indentation.
    """

    docs: tuple[str, ...] = ()
    code: tuple[str, ...] = ()


@dc.dataclass(slots=True)
class _OpenSegment:
    """Mutable accumulator used while a file is being segmented."""

    docs: list[str] = dc.field(default_factory=list)
    code: list[str] = dc.field(default_factory=list)

    def freeze(self) -> Segment:
        return Segment(docs=tuple(self.docs), code=tuple(self.code))


def normalize_tabs(line: str) -> str:
    """Replace every tab in ``line`` with a fixed run of spaces."""
    return line.replace("\t", TAB_REPLACEMENT)


def classify_line(line: str) -> tuple[str, LineKind]:
    """Return the documentation content and kind of an already normalized line.

    Parameters
    ----------
    line : str
        A single source line with tabs already expanded.

    Returns
    -------
    tuple[str, LineKind]
        The stripped content (comment marker removed, headings demoted) and
        the line's kind. For ``CODE`` lines the content is the trimmed text;
        callers keep the untrimmed line instead.
    """
    text = line.strip()
    if text.startswith(COMMENT_MARKER):
        return text.removeprefix(COMMENT_MARKER).removeprefix(" "), LineKind.DOC
    if text.startswith(HEADING_MARKER):
        return HEADING_DEMOTION + text, LineKind.DOC
    if not text:
        return text, LineKind.BLANK
    return text, LineKind.CODE


def segment(lines: cabc.Iterable[str]) -> list[Segment]:
    """Group normalized source lines into ordered segments.

    A documentation run directly followed by code shares one segment, while
    documentation that follows code always opens a new one. Blank lines join
    whichever run is open and leading blank lines are dropped.

    Parameters
    ----------
    lines : Iterable[str]
        Source lines with tabs already normalized.

    Returns
    -------
    list[Segment]
        Segments in source order.
    """
    segments: list[_OpenSegment] = []
    current: _OpenSegment | None = None
    last_kind = LineKind.NONE
    for line in lines:
        content, kind = classify_line(line)
        if kind is LineKind.DOC or (
            kind is LineKind.BLANK and last_kind is LineKind.DOC
        ):
            if last_kind is not LineKind.DOC or current is None:
                current = _OpenSegment()
                segments.append(current)
            current.docs.append(content)
            last_kind = LineKind.DOC
        elif kind is LineKind.CODE or last_kind is LineKind.CODE:
            if current is None:
                current = _OpenSegment()
                segments.append(current)
            current.code.append(line)
            last_kind = LineKind.CODE
    return [open_segment.freeze() for open_segment in segments]


def parse_segments(source: str) -> list[Segment]:
    """Split a whole file into lines, normalize tabs once, and segment it."""
    return segment([normalize_tabs(line) for line in source.split("\n")])


__all__ = [
    "LineKind",
    "Segment",
    "classify_line",
    "normalize_tabs",
    "parse_segments",
    "segment",
]
