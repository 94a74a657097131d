"""Utilities for rendering tutorial segments into markdown and highlighted code."""

from __future__ import annotations

import enum
import re
import typing as typ
from html import escape
from pathlib import PurePath

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from tutorial_pages._constants import (
    HOST_SUFFIX,
    LITERATE_LEXER_FILENAME,
    LITERATE_SUFFIX,
)

from .models import RenderedSegment

if typ.TYPE_CHECKING:
    from pygments.lexer import Lexer

    from tutorial_pages.segmenter import Segment

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


class SourceKind(enum.Enum):
    """Kinds of source file an example directory may contain."""

    LITERATE = "literate"
    HOST = "host"
    OTHER = "other"

    @classmethod
    def from_path(cls, path: str | PurePath) -> SourceKind:
        """Return the kind implied by the file suffix of ``path``."""
        suffix = PurePath(path).suffix
        if suffix == LITERATE_SUFFIX:
            return cls.LITERATE
        if suffix == HOST_SUFFIX:
            return cls.HOST
        return cls.OTHER

    @property
    def runnable(self) -> bool:
        """Whether sources of this kind can be sent to the playground."""
        return self is not SourceKind.OTHER


class HtmlContentRenderer:
    """Render documentation and code lines with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML.

        A fresh ``Markdown`` instance is used per call so concurrent page builds
        never share parser state.
        """
        md = Markdown(extensions=list(MARKDOWN_EXTENSIONS), output_format="html")
        return md.convert(text)

    def code_block(self, code: str, filename: str) -> str:
        """Render ``code`` into highlighted HTML using the lexer for ``filename``.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        filename : str
            Name of the file the snippet came from. Literate sources borrow the
            host language lexer; unknown suffixes fall back to plain text.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.
        """
        lexer = self._select_lexer(filename)
        html = highlight(code, lexer, self._formatter)
        language = lexer.aliases[0] if lexer.aliases else "text"
        return self._attach_language_attribute(html, language)

    def render_segment(
        self, segment: Segment, source_kind: SourceKind, filename: str
    ) -> RenderedSegment:
        """Render one segment's documentation and code fragments.

        Parameters
        ----------
        segment : Segment
            Segment produced by :func:`tutorial_pages.segmenter.segment`.
        source_kind : SourceKind
            Kind of the file the segment belongs to; runnable kinds keep the
            raw code text.
        filename : str
            File name used to select the highlighting grammar.

        Returns
        -------
        RenderedSegment
            The segment with its rendered fragments attached.
        """
        docs_html = None
        code_html = None
        run_code = None
        if segment.docs:
            docs_html = self.markdown("\n".join(segment.docs))
        if segment.code:
            code = "\n".join(segment.code)
            code_html = self.code_block(code, filename)
            if source_kind.runnable:
                run_code = code
        return RenderedSegment(
            segment=segment,
            docs_html=docs_html,
            code_html=code_html,
            run_code=run_code,
        )

    @staticmethod
    def _select_lexer(filename: str) -> Lexer:
        """Return the lexer for ``filename`` or the plain-text fallback."""
        lookup = filename
        if SourceKind.from_path(filename) is SourceKind.LITERATE:
            lookup = LITERATE_LEXER_FILENAME
        try:
            return get_lexer_for_filename(lookup, stripnl=False)
        except ClassNotFound:
            return TextLexer(stripnl=False)

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["HtmlContentRenderer", "SourceKind"]
