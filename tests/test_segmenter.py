"""Unit tests for the literate source segmenter.

These tests pin down line classification and the grouping rules that decide
where one documentation/code segment ends and the next begins: documentation
followed by code shares a segment, code followed by documentation starts a new
one, and blank lines join whichever run is open.

Usage
-----
Run ``pytest tests/test_segmenter.py -v``. No fixtures beyond pytest's
built-ins are required.
"""

from __future__ import annotations

import pytest

from tutorial_pages.segmenter import (
    LineKind,
    Segment,
    classify_line,
    normalize_tabs,
    parse_segments,
    segment,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("// Title", ("Title", LineKind.DOC)),
        ("//Title", ("Title", LineKind.DOC)),
        ("//  indented prose", (" indented prose", LineKind.DOC)),
        ("    // nested comment", ("nested comment", LineKind.DOC)),
        ("# Heading", ("### Heading", LineKind.DOC)),
        ("## Sub heading", ("#### Sub heading", LineKind.DOC)),
        ("", ("", LineKind.BLANK)),
        ("    ", ("", LineKind.BLANK)),
        ("x := 1", ("x := 1", LineKind.CODE)),
    ],
)
def test_classify_line(line: str, expected: tuple[str, LineKind]) -> None:
    """Lines are classified from their content alone."""
    assert classify_line(line) == expected, f"unexpected classification for {line!r}"


def test_normalize_tabs_expands_every_tab() -> None:
    """Tabs become four spaces wherever they appear."""
    assert normalize_tabs("\tx\t:= 1") == "    x    := 1"


def test_documented_example_segments() -> None:
    """Doc runs merge with following code; doc after code starts a new segment."""
    lines = [
        "// Title",
        "",
        "// more",
        "x := 1",
        "",
        "y := 2",
        "// next doc",
        "z := 3",
    ]
    assert segment(lines) == [
        Segment(docs=("Title", "", "more"), code=("x := 1", "", "y := 2")),
        Segment(docs=("next doc",), code=("z := 3",)),
    ]


def test_doc_then_code_produces_one_segment() -> None:
    """A documentation run directly followed by code is a single segment."""
    result = segment(["// a", "// b", "code()", "more()"])
    assert len(result) == 1, f"expected one segment, got {result!r}"
    assert result[0].docs == ("a", "b")
    assert result[0].code == ("code()", "more()")


def test_code_then_doc_produces_two_segments() -> None:
    """Documentation after code always opens a new segment."""
    result = segment(["first()", "// prose", "second()"])
    assert result == [
        Segment(code=("first()",)),
        Segment(docs=("prose",), code=("second()",)),
    ]


def test_leading_blank_lines_are_dropped() -> None:
    """Blank lines before any content never reach a segment."""
    assert segment(["", "   ", "// doc"]) == [Segment(docs=("doc",))]
    assert segment(["", "", "x()"]) == [Segment(code=("x()",))]


def test_blank_lines_inside_runs_are_kept() -> None:
    """Interior and trailing blank lines stay with the open run."""
    result = segment(["// one", "", "// two", "a()", "", "b()", ""])
    assert result[0].docs == ("one", "", "two")
    assert result[0].code == ("a()", "", "b()", "")


def test_whitespace_only_blank_keeps_original_text_in_code() -> None:
    """Blank code lines keep their original whitespace."""
    result = segment(["a()", "    ", "b()"])
    assert result[0].code == ("a()", "    ", "b()")


def test_code_keeps_indentation() -> None:
    """Code lines are stored untrimmed so indentation survives."""
    result = parse_segments("if x {\n\ty()\n}")
    assert result[0].code == ("if x {", "    y()", "}")


def test_code_round_trips_through_join_and_split() -> None:
    """Joining code lines and splitting again reproduces them exactly."""
    source = "// doc\nfunc main() {\n    a := 1\n\n    b := 2\n}\n"
    (only,) = parse_segments(source)
    assert "\n".join(only.code).split("\n") == list(only.code)
    assert list(only.code) == source.split("\n")[1:]


def test_segmentation_is_deterministic() -> None:
    """Identical input yields identical segments."""
    source = "# Title\n// a\nx()\n\n// b\ny()\n"
    assert parse_segments(source) == parse_segments(source)


def test_heading_lines_are_demoted_documentation() -> None:
    """Markdown headings become doc lines with extra heading markers."""
    result = parse_segments("# Values\n\n// Strings.\nprintln 1\n")
    assert result == [
        Segment(docs=("### Values", "", "Strings."), code=("println 1", "")),
    ]


def test_empty_source_has_no_segments() -> None:
    """Empty or blank-only files produce nothing."""
    assert parse_segments("") == []
    assert parse_segments("\n\n\t\n") == []


def test_segments_are_immutable() -> None:
    """Segments expose tuples and reject attribute assignment."""
    (only,) = parse_segments("// doc\nx()")
    assert isinstance(only.docs, tuple)
    assert isinstance(only.code, tuple)
    with pytest.raises(AttributeError):
        only.docs = ()  # type: ignore[misc]
