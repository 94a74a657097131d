"""Shared fixtures for tutorial_pages tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tutorial_pages.generator import TemplateRenderer

HELLO_SOURCE = (
    "// Our first program prints the classic message.\n"
    'println "Hello world"\n'
)
VALUES_SOURCE = (
    "# Values\n"
    "\n"
    "// Strings can be added together.\n"
    'println "go" + "plus"\n'
    "\n"
    "// Integers and floats.\n"
    'println "1+1 =", 1+1\n'
)
LOOPS_SOURCE = (
    "// `for` is the only looping construct.\n"
    "for i <- 1:3 {\n"
    "\tprintln i\n"
    "}\n"
)


def write_example(root: Path, name: str, files: dict[str, str]) -> Path:
    """Create an example directory under ``root`` containing ``files``."""
    directory = root / name
    directory.mkdir(parents=True)
    for filename, content in files.items():
        (directory / filename).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def tutorial_root(tmp_path: Path) -> Path:
    """Return a tutorial root with three examples plus entries to ignore."""
    root = tmp_path / "tutorial"
    root.mkdir()
    write_example(root, "03-For-Loops", {"loops.gop": LOOPS_SOURCE})
    write_example(root, "01-Hello-World", {"hello.gop": HELLO_SOURCE})
    write_example(
        root,
        "02-Values",
        {"values.gop": VALUES_SOURCE, "notes.txt": "Plain notes\n"},
    )
    (root / "notes").mkdir()
    (root / "04-Not-A-Directory").write_text("ignored\n", encoding="utf-8")
    return root


@pytest.fixture(scope="session")
def templates() -> TemplateRenderer:
    """Return a template renderer backed by the packaged templates."""
    return TemplateRenderer(site_name="Fixture Tutorial")
