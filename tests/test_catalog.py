"""Unit tests for example discovery, catalog linkage, and the one-time loader."""

from __future__ import annotations

import threading
import typing as typ

import pytest
from bs4 import BeautifulSoup

from tutorial_pages.catalog import (
    Catalog,
    CatalogError,
    CatalogLoader,
    IndexBuilder,
    build_catalog,
    describe,
    is_example_dir_name,
    list_tutorial,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from tutorial_pages.generator import TemplateRenderer


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("01-Hello-World", True),
        ("05-Channels", True),
        ("99-X", True),
        ("1-Short", False),
        ("ab-Letters", False),
        ("01_Underscore", False),
        ("01-", False),
        ("notes", False),
        ("１２-Fullwidth", False),
    ],
)
def test_is_example_dir_name(name: str, expected: bool) -> None:
    """Only ``NN-Title`` names are example directories."""
    assert is_example_dir_name(name) is expected, f"unexpected result for {name!r}"


def test_describe_derives_path_and_title() -> None:
    """Titles drop the ordinal; paths are the lowercase slug."""
    channels = describe("05-Channels", index=0)
    assert (channels.path, channels.title, channels.ordinal) == ("/channels", "Channels", 5)
    hello = describe("01-Hello-World", index=3)
    assert hello.path == "/hello-world"
    assert hello.title == "Hello World"
    assert hello.index == 3


def test_list_tutorial_ignores_files_and_unmatched_names(tutorial_root: Path) -> None:
    """Files and directories without the prefix are skipped."""
    names = sorted(list_tutorial(tutorial_root))
    assert names == ["01-Hello-World", "02-Values", "03-For-Loops"]


def test_list_tutorial_missing_root_raises(tmp_path: Path) -> None:
    """An unreadable root is a startup error."""
    with pytest.raises(CatalogError, match="Unable to list tutorial root"):
        list_tutorial(tmp_path / "missing")


def test_build_catalog_sorts_by_ordinal(tmp_path: Path) -> None:
    """Catalog order follows the parsed ordinal, not listing order."""
    for name in ("10-Ten", "02-Two", "01-One"):
        (tmp_path / name).mkdir()
    catalog = build_catalog(tmp_path)
    assert [entry.name for entry in catalog] == ["01-One", "02-Two", "10-Ten"]
    assert [entry.index for entry in catalog] == [0, 1, 2]


def test_catalog_linkage(tutorial_root: Path) -> None:
    """Neighbours form a doubly linked sequence over catalog order."""
    catalog = build_catalog(tutorial_root)
    entries = list(catalog)
    assert len(entries) == 3
    assert catalog.previous(entries[0]) is None
    assert catalog.next(entries[-1]) is None
    for idx in range(1, len(entries)):
        assert catalog.previous(entries[idx]) is entries[idx - 1]
        assert catalog.next(entries[idx - 1]) is entries[idx]


def test_catalog_lookup_by_path(tutorial_root: Path) -> None:
    """Descriptors are found by URL path; unknown paths miss."""
    catalog = build_catalog(tutorial_root)
    values = catalog.get("/values")
    assert values is not None and values.name == "02-Values"
    assert catalog.get("/Values") is None
    assert catalog.get("/missing") is None
    assert catalog[0].path == "/hello-world"


def test_empty_catalog() -> None:
    """An empty catalog has no entries and no lookups."""
    catalog = Catalog()
    assert len(catalog) == 0
    assert catalog.get("/") is None


def test_index_builder_renders_links(
    tutorial_root: Path, templates: TemplateRenderer
) -> None:
    """The index page lists every example in catalog order."""
    catalog, page = IndexBuilder(tutorial_root, templates).run()
    soup = BeautifulSoup(page, "html.parser")
    links = [(a["href"], a.get_text()) for a in soup.select("ul.examples a")]
    assert links == [
        ("/hello-world", "Hello World"),
        ("/values", "Values"),
        ("/for-loops", "For Loops"),
    ]
    assert len(catalog) == 3


def test_loader_runs_build_once() -> None:
    """Every waiter shares the single build result."""
    calls: list[int] = []
    release = threading.Event()

    def build() -> str:
        release.wait(timeout=5)
        calls.append(1)
        return "catalog"

    loader: CatalogLoader[str] = CatalogLoader(build)
    loader.start()
    loader.start()
    assert not loader.ready
    results: list[str] = []
    waiters = [
        threading.Thread(target=lambda: results.append(loader.wait()))
        for _ in range(4)
    ]
    for waiter in waiters:
        waiter.start()
    release.set()
    for waiter in waiters:
        waiter.join(timeout=5)
    assert results == ["catalog"] * 4
    assert calls == [1]
    assert loader.ready


def test_loader_wait_starts_build_lazily() -> None:
    """Waiting before ``start`` schedules the build."""
    loader: CatalogLoader[int] = CatalogLoader(lambda: 42)
    assert loader.wait() == 42


def test_loader_reraises_failures(tmp_path: Path, templates: TemplateRenderer) -> None:
    """Build failures reach every waiter."""
    loader = CatalogLoader(IndexBuilder(tmp_path / "missing", templates).run)
    loader.start()
    with pytest.raises(CatalogError):
        loader.wait()
    with pytest.raises(CatalogError):
        loader.wait()
