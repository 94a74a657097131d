"""Discover tutorial example directories and link them into a catalog.

Example directories follow the ``NN-Title`` convention: two ordinal digits, a
dash, then a dash-separated title. :func:`build_catalog` turns a tutorial root
into an immutable :class:`Catalog` whose descriptors know their neighbours by
position, and :class:`CatalogLoader` performs that work once on a background
thread so the server can accept connections before the index exists.

Example
-------
>>> from tutorial_pages.catalog import describe
>>> descriptor = describe("05-Channels", index=0)
>>> descriptor.path, descriptor.title
('/channels', 'Channels')
"""

from __future__ import annotations

import concurrent.futures as cf
import dataclasses as dc
import os
import threading
import typing as typ
from pathlib import Path

from .logs import get_logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .generator.templates import TemplateRenderer

logger = get_logger(__name__)

ORDINAL_WIDTH = 2
TITLE_SEPARATOR = "-"

T = typ.TypeVar("T")


class CatalogError(RuntimeError):
    """Raised when the tutorial root cannot be listed."""


@dc.dataclass(frozen=True, slots=True)
class ExampleDescriptor:
    """Identity and navigation data for one tutorial example.

    Attributes
    ----------
    name : str
        Directory name, e.g. ``"05-Channels"``.
    path : str
        URL path derived from the title, e.g. ``"/channels"``.
    title : str
        Display title with separators turned into spaces.
    ordinal : int
        Parsed two-digit prefix.
    index : int
        Position within the owning :class:`Catalog`.
    """

    name: str
    path: str
    title: str
    ordinal: int
    index: int


def is_example_dir_name(name: str) -> bool:
    """Return whether ``name`` follows the ``NN-Title`` convention."""
    prefix = name[:ORDINAL_WIDTH]
    return (
        len(name) > ORDINAL_WIDTH + 1
        and name[ORDINAL_WIDTH] == TITLE_SEPARATOR
        and prefix.isascii()
        and prefix.isdigit()
    )


def describe(name: str, *, index: int) -> ExampleDescriptor:
    """Build the descriptor for the example directory ``name``."""
    title = name[ORDINAL_WIDTH + 1 :]
    return ExampleDescriptor(
        name=name,
        path=f"/{title.lower()}",
        title=title.replace(TITLE_SEPARATOR, " "),
        ordinal=int(name[:ORDINAL_WIDTH]),
        index=index,
    )


class Catalog:
    """Ordered, read-only set of example descriptors keyed by URL path."""

    def __init__(self, descriptors: cabc.Iterable[ExampleDescriptor] = ()) -> None:
        self._descriptors = tuple(descriptors)
        self._by_path = {entry.path: entry for entry in self._descriptors}

    def __iter__(self) -> cabc.Iterator[ExampleDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __getitem__(self, index: int) -> ExampleDescriptor:
        return self._descriptors[index]

    def get(self, path: str) -> ExampleDescriptor | None:
        """Return the descriptor registered under ``path``, if any."""
        return self._by_path.get(path)

    def previous(self, descriptor: ExampleDescriptor) -> ExampleDescriptor | None:
        """Return the descriptor preceding ``descriptor`` in catalog order."""
        if descriptor.index == 0:
            return None
        return self._descriptors[descriptor.index - 1]

    def next(self, descriptor: ExampleDescriptor) -> ExampleDescriptor | None:
        """Return the descriptor following ``descriptor`` in catalog order."""
        position = descriptor.index + 1
        if position >= len(self._descriptors):
            return None
        return self._descriptors[position]


def check_root(root: Path) -> None:
    """Raise :class:`CatalogError` unless ``root`` is a listable directory."""
    if not root.is_dir():
        msg = f"Tutorial root '{root}' is not a directory."
        raise CatalogError(msg)
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        msg = f"Unable to list tutorial root '{root}': {exc}"
        raise CatalogError(msg) from exc


def list_tutorial(root: Path) -> list[str]:
    """Return the names of example directories directly under ``root``.

    Raises
    ------
    CatalogError
        If ``root`` cannot be listed.
    """
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        msg = f"Unable to list tutorial root '{root}': {exc}"
        raise CatalogError(msg) from exc
    return [
        entry.name
        for entry in entries
        if entry.is_dir() and is_example_dir_name(entry.name)
    ]


def build_catalog(root: Path) -> Catalog:
    """List ``root`` and link every example directory into a :class:`Catalog`.

    Directories are ordered by their parsed ordinal (then by name) rather than
    by the platform's listing order.
    """
    names = sorted(
        list_tutorial(root), key=lambda name: (int(name[:ORDINAL_WIDTH]), name)
    )
    catalog = Catalog(describe(name, index=idx) for idx, name in enumerate(names))
    for descriptor in catalog:
        if catalog.get(descriptor.path) is not descriptor:
            logger.warning(
                "Example %s shadows another example at %s",
                descriptor.name,
                descriptor.path,
            )
    return catalog


class IndexBuilder:
    """Build the catalog and render the landing page listing every example."""

    def __init__(self, root: Path, templates: TemplateRenderer) -> None:
        self.root = root
        self.templates = templates

    def run(self) -> tuple[Catalog, bytes]:
        """Return the catalog and the rendered index page."""
        catalog = build_catalog(self.root)
        page = self.render(catalog)
        logger.info("Indexed %d tutorial examples under %s", len(catalog), self.root)
        return catalog, page

    def render(self, catalog: Catalog) -> bytes:
        """Render the index page for ``catalog``."""
        return self.templates.render_index(list(catalog))


class CatalogLoader(typ.Generic[T]):
    """Run a catalog build once on a background thread.

    ``wait`` is the one-time barrier: callers block only until the first build
    finishes and then read the stored result forever after. Failures are
    re-raised to every caller.
    """

    def __init__(self, build: cabc.Callable[[], T]) -> None:
        self._build = build
        self._start_lock = threading.Lock()
        self._future: cf.Future[T] | None = None

    def start(self) -> cf.Future[T]:
        """Schedule the build if it has not been scheduled yet."""
        with self._start_lock:
            if self._future is None:
                executor = cf.ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="catalog"
                )
                self._future = executor.submit(self._build)
                executor.shutdown(wait=False)
            return self._future

    def wait(self) -> T:
        """Block until the build finishes and return its result."""
        future = self._future or self.start()
        return future.result()

    @property
    def ready(self) -> bool:
        future = self._future
        return future is not None and future.done()


__all__ = [
    "Catalog",
    "CatalogError",
    "CatalogLoader",
    "ExampleDescriptor",
    "IndexBuilder",
    "build_catalog",
    "check_root",
    "describe",
    "is_example_dir_name",
    "list_tutorial",
]
