"""FastAPI application that serves tutorial pages on demand.

The catalog and landing page are built once on a background thread when the
application starts, so the server accepts connections immediately. Example
pages are rendered on first request and then served from
:class:`~tutorial_pages.cache.ExampleCache`. Route handlers are plain
functions, so FastAPI runs them concurrently on its worker thread pool.

Example
-------
>>> from pathlib import Path
>>> from tutorial_pages.config import ServerConfig
>>> from tutorial_pages.server import create_app
>>> app = create_app(ServerConfig(tutorial_root=Path("tutorial")))  # doctest: +SKIP
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import posixpath
import typing as typ

from fastapi import FastAPI
from fastapi.responses import FileResponse, HTMLResponse, Response

from .cache import ExampleCache
from .catalog import Catalog, CatalogError, CatalogLoader, IndexBuilder, check_root
from .generator import ExampleAssembler, HtmlContentRenderer, TemplateRenderer
from .generator.assembler import ExampleBuildError
from .logs import example_context, get_logger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import ServerConfig

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class SiteState:
    """Everything that depends on the one-time catalog build."""

    catalog: Catalog
    index_page: bytes
    cache: ExampleCache


class TutorialSite:
    """Resolve request paths to the index, static assets, or example pages."""

    def __init__(self, config: ServerConfig) -> None:
        """Load templates eagerly and prepare the background catalog build.

        Raises
        ------
        CatalogError
            If the tutorial root is missing or cannot be listed.
        TemplateLoadError
            If a page template is missing.
        """
        check_root(config.tutorial_root)
        self.config = config
        self.templates = TemplateRenderer(
            config.templates_dir,
            site_name=config.site_name,
            playground_url=config.playground_url,
        )
        self.renderer = HtmlContentRenderer(config.pygments_style)
        self.not_found_page = self.templates.render_not_found()
        self.loader: CatalogLoader[SiteState] = CatalogLoader(self._load)

    def start(self) -> None:
        """Begin building the catalog without waiting for it."""
        self.loader.start()

    @property
    def state(self) -> SiteState:
        """Return the site state, blocking until the catalog build completes."""
        return self.loader.wait()

    def _load(self) -> SiteState:
        root = self.config.tutorial_root
        catalog, index_page = IndexBuilder(root, self.templates).run()
        assembler = ExampleAssembler(
            root, catalog, self.templates, renderer=self.renderer
        )
        return SiteState(
            catalog=catalog,
            index_page=index_page,
            cache=ExampleCache(catalog, assembler),
        )

    def resolve(self, raw_path: str) -> Response:
        """Return the response for ``raw_path``.

        Raises
        ------
        ExampleBuildError
            If the requested example page cannot be built.
        CatalogError
            If the tutorial root could not be listed.
        """
        cleaned = posixpath.normpath(raw_path or "/")
        if not posixpath.isabs(cleaned):
            return self._not_found()
        url_path = "/" + cleaned.lstrip("/")
        if url_path == "/":
            return HTMLResponse(self.state.index_page)
        if posixpath.splitext(url_path)[1]:
            return self._static(url_path)

        state = self.state
        descriptor = state.catalog.get(url_path)
        if descriptor is None:
            return self._not_found()
        try:
            page = state.cache.get_or_build(descriptor)
        except ExampleBuildError:
            logger.exception(
                "Failed to build page for %s",
                url_path,
                extra=example_context(descriptor),
            )
            raise
        return HTMLResponse(page)

    def _static(self, url_path: str) -> Response:
        static_root = self.config.static_dir.resolve()
        candidate = (static_root / url_path.lstrip("/")).resolve()
        if not candidate.is_relative_to(static_root) or not candidate.is_file():
            return self._not_found()
        return FileResponse(candidate)

    def _not_found(self) -> Response:
        return HTMLResponse(self.not_found_page, status_code=404)


def _server_error() -> Response:
    return Response("Internal Server Error", status_code=500, media_type="text/plain")


def create_app(config: ServerConfig, *, site: TutorialSite | None = None) -> FastAPI:
    """Build the FastAPI application serving the tutorial described by ``config``."""
    tutorial = site or TutorialSite(config)

    @contextlib.asynccontextmanager
    async def lifespan(_: FastAPI) -> cabc.AsyncIterator[None]:
        tutorial.start()
        yield

    app = FastAPI(
        title=config.site_name,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.site = tutorial

    @app.get("/{path:path}", include_in_schema=False)
    def serve(path: str) -> Response:
        url_path = f"/{path}"
        try:
            return tutorial.resolve(url_path)
        except ExampleBuildError:
            return _server_error()
        except CatalogError:
            logger.exception("Tutorial catalog is unavailable")
            return _server_error()

    return app


__all__ = ["SiteState", "TutorialSite", "create_app"]
