"""Cyclopts CLI entrypoint for serving and exporting literate tutorials.

The ``tutorial`` console script defined here either serves a tutorial root
over HTTP, rendering each example page on first request, or exports every
page to static HTML files using the same rendering pipeline.

Examples
--------
Serve the tutorial in the current directory:

>>> from tutorial_pages.cli import main
>>> main()  # doctest: +SKIP

Export a tutorial to a custom directory:

>>> from tutorial_pages.cli import app
>>> app(["render", "--root", "tutorial", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
import uvicorn
from cyclopts import App, Parameter

from .config import DEFAULT_CONFIG, ServerConfig, load_server_config
from .logs import configure_logging
from .server import TutorialSite, create_app

app = App(name="tutorial", config=cyclopts.config.Env("TUTORIAL_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


def _load_config(config: Path | None, **overrides: typ.Any) -> ServerConfig:
    """Load ``config`` (or the default file when present) and apply overrides."""
    if config is None and DEFAULT_CONFIG.exists():
        config = DEFAULT_CONFIG
    return load_server_config(config).with_overrides(**overrides)


@app.command(help="Serve the tutorial over HTTP, rendering pages on demand.")
def serve(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to server config")
    ] = None,
    root: typ.Annotated[
        Path | None, Parameter(help="Directory holding the NN-Title examples")
    ] = None,
    host: typ.Annotated[str | None, Parameter(help="Interface to bind")] = None,
    port: typ.Annotated[int | None, Parameter(help="Port to listen on")] = None,
) -> None:
    """Serve the tutorial until interrupted.

    Parameters
    ----------
    config : Path or None, optional
        YAML configuration file; defaults to ``config/tutorial.yaml`` when it
        exists.
    root : Path or None, optional
        Override for the tutorial root directory.
    host : str or None, optional
        Override for the bind address.
    port : int or None, optional
        Override for the listening port.
    """
    server_config = _load_config(config, tutorial_root=root, host=host, port=port)
    configure_logging(server_config.log_level, use_json=server_config.log_json)
    print(f"Serving tutorial at http://{server_config.host}:{server_config.port}")
    uvicorn.run(
        create_app(server_config),
        host=server_config.host,
        port=server_config.port,
        log_config=None,
    )


@app.command(help="Render every tutorial page to static HTML files.")
def render(
    *,
    output_dir: typ.Annotated[Path, Parameter(help="Folder to write pages into")],
    config: typ.Annotated[
        Path | None, Parameter(help="Path to server config")
    ] = None,
    root: typ.Annotated[
        Path | None, Parameter(help="Directory holding the NN-Title examples")
    ] = None,
) -> None:
    """Write ``index.html`` and one page per example into ``output_dir``.

    Parameters
    ----------
    output_dir : Path
        Destination folder; created when missing.
    config : Path or None, optional
        YAML configuration file; defaults to ``config/tutorial.yaml`` when it
        exists.
    root : Path or None, optional
        Override for the tutorial root directory.

    Raises
    ------
    ExampleBuildError
        If any example page cannot be rendered.
    """
    server_config = _load_config(config, tutorial_root=root)
    configure_logging(server_config.log_level, use_json=server_config.log_json)
    for path in export_site(TutorialSite(server_config), output_dir):
        print(f"wrote {_format_path(path)}")


def export_site(site: TutorialSite, output_dir: Path) -> list[Path]:
    """Render the index and all example pages of ``site`` into ``output_dir``."""
    state = site.state
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / "index.html"
    index_path.write_bytes(state.index_page)
    written = [index_path]
    for descriptor in state.catalog:
        page_path = output_dir / f"{descriptor.path.lstrip('/')}.html"
        page_path.write_bytes(state.cache.get_or_build(descriptor))
        written.append(page_path)
    return written


def main() -> None:
    """Invoke the Cyclopts application that powers the ``tutorial`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
