"""Load tutorial server configuration from YAML into a typed dataclass.

The configuration file is optional: every key has a default, and the CLI may
override individual values after loading. Relative paths are resolved against
the directory containing the configuration file.

Examples
--------
>>> from pathlib import Path
>>> from tutorial_pages.config import load_server_config
>>> config = load_server_config(None)
>>> config.port
8000
>>> config = load_server_config(Path("config/tutorial.yaml"))  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

DEFAULT_CONFIG = Path("config/tutorial.yaml")


class ConfigError(ValueError):
    """Raised when the server configuration is invalid."""


@dc.dataclass(slots=True)
class ServerConfig:
    """Fully resolved settings for serving or exporting a tutorial."""

    tutorial_root: Path = Path()
    templates_dir: Path | None = None
    static_dir: Path = Path("public")
    host: str = "localhost"
    port: int = 8000
    pygments_style: str = "monokai"
    site_name: str = "Go+ Tutorial"
    playground_url: str = "https://play.goplus.org/"
    log_level: str = "INFO"
    log_json: bool = False

    def with_overrides(self, **overrides: typ.Any) -> ServerConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dc.replace(self, **changes)


def load_server_config(path: Path | None) -> ServerConfig:
    """Load the YAML configuration describing how the tutorial is served.

    Parameters
    ----------
    path : Path or None
        Configuration file to read. ``None`` returns the defaults.

    Returns
    -------
    ServerConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a key is unknown or a value has the wrong type.
    """
    if path is None:
        return ServerConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return _build_server_config(dict(loaded), base_dir=path.parent)


def _build_server_config(raw: dict[str, typ.Any], *, base_dir: Path) -> ServerConfig:
    """Validate ``raw`` and build a ServerConfig relative to ``base_dir``."""
    known = {field.name for field in dc.fields(ServerConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    values: dict[str, typ.Any] = {}
    for key, value in raw.items():
        if value is None:
            continue
        match key:
            case "tutorial_root" | "templates_dir" | "static_dir":
                values[key] = _resolve_path(value, base_dir, key)
            case "port":
                values[key] = _parse_port(value)
            case "log_json":
                if not isinstance(value, bool):
                    msg = "'log_json' must be a boolean."
                    raise ConfigError(msg)
                values[key] = value
            case _:
                values[key] = str(value)
    return ServerConfig(**values)


def _resolve_path(value: object, base_dir: Path, key: str) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    if not isinstance(value, str):
        msg = f"'{key}' must be a path string."
        raise ConfigError(msg)
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _parse_port(value: object) -> int:
    """Return ``value`` as a TCP port number."""
    if isinstance(value, bool) or not isinstance(value, int | str):
        msg = "'port' must be an integer."
        raise ConfigError(msg)
    try:
        port = int(value)
    except ValueError as exc:
        msg = f"'port' must be an integer, got {value!r}."
        raise ConfigError(msg) from exc
    if not 0 < port < 65536:
        msg = f"'port' must be between 1 and 65535, got {port}."
        raise ConfigError(msg)
    return port


__all__ = ["DEFAULT_CONFIG", "ConfigError", "ServerConfig", "load_server_config"]
