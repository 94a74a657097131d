"""Logging setup for the tutorial server and exporter.

Records about a single example carry ``ctx_example`` and ``ctx_path`` extras
built by :func:`example_context`. The plain formatter ignores them; the JSON
formatter gathers every ``ctx_`` extra into a ``context`` object so page
builds can be filtered by example.

Example
-------
>>> from tutorial_pages.catalog import describe
>>> example_context(describe("02-Values", index=1), bytes=10)
{'ctx_example': '02-Values', 'ctx_path': '/values', 'ctx_bytes': 10}
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ

import orjson

if typ.TYPE_CHECKING:
    from .catalog import ExampleDescriptor

CONTEXT_PREFIX = "ctx_"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_DEFAULT_LEVEL = os.environ.get("TUTORIAL_LOG_LEVEL", "INFO")


def example_context(
    descriptor: ExampleDescriptor, **fields: object
) -> dict[str, object]:
    """Return ``extra`` fields identifying ``descriptor`` on a log record."""
    context: dict[str, object] = {
        f"{CONTEXT_PREFIX}example": descriptor.name,
        f"{CONTEXT_PREFIX}path": descriptor.path,
    }
    context.update({f"{CONTEXT_PREFIX}{key}": value for key, value in fields.items()})
    return context


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, typ.Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {
            key.removeprefix(CONTEXT_PREFIX): value
            for key, value in record.__dict__.items()
            if key.startswith(CONTEXT_PREFIX)
        }
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(
    level: str | int = _DEFAULT_LEVEL, *, use_json: bool = False
) -> None:
    """Send records at ``level`` and above to stdout, plain or as JSON lines."""
    handler = logging.StreamHandler(sys.stdout)
    formatter = JsonFormatter() if use_json else logging.Formatter(PLAIN_FORMAT)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str = "tutorial_pages") -> logging.Logger:
    """Return a named logger; configuration is left to the entry point."""
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "example_context", "get_logger"]
