"""Lazily built, lock-free cache of rendered example pages.

Every catalog entry owns one :class:`CacheEntry` whose state moves once from
``UNBUILT`` to :class:`Built`. Readers take a single reference to the current
state; a first request builds the page outside any lock and publishes it with
one attribute store, so a reader sees either "not built yet" or a complete
payload. Concurrent first requests may both build; the last publish wins and
the other result is discarded.

Example
-------
>>> from tutorial_pages.cache import CacheEntry, Built
>>> entry = CacheEntry()
>>> entry.page is None
True
>>> entry.publish(b"<html></html>")
>>> entry.page
b'<html></html>'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .logs import example_context, get_logger

if typ.TYPE_CHECKING:
    from .catalog import Catalog, ExampleDescriptor
    from .generator.assembler import ExampleAssembler

logger = get_logger(__name__)


class _Unbuilt(enum.Enum):
    UNBUILT = "unbuilt"


UNBUILT = _Unbuilt.UNBUILT


@dc.dataclass(frozen=True, slots=True)
class Built:
    """A completed page payload."""

    payload: bytes


EntryState = _Unbuilt | Built


class CacheEntry:
    """Swap-once holder for one example's rendered page."""

    __slots__ = ("_state",)

    def __init__(self) -> None:
        self._state: EntryState = UNBUILT

    @property
    def state(self) -> EntryState:
        return self._state

    @property
    def page(self) -> bytes | None:
        """Return the published payload, or ``None`` while unbuilt."""
        state = self._state
        if isinstance(state, Built):
            return state.payload
        return None

    def publish(self, payload: bytes) -> None:
        """Publish ``payload``; a later publish replaces an earlier one."""
        self._state = Built(payload)


class ExampleCache:
    """Serve each example page from cache, building it on first request."""

    def __init__(self, catalog: Catalog, assembler: ExampleAssembler) -> None:
        self.catalog = catalog
        self.assembler = assembler
        self._entries = tuple(CacheEntry() for _ in range(len(catalog)))

    def entry(self, descriptor: ExampleDescriptor) -> CacheEntry:
        return self._entries[descriptor.index]

    def get_or_build(self, descriptor: ExampleDescriptor) -> bytes:
        """Return the page for ``descriptor``, building and publishing it if needed.

        Build errors propagate unchanged and leave the entry unbuilt, so a
        later call retries the build.
        """
        entry = self.entry(descriptor)
        state = entry.state
        if isinstance(state, Built):
            return state.payload

        logger.debug(
            "Building example page %s",
            descriptor.name,
            extra=example_context(descriptor),
        )
        payload = self.assembler.assemble(descriptor)
        entry.publish(payload)
        logger.info(
            "Cached example page %s (%d bytes)",
            descriptor.name,
            len(payload),
            extra=example_context(descriptor, bytes=len(payload)),
        )
        return payload

    def is_built(self, descriptor: ExampleDescriptor) -> bool:
        return self.entry(descriptor).page is not None

    @property
    def built_count(self) -> int:
        return sum(1 for entry in self._entries if entry.page is not None)


__all__ = ["UNBUILT", "Built", "CacheEntry", "EntryState", "ExampleCache"]
