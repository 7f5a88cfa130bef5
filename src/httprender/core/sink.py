"""Sink protocols and an in-memory response recorder.

A sink comes in two variants. A plain ``Writer`` only accepts body bytes.
A ``ResponseWriter`` also exposes headers and a status line. Renderers check
which variant they were handed and skip header writing for plain writers,
which lets the same renderer fill an HTTP response or a scratch buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Writer(Protocol):
    """Destination for body bytes."""

    def write(self, data: bytes, /) -> object:
        """Write bytes to the destination."""
        ...


@runtime_checkable
class ResponseWriter(Writer, Protocol):
    """Writer that can also set headers and a status code.

    ``headers`` must support case-insensitive ``get`` and item assignment.
    ``write_header`` must be called before the first ``write``.
    """

    @property
    def headers(self) -> MutableMapping[str, str]:
        """Response header fields."""
        ...

    def write_header(self, status: int, /) -> None:
        """Send the status line along with the current headers."""
        ...


class Headers(MutableMapping[str, str]):
    """Case-insensitive header mapping that preserves the first-seen spelling."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, tuple[str, str]] = {}
        if initial:
            self.update(initial)

    def __setitem__(self, key: str, value: str) -> None:
        folded = key.lower()
        original = self._store.get(folded, (key, ""))[0]
        self._store[folded] = (original, value)

    def __getitem__(self, key: str) -> str:
        return self._store[key.lower()][1]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def copy(self) -> Headers:
        """Return an independent copy."""
        return Headers(dict(self.items()))

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"


class ResponseRecorder:
    """In-memory ResponseWriter that records what a handler sent.

    Behaves like a transport: the headers are frozen into ``sent_headers``
    when the status line is written (explicitly, or implicitly with 200 on
    the first body write), and later status writes are ignored.
    """

    def __init__(self) -> None:
        self._headers = Headers()
        self._body = bytearray()
        self.status: int | None = None
        self.sent_headers: Headers | None = None
        self.write_calls = 0

    @property
    def headers(self) -> Headers:
        """Mutable header fields; changes after the status line are not sent."""
        return self._headers

    @property
    def body(self) -> bytes:
        """All body bytes written so far."""
        return bytes(self._body)

    @property
    def header_written(self) -> bool:
        """Whether the status line has gone out."""
        return self.status is not None

    def write_header(self, status: int) -> None:
        """Record the status code and snapshot the headers."""
        if self.header_written:
            logger.debug("Ignoring superfluous write_header(%d), status is %d", status, self.status)
            return
        self.status = status
        self.sent_headers = self._headers.copy()

    def write(self, data: bytes) -> int:
        """Append body bytes, sending a 200 status line first if needed."""
        if not self.header_written:
            self.write_header(200)
        self._body += data
        self.write_calls += 1
        return len(data)
