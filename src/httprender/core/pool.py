"""Reusable byte buffers for renderers that stage output before writing.

The pool owns its idle buffers. A caller borrows one for the length of a
single render call and must hand it back on every exit path; ``borrow``
does that automatically.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from io import BytesIO
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 64


class BufferPool:
    """Bounded, thread-safe pool of ``BytesIO`` buffers.

    ``get`` hands out an idle buffer or allocates a new one. ``put`` resets
    the buffer and keeps it while fewer than ``size`` buffers are idle;
    otherwise the buffer is dropped for the garbage collector.
    """

    def __init__(self, size: int = DEFAULT_POOL_SIZE) -> None:
        """Initialize an empty pool.

        Args:
            size: Maximum number of idle buffers retained.

        Raises:
            ValueError: If size is negative.
        """
        if size < 0:
            msg = f"Pool size must be non-negative, got {size}"
            raise ValueError(msg)
        self._size = size
        self._idle: list[BytesIO] = []
        self._outstanding = 0
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        """Maximum number of idle buffers retained."""
        return self._size

    @property
    def idle(self) -> int:
        """Number of buffers currently waiting in the pool."""
        with self._lock:
            return len(self._idle)

    @property
    def outstanding(self) -> int:
        """Number of buffers currently borrowed and not yet returned."""
        with self._lock:
            return self._outstanding

    def get(self) -> BytesIO:
        """Take an empty buffer, allocating one if the pool is dry."""
        with self._lock:
            self._outstanding += 1
            if self._idle:
                return self._idle.pop()
        logger.debug("Buffer pool empty, allocating a new buffer")
        return BytesIO()

    def put(self, buf: BytesIO) -> None:
        """Reset a buffer and return it to the pool."""
        buf.seek(0)
        buf.truncate()
        with self._lock:
            self._outstanding -= 1
            if len(self._idle) < self._size:
                self._idle.append(buf)
                return
        logger.debug("Buffer pool full (%d idle), dropping buffer", self._size)

    @contextmanager
    def borrow(self) -> Iterator[BytesIO]:
        """Lend a buffer for the duration of a ``with`` block."""
        buf = self.get()
        try:
            yield buf
        finally:
            self.put(buf)


_default_pool: BufferPool | None = None
_default_lock = threading.Lock()


def get_default_pool() -> BufferPool:
    """Return the process-wide pool, creating it on first use."""
    global _default_pool
    if _default_pool is None:
        with _default_lock:
            if _default_pool is None:
                _default_pool = BufferPool()
    return _default_pool
