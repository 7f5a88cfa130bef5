"""Renderer protocol and the header/body writing shared by all formats."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from httprender.core.errors import SinkWriteError
from httprender.core.models import CONTENT_TYPE
from httprender.core.sink import ResponseWriter

if TYPE_CHECKING:
    from httprender.core.models import Head
    from httprender.core.sink import Writer


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering a value into a sink.

    Implementations are immutable configurations: the header descriptor and
    format options are fixed at construction, and only the sink and value
    vary per call. A single instance may be used from many threads at once.
    """

    def render(self, sink: Writer, value: Any) -> None:
        """Render the value into the sink."""
        ...


def write_head(head: Head, sink: Writer) -> None:
    """Write the head if the sink can take headers; otherwise do nothing."""
    if isinstance(sink, ResponseWriter):
        head.write(sink)


def write_head_preserving(head: Head, sink: Writer) -> None:
    """Write the head, keeping any content type an upstream stage already set."""
    if isinstance(sink, ResponseWriter):
        existing = sink.headers.get(CONTENT_TYPE)
        if existing:
            head = replace(head, content_type=existing)
        head.write(sink)


def write_body(sink: Writer, data: bytes) -> None:
    """Write body bytes, converting transport failures into SinkWriteError."""
    try:
        sink.write(data)
    except OSError as exc:
        msg = f"Sink rejected write of {len(data)} bytes: {exc}"
        raise SinkWriteError(msg) from exc
