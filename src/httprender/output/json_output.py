"""JSON renderer with buffered and streaming modes."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any
from uuid import UUID

from httprender.core.errors import EncodingError
from httprender.core.models import CONTENT_JSON, Head
from httprender.output.base import write_body, write_head

if TYPE_CHECKING:
    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)

INDENT = "  "
STREAM_FLUSH_SIZE = 8 * 1024

# <, > and & are escaped so a JSON body can be embedded in an HTML <script>
# element; U+2028/U+2029 are escaped because JavaScript treats them as line
# terminators inside string literals.
_LINE_SEPARATOR_ESCAPES = {
    chr(0x2028): "\\u2028",
    chr(0x2029): "\\u2029",
}
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}
_SAFE_TABLE = str.maketrans(_HTML_ESCAPES | _LINE_SEPARATOR_ESCAPES)
_UNESCAPED_TABLE = str.maketrans(_LINE_SEPARATOR_ESCAPES)

_ENCODE_ERRORS = (TypeError, ValueError, RecursionError)


class _ResponseEncoder(json.JSONEncoder):
    """JSON encoder for common application value types.

    Dataclasses are encoded field by field (shallowly, so the encoder's own
    cycle detection still applies), enums by value, paths and UUIDs as
    strings, dates and times in ISO 8601, Decimals as strings to keep their
    precision, and sets as arrays.
    """

    def default(self, o: object) -> object:
        """Encode types the stdlib encoder does not know about."""
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, (PurePath, UUID, Decimal)):
            return str(o)
        if isinstance(o, (datetime, date, time)):
            return o.isoformat()
        if isinstance(o, (set, frozenset)):
            return list(o)
        return super().default(o)


def _make_encoder(*, indent: bool) -> _ResponseEncoder:
    if indent:
        return _ResponseEncoder(
            ensure_ascii=False, allow_nan=False, indent=INDENT, separators=(",", ": ")
        )
    return _ResponseEncoder(ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def encode_json(value: Any, *, indent: bool = False, escape_html: bool = True) -> bytes:
    """Serialize a value to UTF-8 JSON bytes.

    Args:
        value: Any value the response encoder understands.
        indent: Pretty-print with a two-space indent.
        escape_html: Emit ``<``, ``>`` and ``&`` as ``\\u`` escapes.

    Raises:
        EncodingError: If the value cannot be serialized.
    """
    table = _SAFE_TABLE if escape_html else _UNESCAPED_TABLE
    try:
        text = _make_encoder(indent=indent).encode(value)
        return text.translate(table).encode("utf-8")
    except _ENCODE_ERRORS as exc:
        msg = f"Cannot encode {type(value).__name__} as JSON: {exc}"
        raise EncodingError(msg) from exc


@dataclass(frozen=True)
class JsonRenderer:
    """Renders a value as JSON.

    Buffered mode (the default) serializes the whole value before touching
    the sink, so an encoding failure leaves the response untouched.

    ``unescape_html`` emits ``<``, ``>`` and ``&`` literally instead of as
    ``\\u`` escapes. The body is then unsafe to embed in HTML; enable it
    only for consumers that never do so.

    ``prefix`` is written before the payload (for example ``)]}',\\n``) to
    make the body invalid as standalone JavaScript.

    Streaming mode never holds the whole payload: encoder output is gathered
    into writes of about ``STREAM_FLUSH_SIZE`` bytes and flushed as it fills.
    It writes the head and prefix up front, always uses compact output, and
    ignores ``indent`` and ``unescape_html``. An encoding failure may then
    surface after part of the body has been written.
    """

    head: Head = field(default_factory=lambda: Head(CONTENT_JSON))
    indent: bool = False
    unescape_html: bool = False
    prefix: bytes = b""
    streaming: bool = False

    def render(self, sink: Writer, value: Any) -> None:
        """Render the value as JSON into the sink.

        Raises:
            EncodingError: If the value cannot be serialized.
            SinkWriteError: If the sink rejects a write.
        """
        if self.streaming:
            self._render_streaming(sink, value)
            return

        result = encode_json(value, indent=self.indent, escape_html=not self.unescape_html)
        if self.indent:
            result += b"\n"

        write_head(self.head, sink)
        if self.prefix:
            write_body(sink, self.prefix)
        write_body(sink, result)
        logger.debug("Rendered %d JSON bytes", len(self.prefix) + len(result))

    def _render_streaming(self, sink: Writer, value: Any) -> None:
        """Encode incrementally, flushing to the sink in bounded batches."""
        write_head(self.head, sink)
        if self.prefix:
            write_body(sink, self.prefix)

        chunks = _make_encoder(indent=False).iterencode(value)
        pending: list[bytes] = []
        pending_size = 0
        try:
            for chunk in chunks:
                data = chunk.translate(_SAFE_TABLE).encode("utf-8")
                pending.append(data)
                pending_size += len(data)
                if pending_size >= STREAM_FLUSH_SIZE:
                    write_body(sink, b"".join(pending))
                    pending.clear()
                    pending_size = 0
        except _ENCODE_ERRORS as exc:
            msg = f"Cannot encode {type(value).__name__} as JSON: {exc}"
            raise EncodingError(msg) from exc
        pending.append(b"\n")
        write_body(sink, b"".join(pending))
