"""JSONP renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httprender.core.models import CONTENT_JSONP, Head
from httprender.output.base import write_body, write_head
from httprender.output.json_output import encode_json

if TYPE_CHECKING:
    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonpRenderer:
    """Wraps a JSON payload in a callback invocation: ``callback(<json>);``.

    The callback name is written as configured; it is never derived from
    the request here, so validating user-supplied names is up to the caller.
    """

    callback: str
    head: Head = field(default_factory=lambda: Head(CONTENT_JSONP))
    indent: bool = False

    def render(self, sink: Writer, value: Any) -> None:
        """Render the value as a JSONP call into the sink.

        Raises:
            EncodingError: If the value cannot be serialized.
            SinkWriteError: If the sink rejects a write.
        """
        result = encode_json(value, indent=self.indent)

        write_head(self.head, sink)
        write_body(sink, f"{self.callback}(".encode())
        write_body(sink, result)
        write_body(sink, b");")
        if self.indent:
            write_body(sink, b"\n")
        logger.debug("Rendered JSONP call '%s' (%d payload bytes)", self.callback, len(result))
