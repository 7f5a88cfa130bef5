"""Raw bytes renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httprender.core.errors import InvalidInputError
from httprender.core.models import CONTENT_BINARY, Head
from httprender.output.base import write_body, write_head_preserving

if TYPE_CHECKING:
    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataRenderer:
    """Writes a bytes-like value verbatim.

    A content type already present on the sink wins over the configured one,
    so an earlier stage (a static file handler sniffing the type, say) keeps
    its decision.
    """

    head: Head = field(default_factory=lambda: Head(CONTENT_BINARY))

    def render(self, sink: Writer, value: Any) -> None:
        """Render bytes, bytearray, or memoryview into the sink.

        Raises:
            InvalidInputError: If value is not bytes-like.
            SinkWriteError: If the sink rejects the write.
        """
        if not isinstance(value, (bytes, bytearray, memoryview)):
            msg = f"Data renderer requires bytes, got {type(value).__name__}"
            raise InvalidInputError(msg)

        data = bytes(value)
        write_head_preserving(self.head, sink)
        write_body(sink, data)
        logger.debug("Rendered %d data bytes", len(data))
