"""Plain text renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httprender.core.errors import EncodingError, InvalidInputError
from httprender.core.models import CONTENT_TEXT, Head
from httprender.output.base import write_body, write_head_preserving

if TYPE_CHECKING:
    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRenderer:
    """Writes a string verbatim as UTF-8, honoring a preset content type."""

    head: Head = field(default_factory=lambda: Head(CONTENT_TEXT))

    def render(self, sink: Writer, value: Any) -> None:
        """Render a string into the sink.

        Raises:
            InvalidInputError: If value is not a str.
            EncodingError: If the string holds lone surrogates.
            SinkWriteError: If the sink rejects the write.
        """
        if not isinstance(value, str):
            msg = f"Text renderer requires str, got {type(value).__name__}"
            raise InvalidInputError(msg)

        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            msg = f"Text is not encodable as UTF-8: {exc}"
            raise EncodingError(msg) from exc

        write_head_preserving(self.head, sink)
        write_body(sink, data)
        logger.debug("Rendered %d text bytes", len(data))
