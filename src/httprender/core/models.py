"""Header descriptor, content-type constants, and output formats."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from httprender.core.sink import ResponseWriter

CONTENT_TYPE = "Content-Type"
CONTENT_BINARY = "application/octet-stream"
CONTENT_HTML = "text/html"
CONTENT_JSON = "application/json"
CONTENT_JSONP = "application/javascript"
CONTENT_TEXT = "text/plain"
CONTENT_XML = "text/xml"
DEFAULT_CHARSET = "UTF-8"

_CHARSET_MARKER = "charset="


class OutputFormat(StrEnum):
    """Response body format."""

    data = "data"
    html = "html"
    json = "json"
    jsonp = "jsonp"
    text = "text"
    xml = "xml"


@dataclass(frozen=True)
class Head:
    """Content type and status code applied to a response before its body.

    A Head is written exactly once per render call and always before the
    first body byte, since most transports reject header changes after the
    status line has gone out.
    """

    content_type: str
    status: int = 200

    def write(self, sink: ResponseWriter) -> None:
        """Set the Content-Type header and write the status code."""
        sink.headers[CONTENT_TYPE] = self.content_type
        sink.write_header(self.status)

    def with_charset(self, charset: str = DEFAULT_CHARSET) -> Head:
        """Return a copy whose content type carries a charset parameter."""
        if _CHARSET_MARKER in self.content_type.lower():
            return self
        return replace(self, content_type=f"{self.content_type}; {_CHARSET_MARKER}{charset}")
