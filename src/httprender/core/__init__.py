"""Public API for httprender.core."""

from __future__ import annotations

from httprender.core.errors import (
    EncodingError,
    InvalidInputError,
    RenderError,
    SinkWriteError,
    TemplateExecutionError,
)
from httprender.core.models import (
    CONTENT_BINARY,
    CONTENT_HTML,
    CONTENT_JSON,
    CONTENT_JSONP,
    CONTENT_TEXT,
    CONTENT_TYPE,
    CONTENT_XML,
    DEFAULT_CHARSET,
    Head,
    OutputFormat,
)
from httprender.core.pool import BufferPool, get_default_pool
from httprender.core.sink import Headers, ResponseRecorder, ResponseWriter, Writer

__all__ = [
    "CONTENT_BINARY",
    "CONTENT_HTML",
    "CONTENT_JSON",
    "CONTENT_JSONP",
    "CONTENT_TEXT",
    "CONTENT_TYPE",
    "CONTENT_XML",
    "DEFAULT_CHARSET",
    "BufferPool",
    "EncodingError",
    "Head",
    "Headers",
    "InvalidInputError",
    "OutputFormat",
    "RenderError",
    "ResponseRecorder",
    "ResponseWriter",
    "SinkWriteError",
    "TemplateExecutionError",
    "Writer",
    "get_default_pool",
]
