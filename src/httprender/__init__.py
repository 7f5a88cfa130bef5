"""Response rendering for HTTP handlers: data, HTML, JSON, JSONP, text and XML."""

from __future__ import annotations

from httprender.core import (
    BufferPool,
    EncodingError,
    Head,
    InvalidInputError,
    RenderError,
    ResponseRecorder,
    ResponseWriter,
    SinkWriteError,
    TemplateExecutionError,
    Writer,
)
from httprender.output import (
    DataRenderer,
    HtmlRenderer,
    JsonpRenderer,
    JsonRenderer,
    Renderer,
    TextRenderer,
    XmlRenderer,
)

__version__ = "0.1.0"

__all__ = [
    "BufferPool",
    "DataRenderer",
    "EncodingError",
    "Head",
    "HtmlRenderer",
    "InvalidInputError",
    "JsonRenderer",
    "JsonpRenderer",
    "RenderError",
    "Renderer",
    "ResponseRecorder",
    "ResponseWriter",
    "SinkWriteError",
    "TemplateExecutionError",
    "TextRenderer",
    "Writer",
    "XmlRenderer",
    "__version__",
]
