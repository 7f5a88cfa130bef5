"""Public API for httprender.output."""

from __future__ import annotations

from httprender.output.base import Renderer
from httprender.output.data_output import DataRenderer
from httprender.output.html_output import HtmlRenderer
from httprender.output.json_output import JsonRenderer, encode_json
from httprender.output.jsonp_output import JsonpRenderer
from httprender.output.text_output import TextRenderer
from httprender.output.xml_output import XmlRenderer, encode_xml

__all__ = [
    "DataRenderer",
    "HtmlRenderer",
    "JsonRenderer",
    "JsonpRenderer",
    "Renderer",
    "TextRenderer",
    "XmlRenderer",
    "encode_json",
    "encode_xml",
]
