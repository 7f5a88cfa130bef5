"""XML renderer and the value-to-element marshaling behind it.

Marshaling rules:

- an ``xml.etree.ElementTree.Element`` is serialized as is, once its tag and
  attribute names and its text are checked;
- an object with an ``__xml__()`` method is serialized through the element
  it returns;
- a dataclass becomes an element named by its ``xml_name`` class attribute,
  or by its class name. Each field becomes a child element named after the
  field. Field metadata ``{"xml": ...}`` changes that: ``"attr"`` makes an
  attribute, ``"chardata"`` makes the element's text, ``"-"`` skips the
  field, and any other string renames the child;
- ``None`` fields are omitted, and list or tuple fields repeat the child
  once per item;
- a top-level list or tuple marshals each item in turn;
- a top-level scalar is wrapped in an element named after its type.

Mappings, sets and anything else without an obvious element shape are
rejected with ``EncodingError``.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any
from uuid import UUID

from httprender.core.errors import EncodingError
from httprender.core.models import CONTENT_XML, Head
from httprender.output.base import write_body, write_head

if TYPE_CHECKING:
    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)

INDENT = "  "
XML_METADATA_KEY = "xml"

_NAME_RE = re.compile(r"^(?:\{[^}]*\})?[^\W\d][\w.\-]*$")
_TEXT_TYPES = (str, int, float, Decimal, UUID, PurePath)
_TEMPORAL_TYPES = (datetime, date, time)


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_scalar(value: object) -> bool:
    return isinstance(value, (*_TEXT_TYPES, *_TEMPORAL_TYPES, bytes, Enum))


def _scalar_text(value: object) -> str:
    """Convert a scalar to its XML text form."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, _TEMPORAL_TYPES):
        return value.isoformat()
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"xml: bytes value is not valid UTF-8: {exc}"
            raise EncodingError(msg) from exc
    return str(value)


def _check_name(name: object) -> str:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        msg = f"xml: invalid element or attribute name {name!r}"
        raise EncodingError(msg)
    return name


class _Marshaler:
    """Builds an element tree for one value, tracking dataclasses on the stack."""

    def __init__(self) -> None:
        self._active: set[int] = set()

    def root(self, value: Any) -> ET.Element:
        """Return the element for a top-level, non-sequence value."""
        if isinstance(value, ET.Element):
            return value
        if hasattr(value, "__xml__"):
            return self._custom(value)
        if _is_dataclass_instance(value):
            tag = getattr(type(value), "xml_name", type(value).__name__)
            return self._struct(value, tag)
        if _is_scalar(value):
            elem = ET.Element(_check_name(type(value).__name__))
            elem.text = _scalar_text(value)
            return elem
        msg = f"xml: unsupported type: {type(value).__name__}"
        raise EncodingError(msg)

    def _custom(self, value: Any) -> ET.Element:
        elem = value.__xml__()
        if not isinstance(elem, ET.Element):
            returned = type(elem).__name__
            msg = f"xml: {type(value).__name__}.__xml__() returned {returned}, not Element"
            raise EncodingError(msg)
        return elem

    def _struct(self, value: Any, tag: str) -> ET.Element:
        marker = id(value)
        if marker in self._active:
            msg = f"xml: cycle detected at {type(value).__name__}"
            raise EncodingError(msg)
        self._active.add(marker)
        try:
            elem = ET.Element(_check_name(tag))
            for f in dataclasses.fields(value):
                self._field(elem, f, getattr(value, f.name))
        finally:
            self._active.discard(marker)
        return elem

    def _field(self, parent: ET.Element, f: dataclasses.Field[Any], value: Any) -> None:
        mode = f.metadata.get(XML_METADATA_KEY, f.name)
        if mode == "-" or value is None:
            return
        if mode == "attr":
            if not _is_scalar(value):
                kind = type(value).__name__
                msg = f"xml: attribute field '{f.name}' must be a scalar, got {kind}"
                raise EncodingError(msg)
            parent.set(_check_name(f.name), _scalar_text(value))
            return
        if mode == "chardata":
            if not _is_scalar(value):
                kind = type(value).__name__
                msg = f"xml: chardata field '{f.name}' must be a scalar, got {kind}"
                raise EncodingError(msg)
            parent.text = (parent.text or "") + _scalar_text(value)
            return

        if isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, (list, tuple)):
                    msg = f"xml: nested sequence in field '{f.name}' is not supported"
                    raise EncodingError(msg)
                if item is not None:
                    parent.append(self._child(item, mode))
            return
        parent.append(self._child(value, mode))

    def _child(self, value: Any, tag: str) -> ET.Element:
        if isinstance(value, ET.Element):
            return value
        if hasattr(value, "__xml__"):
            return self._custom(value)
        if _is_dataclass_instance(value):
            return self._struct(value, tag)
        if _is_scalar(value):
            elem = ET.Element(_check_name(tag))
            elem.text = _scalar_text(value)
            return elem
        msg = f"xml: unsupported type for '{tag}': {type(value).__name__}"
        raise EncodingError(msg)


def _check_tree(elem: ET.Element) -> None:
    """Reject caller-built elements that would serialize to malformed XML."""
    for node in elem.iter():
        if node.tag in (ET.Comment, ET.ProcessingInstruction):
            continue
        _check_name(node.tag)
        for name, attr in node.attrib.items():
            _check_name(name)
            if not isinstance(attr, str):
                msg = f"xml: attribute {name!r} of <{node.tag}> is {type(attr).__name__}, not str"
                raise EncodingError(msg)
        for part in (node.text, node.tail):
            if part is not None and not isinstance(part, str):
                msg = f"xml: text of <{node.tag}> is {type(part).__name__}, not str"
                raise EncodingError(msg)


def _serialize(elem: ET.Element, *, indent: bool) -> str:
    _check_tree(elem)
    if indent:
        # ET.indent mutates in place; callers may have passed their own Element.
        elem = copy.deepcopy(elem)
        ET.indent(elem, space=INDENT)
        elem.tail = None
    try:
        return ET.tostring(elem, encoding="unicode", short_empty_elements=False)
    except (TypeError, ValueError) as exc:
        msg = f"xml: cannot serialize <{elem.tag}>: {exc}"
        raise EncodingError(msg) from exc


def encode_xml(value: Any, *, indent: bool = False) -> bytes:
    """Serialize a value to UTF-8 XML bytes without an XML declaration.

    Raises:
        EncodingError: If the value cannot be marshaled.
    """
    if value is None:
        return b""

    items = value if isinstance(value, (list, tuple)) else (value,)
    marshaler = _Marshaler()
    try:
        parts = [
            _serialize(marshaler.root(item), indent=indent) for item in items if item is not None
        ]
    except RecursionError as exc:
        msg = f"xml: value of type {type(value).__name__} is nested too deeply"
        raise EncodingError(msg) from exc
    separator = "\n" if indent else ""
    try:
        return separator.join(parts).encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"xml: text is not encodable as UTF-8: {exc}"
        raise EncodingError(msg) from exc


@dataclass(frozen=True)
class XmlRenderer:
    """Renders a value as XML, serializing fully before writing."""

    head: Head = field(default_factory=lambda: Head(CONTENT_XML))
    indent: bool = False
    prefix: bytes = b""

    def render(self, sink: Writer, value: Any) -> None:
        """Render the value as XML into the sink.

        Raises:
            EncodingError: If the value cannot be marshaled.
            SinkWriteError: If the sink rejects a write.
        """
        result = encode_xml(value, indent=self.indent)
        if self.indent:
            result += b"\n"

        write_head(self.head, sink)
        if self.prefix:
            write_body(sink, self.prefix)
        write_body(sink, result)
        logger.debug("Rendered %d XML bytes", len(self.prefix) + len(result))
