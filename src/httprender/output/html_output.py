"""HTML renderer backed by a shared Jinja2 environment."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httprender.core.errors import TemplateExecutionError
from httprender.core.models import CONTENT_HTML, Head
from httprender.core.pool import BufferPool, get_default_pool
from httprender.output.base import write_body, write_head

if TYPE_CHECKING:
    from jinja2 import Environment

    from httprender.core.sink import Writer

logger = logging.getLogger(__name__)


def _template_context(binding: Any) -> Mapping[str, Any]:
    """Mappings become the template context; anything else is bound as ``data``."""
    if binding is None:
        return {}
    if isinstance(binding, Mapping):
        return binding
    return {"data": binding}


@dataclass(frozen=True)
class HtmlRenderer:
    """Executes a named template and writes the result.

    The template is rendered into a pooled buffer first. Headers and body
    reach the sink only after the template finished without error, so a
    failure halfway through never leaves a half-written page with a 200
    status behind.

    The environment is owned by the caller and must not be reconfigured
    while renders are in flight.
    """

    name: str
    templates: Environment
    head: Head = field(default_factory=lambda: Head(CONTENT_HTML))
    pool: BufferPool = field(default_factory=get_default_pool, compare=False, repr=False)

    def render(self, sink: Writer, value: Any) -> None:
        """Render the template bound to value into the sink.

        Raises:
            TemplateExecutionError: If the template is missing or fails, including
                errors raised by code the template calls.
            SinkWriteError: If the sink rejects the write.
        """
        with self.pool.borrow() as buf:
            try:
                template = self.templates.get_template(self.name)
                for chunk in template.generate(_template_context(value)):
                    buf.write(chunk.encode("utf-8"))
            except Exception as exc:
                msg = f"Template '{self.name}' failed: {exc}"
                raise TemplateExecutionError(msg) from exc

            write_head(self.head, sink)
            body = buf.getvalue()
            write_body(sink, body)

        logger.debug("Rendered template '%s' (%d bytes)", self.name, len(body))
