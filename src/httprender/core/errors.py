"""Exceptions raised by renderers.

Every error is raised to the immediate caller of ``render``. Nothing in the
package logs or swallows a render failure.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for all render failures."""


class InvalidInputError(RenderError, TypeError):
    """The value's type does not match what the renderer requires."""


class EncodingError(RenderError, ValueError):
    """Serialization rejected the value (unsupported type, cycle, bad tag)."""


class TemplateExecutionError(RenderError):
    """The named template is missing or failed while executing."""


class SinkWriteError(RenderError, OSError):
    """The sink rejected a write (connection reset, disk full, ...)."""
