"""Shared test fixtures for httprender."""

from __future__ import annotations

import pytest
from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

from httprender.core.pool import BufferPool
from httprender.core.sink import ResponseRecorder


class FailingSink:
    """Plain writer whose every write fails like a reset connection."""

    def __init__(self) -> None:
        self.attempts = 0

    def write(self, data: bytes) -> int:
        self.attempts += 1
        msg = "Connection reset by peer"
        raise ConnectionResetError(msg)


@pytest.fixture
def recorder() -> ResponseRecorder:
    """A fresh header-capable in-memory sink."""
    return ResponseRecorder()


@pytest.fixture
def failing_sink() -> FailingSink:
    """A sink that rejects all writes."""
    return FailingSink()


@pytest.fixture
def pool() -> BufferPool:
    """An isolated buffer pool, so tests don't share the process-wide one."""
    return BufferPool(size=4)


@pytest.fixture
def templates() -> Environment:
    """A compiled template set with good, failing and nested templates.

    Templates:
        hello.html      -> greets ``name`` from a mapping binding
        item.html       -> reads ``data.title`` from a non-mapping binding
        broken.html     -> emits some markup, then hits an undefined variable
        calls.html      -> emits some markup, then calls ``action`` from the binding
        page.html       -> extends layout.html
        layout.html     -> base layout with a content block
    """
    return Environment(
        loader=DictLoader(
            {
                "hello.html": "<h1>Hello {{ name }}</h1>",
                "item.html": "<p>{{ data.title }}</p>",
                "broken.html": "<h1>start</h1>{{ missing.attribute }}<p>end</p>",
                "calls.html": "<p>before</p>{{ action() }}",
                "layout.html": "<html><body>{% block content %}{% endblock %}</body></html>",
                "page.html": (
                    '{% extends "layout.html" %}{% block content %}<p>{{ body }}</p>{% endblock %}'
                ),
            }
        ),
        autoescape=select_autoescape(default_for_string=True, default=True),
        undefined=StrictUndefined,
    )
