"""Tests for httprender.output.data_output."""

from __future__ import annotations

from io import BytesIO
from typing import TYPE_CHECKING

import pytest

from httprender.core.errors import InvalidInputError, SinkWriteError
from httprender.core.models import CONTENT_BINARY, CONTENT_TYPE, Head
from httprender.output.base import Renderer
from httprender.output.data_output import DataRenderer

if TYPE_CHECKING:
    from httprender.core.sink import ResponseRecorder
    from tests.conftest import FailingSink


class TestDataRenderer:
    """Verify raw byte rendering."""

    def test_default_head(self) -> None:
        assert DataRenderer().head == Head(CONTENT_BINARY)

    def test_satisfies_renderer_protocol(self) -> None:
        assert isinstance(DataRenderer(), Renderer)

    def test_writes_bytes_verbatim(self, recorder: ResponseRecorder) -> None:
        payload = b"\x89PNG\r\n\x1a\n\x00\x00"
        DataRenderer().render(recorder, payload)
        assert recorder.body == payload
        assert recorder.status == 200
        assert recorder.sent_headers is not None
        assert recorder.sent_headers[CONTENT_TYPE] == CONTENT_BINARY

    @pytest.mark.parametrize("value", [bytearray(b"abc"), memoryview(b"abc")])
    def test_accepts_bytes_like(self, recorder: ResponseRecorder, value: object) -> None:
        DataRenderer().render(recorder, value)
        assert recorder.body == b"abc"

    def test_custom_status(self, recorder: ResponseRecorder) -> None:
        DataRenderer(head=Head("image/png", 206)).render(recorder, b"x")
        assert recorder.status == 206
        assert recorder.sent_headers is not None
        assert recorder.sent_headers[CONTENT_TYPE] == "image/png"

    def test_preserves_existing_content_type(self, recorder: ResponseRecorder) -> None:
        recorder.headers["Content-Type"] = "text/custom"
        DataRenderer().render(recorder, b"x")
        assert recorder.sent_headers is not None
        assert recorder.sent_headers[CONTENT_TYPE] == "text/custom"

    def test_existing_content_type_keeps_configured_status(
        self, recorder: ResponseRecorder
    ) -> None:
        recorder.headers["content-type"] = "image/gif"
        DataRenderer(head=Head(CONTENT_BINARY, 203)).render(recorder, b"x")
        assert recorder.status == 203

    def test_plain_writer(self) -> None:
        buf = BytesIO()
        DataRenderer().render(buf, b"raw")
        assert buf.getvalue() == b"raw"

    @pytest.mark.parametrize("value", ["text", 42, None, [1, 2]])
    def test_rejects_non_bytes(self, recorder: ResponseRecorder, value: object) -> None:
        with pytest.raises(InvalidInputError, match="requires bytes"):
            DataRenderer().render(recorder, value)
        assert recorder.status is None
        assert recorder.write_calls == 0

    def test_invalid_input_is_type_error(self, recorder: ResponseRecorder) -> None:
        with pytest.raises(TypeError):
            DataRenderer().render(recorder, "text")

    def test_sink_failure(self, failing_sink: FailingSink) -> None:
        with pytest.raises(SinkWriteError, match="Connection reset"):
            DataRenderer().render(failing_sink, b"x")
