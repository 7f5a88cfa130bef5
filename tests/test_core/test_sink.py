"""Tests for httprender.core.sink."""

from __future__ import annotations

from io import BytesIO

from httprender.core.sink import Headers, ResponseRecorder, ResponseWriter, Writer


class TestHeaders:
    """Verify case-insensitive header storage."""

    def test_get_is_case_insensitive(self) -> None:
        h = Headers()
        h["Content-Type"] = "text/plain"
        assert h["content-type"] == "text/plain"
        assert h.get("CONTENT-TYPE") == "text/plain"

    def test_missing_get_returns_none(self) -> None:
        assert Headers().get("Content-Type") is None

    def test_set_replaces_and_keeps_first_spelling(self) -> None:
        h = Headers()
        h["X-Request-Id"] = "a"
        h["x-request-id"] = "b"
        assert list(h) == ["X-Request-Id"]
        assert h["X-REQUEST-ID"] == "b"

    def test_delete(self) -> None:
        h = Headers({"Vary": "Accept"})
        del h["vary"]
        assert len(h) == 0

    def test_copy_is_independent(self) -> None:
        h = Headers({"Vary": "Accept"})
        c = h.copy()
        h["Vary"] = "Origin"
        assert c["Vary"] == "Accept"


class TestResponseRecorder:
    """Verify the recorder behaves like a transport."""

    def test_initial_state(self) -> None:
        r = ResponseRecorder()
        assert r.status is None
        assert r.sent_headers is None
        assert r.body == b""
        assert not r.header_written

    def test_write_header_snapshots_headers(self) -> None:
        r = ResponseRecorder()
        r.headers["Content-Type"] = "text/plain"
        r.write_header(202)
        r.headers["Content-Type"] = "text/late"
        assert r.status == 202
        assert r.sent_headers is not None
        assert r.sent_headers["Content-Type"] == "text/plain"

    def test_second_write_header_ignored(self) -> None:
        r = ResponseRecorder()
        r.write_header(404)
        r.write_header(500)
        assert r.status == 404

    def test_write_implies_200(self) -> None:
        r = ResponseRecorder()
        r.write(b"hi")
        assert r.status == 200

    def test_write_accumulates_and_counts(self) -> None:
        r = ResponseRecorder()
        assert r.write(b"ab") == 2
        r.write(b"cd")
        assert r.body == b"abcd"
        assert r.write_calls == 2


class TestSinkProtocols:
    """Verify the two sink variants are distinguishable."""

    def test_recorder_is_response_writer(self) -> None:
        assert isinstance(ResponseRecorder(), ResponseWriter)

    def test_bytesio_is_plain_writer(self) -> None:
        buf = BytesIO()
        assert isinstance(buf, Writer)
        assert not isinstance(buf, ResponseWriter)
