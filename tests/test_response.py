"""Tests for staticserve.http.response: chainable response types."""

from staticserve.http.response import Response, StreamingResponse


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.body == ""
        assert r.status == 200
        assert r.content_type == "text/html; charset=utf-8"
        assert r.headers == ()

    def test_with_status(self) -> None:
        assert Response().with_status(404).status == 404

    def test_chained_headers(self) -> None:
        r = Response().with_header("A", "1").with_header("B", "2")
        assert r.headers == (("A", "1"), ("B", "2"))

    def test_with_headers_mapping_and_pairs(self) -> None:
        r = Response().with_headers({"A": "1"}).with_headers([("B", "2")])
        assert r.headers == (("A", "1"), ("B", "2"))

    def test_transformations_return_new_instances(self) -> None:
        original = Response("x")
        changed = original.with_content_type("text/css")
        assert original.content_type == "text/html; charset=utf-8"
        assert changed.content_type == "text/css"

    def test_header_lookup_is_case_insensitive(self) -> None:
        r = Response().with_header("ETag", '"a"')
        assert r.header("etag") == '"a"'
        assert r.header("last-modified") is None

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"


class TestStreamingResponse:
    def test_defaults(self) -> None:
        r = StreamingResponse(chunks=iter([b"a"]))
        assert r.status == 200
        assert r.content_type == "application/octet-stream"

    def test_chainable(self) -> None:
        chunks = iter([b"a"])
        r = (
            StreamingResponse(chunks=chunks)
            .with_status(206)
            .with_content_type("text/css")
            .with_headers([("ETag", '"a"')])
        )
        assert r.chunks is chunks
        assert r.status == 206
        assert r.content_type == "text/css"
        assert r.header("etag") == '"a"'
