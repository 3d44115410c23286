"""Tests for ETag, Last-Modified and Cache-Control values."""

import base64
import hashlib

import pytest

from staticserve.http.validators import cache_control, http_date, strong_etag, weak_etag
from staticserve.sources import FileStat


class TestStrongETag:
    def test_format(self) -> None:
        digest = base64.urlsafe_b64encode(hashlib.sha1(b"hello").digest()).decode()  # noqa: S324
        assert strong_etag(b"hello") == f'"5-{digest}"'

    def test_empty_content(self) -> None:
        assert strong_etag(b"") == '"0-2jmj7l5rSw0yVb_vlWAYkK_YBwk="'

    def test_size_is_hex(self) -> None:
        assert strong_etag(b"x" * 255).startswith('"ff-')

    def test_deterministic(self) -> None:
        assert strong_etag(b"body{}") == strong_etag(b"body{}")

    def test_content_sensitive(self) -> None:
        assert strong_etag(b"a") != strong_etag(b"b")

    def test_url_safe_alphabet(self) -> None:
        value = strong_etag(bytes(range(256)) * 4)
        assert "+" not in value
        assert "/" not in value


class TestWeakETag:
    def test_format(self) -> None:
        assert weak_etag(FileStat(size=120, modified=1700000000)) == 'W/"78-6553f100"'

    def test_fractional_mtime_truncated(self) -> None:
        assert weak_etag(FileStat(size=120, modified=1700000000.9)) == 'W/"78-6553f100"'

    def test_empty_file(self) -> None:
        assert weak_etag(FileStat(size=0, modified=0)) == 'W/"0-0"'


class TestHttpDate:
    def test_gmt_format(self) -> None:
        assert http_date(1700000000) == "Tue, 14 Nov 2023 22:13:20 GMT"

    def test_epoch(self) -> None:
        assert http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"


class TestCacheControl:
    @pytest.mark.parametrize(
        ("max_age", "s_maxage", "expected"),
        [
            (31536000, 3600, "public, max-age=31536000, s-maxage=3600"),
            (60, 0, "public, max-age=60"),
            (0, 60, "public, s-maxage=60"),
            (0, 0, ""),
        ],
    )
    def test_value(self, max_age: int, s_maxage: int, expected: str) -> None:
        assert cache_control(max_age, s_maxage) == expected
