#!/usr/bin/env python3
"""Tests for loading the notification source."""

import httpx
import pytest

from slipmatch.core.errors import SourceError
from slipmatch.notifications import fetch_source, is_remote_source, load_notification_lines


@pytest.mark.notifications
class TestLocalSource:
    """Test reading notification records from disk."""

    def test_lines_are_reversed_newest_first(self, tmp_path):
        source = tmp_path / "slips.txt"
        source.write_text("txref=OLD\ntxref=MIDDLE\ntxref=NEW\n", encoding="utf-8")

        lines = load_notification_lines(str(source))

        assert lines == ["txref=NEW", "txref=MIDDLE", "txref=OLD"]

    def test_blank_lines_are_skipped(self, tmp_path):
        source = tmp_path / "slips.txt"
        source.write_text("txref=A\n\n\ntxref=B\r\n", encoding="utf-8")

        assert load_notification_lines(str(source)) == ["txref=B", "txref=A"]

    def test_missing_file_raises_source_error(self, tmp_path):
        with pytest.raises(SourceError) as exc_info:
            load_notification_lines(str(tmp_path / "missing.txt"))

        assert "Error reading file" in str(exc_info.value)

    def test_non_utf8_file_raises_source_error(self, tmp_path):
        source = tmp_path / "slips.txt"
        source.write_bytes(b"to=J\xff;amountTHB=50.00 THB;date=2024-03-01;time=10:00;txref=T1\n")

        with pytest.raises(SourceError) as exc_info:
            load_notification_lines(str(source))

        assert "Error reading file" in str(exc_info.value)
        assert exc_info.value.context["source"] == str(source)


@pytest.mark.notifications
class TestRemoteSource:
    """Test downloading notification records."""

    def test_http_prefix_is_remote(self):
        assert is_remote_source("https://example.com/slips.txt")
        assert is_remote_source("http://example.com/slips.txt")
        assert not is_remote_source("/data/slips.txt")

    def test_downloads_with_get(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="txref=A\ntxref=B\n")

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            lines = load_notification_lines("https://example.com/slips.txt", client=client)

        assert lines == ["txref=B", "txref=A"]
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "https://example.com/slips.txt"

    def test_http_error_raises_source_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="not found")

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(SourceError) as exc_info:
                fetch_source("https://example.com/missing.txt", client=client)

        assert "Error downloading file" in str(exc_info.value)

    def test_transport_error_raises_source_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(SourceError):
                fetch_source("https://example.com/slips.txt", client=client)
