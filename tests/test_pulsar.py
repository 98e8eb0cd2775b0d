"""Tests for Pulsar admin / bookie disk-space connectors."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from hfp_monitor.connectors.pulsar import (
    fetch_backlog,
    fetch_used_disk_pct,
    parse_backlog,
    parse_used_disk_pct,
)
from hfp_monitor.errors import CollaboratorFailure

SUB = "transitlog_hfp_csv_sink"
STATS_URL = "http://10.0.0.1:8080/admin/v2/persistent/dev-transitdata/hfp/v2/stats"
_STATS_REQUEST = httpx.Request("GET", STATS_URL)
_DISK_REQUEST = httpx.Request("GET", "http://10.0.1.1:9100/")


class TestParseBacklog:
    def test_reads_msg_backlog(self):
        stats = {"subscriptions": {SUB: {"msgBacklog": 1234567}}}
        assert parse_backlog(stats, SUB) == 1234567

    def test_float_backlog(self):
        assert parse_backlog({"subscriptions": {SUB: {"msgBacklog": 10.0}}}, SUB) == 10

    @pytest.mark.parametrize(
        "stats",
        [
            {},
            [],
            {"subscriptions": None},
            {"subscriptions": {"other_sub": {"msgBacklog": 1}}},
            {"subscriptions": {SUB: "x"}},
        ],
    )
    def test_missing_subscription(self, stats):
        with pytest.raises(CollaboratorFailure, match="subscription"):
            parse_backlog(stats, SUB)

    @pytest.mark.parametrize("value", [None, "123", True, [1], float("nan"), float("inf"), float("-inf")])
    def test_non_numeric_backlog(self, value):
        stats = {"subscriptions": {SUB: {"msgBacklog": value}}}
        with pytest.raises(CollaboratorFailure, match="msgBacklog"):
            parse_backlog(stats, SUB)


class TestFetchBacklog:
    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_builds_url(self, mock_get):
        mock_get.return_value = httpx.Response(
            200, request=_STATS_REQUEST, json={"subscriptions": {SUB: {"msgBacklog": 42}}}
        )
        count = fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)
        assert count == 42
        mock_get.assert_called_once_with(STATS_URL, timeout=10.0)

    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_not_json(self, mock_get):
        mock_get.return_value = httpx.Response(200, request=_STATS_REQUEST, text="<html>")
        with pytest.raises(CollaboratorFailure, match="not JSON"):
            fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)

    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_nan_backlog_in_json(self, mock_get):
        """Python's json accepts NaN literals; they must not leak out as ValueError."""
        mock_get.return_value = httpx.Response(
            200,
            request=_STATS_REQUEST,
            text='{"subscriptions": {"transitlog_hfp_csv_sink": {"msgBacklog": NaN}}}',
        )
        with pytest.raises(CollaboratorFailure, match="msgBacklog"):
            fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)

    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_http_error(self, mock_get):
        mock_get.return_value = httpx.Response(503, request=_STATS_REQUEST)
        with pytest.raises(CollaboratorFailure, match="HTTP 503"):
            fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)

    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = httpx.ConnectTimeout("timed out")
        with pytest.raises(CollaboratorFailure, match="timed out"):
            fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)

    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_connection_refused(self, mock_get):
        mock_get.side_effect = httpx.ConnectError("Connection refused")
        with pytest.raises(CollaboratorFailure):
            fetch_backlog("10.0.0.1", "8080", "dev-transitdata", "hfp", "v2", SUB)


class TestParseUsedDisk:
    def test_percentage(self):
        assert parse_used_disk_pct("83%\n") == 83.0

    def test_without_percent_sign(self):
        assert parse_used_disk_pct(" 7 ") == 7.0

    @pytest.mark.parametrize("body", ["", "  \n", "%", "full", "120%", "-3%"])
    def test_invalid(self, body):
        with pytest.raises(CollaboratorFailure):
            parse_used_disk_pct(body)


class TestFetchUsedDisk:
    @patch("hfp_monitor.connectors.pulsar.httpx.get")
    def test_reads_body(self, mock_get):
        mock_get.return_value = httpx.Response(200, request=_DISK_REQUEST, text="65%\n")
        assert fetch_used_disk_pct("10.0.1.1", "9100") == 65.0
        mock_get.assert_called_once_with("http://10.0.1.1:9100/", timeout=10.0)
