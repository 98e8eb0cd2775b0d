"""Shared test helpers. Import in test files: from tests.helpers import FakeBlobStore."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime

from hfp_monitor.config import Settings
from hfp_monitor.gaps.segments import SegmentKey, all_day_keys


def make_settings(**overrides) -> Settings:
    """Settings with every required value filled, isolated from .env files."""
    defaults = {
        "hfp_current_day_monitor_cron": "*/50 * * * *",
        "hfp_previous_day_monitor_cron": "0 8 * * *",
        "pulsar_backlog_monitor_cron": "0 */2 * * *",
        "available_disk_space_monitor_cron": "30 * * * *",
        "hfp_monitor_slack_webhook_url": "https://hooks.slack.test/services/T/B/X",
        "hfp_monitor_slack_user_ids": "U111,U222",
        "hfp_monitor_target_environment": "TEST",
        "hfp_storage_connection_string": "DefaultEndpointsProtocol=https;AccountName=test;AccountKey=a2V5;",
        "hfp_storage_container_name": "hfp-v2",
        "hfp_monitor_pulsar_proxy_ip": "10.0.0.1",
        "hfp_monitor_pulsar_admin_port": "8080",
        "hfp_monitor_pulsar_bookie_disk_space_port": "9100",
        "hfp_monitor_pulsar_bookie_ip_1": "10.0.1.1",
        "hfp_monitor_pulsar_bookie_ip_2": "10.0.1.2",
        "hfp_monitor_pulsar_bookie_ip_3": "10.0.1.3",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def blob_name(date: str, hour: int, segment: int, tail: str = "_VP") -> str:
    return f"{date}T{hour:02d}-{segment}{tail}.csv.zst"


def day_blob_names(date: str, missing: Iterable[SegmentKey] = ()) -> list[str]:
    """One blob per segment of the day, except the missing ones."""
    skip = set(missing)
    return [blob_name(date, k.hour, k.segment) for k in all_day_keys() if k not in skip]


class FakeBlobStore:
    """In-memory BlobStore recording queries and property lookups."""

    def __init__(self, names: Iterable[str] = (), last_modified: dict[str, datetime] | None = None):
        self.names = list(names)
        self.last_modified = last_modified or {}
        self.queries: list[str] = []
        self.property_calls: list[str] = []

    def find_blob_names(self, tag_filter: str) -> Iterator[str]:
        self.queries.append(tag_filter)
        yield from self.names

    def get_last_modified(self, name: str) -> datetime | None:
        self.property_calls.append(name)
        return self.last_modified.get(name)


class Recorder:
    """Notifier that records messages instead of posting them."""

    def __init__(self, succeed: bool = True):
        self.messages: list[str] = []
        self.succeed = succeed

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.succeed
