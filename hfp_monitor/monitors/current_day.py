"""Current-day freshness monitor.

Designed to run AFTER HFP-data has been updated. HFP-sink uploads roughly
every 45 minutes, so the monitor runs every 50 minutes or so.

Two checks:
  1. some blob is named for one of the last N hours
  2. some blob was modified within the last M hours
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from hfp_monitor.config import Settings
from hfp_monitor.connectors.blob_storage import AzureBlobStore, BlobStore, oday_filter
from hfp_monitor.gaps.blob_name import BLOB_SUFFIX, parse_blob_name
from hfp_monitor.monitors.base import MonitorResult, Notifier, local_now, run_monitor

logger = logging.getLogger(__name__)

NAME = "current_day"
FAILURE_MESSAGE = (
    "Something bad happened. There seems to be an issue with monitoring current day HFP-data. "
    "Investigate and fix the problem."
)
REQUIRED = ("hfp_storage_connection_string", "hfp_storage_container_name")
ALERT_END = "Investigate and fix the problem as soon as possible."


def recent_hour_keys(now: datetime, hours: int) -> set[str]:
    """'YYYY-MM-DDTHH' (local wall clock) for now and the hours-1 elapsed hours before it.

    Stepping is done in UTC so DST changes skip or repeat local hours.
    """
    now_utc = now.astimezone(timezone.utc)
    return {
        (now_utc - timedelta(hours=i)).astimezone(now.tzinfo).strftime("%Y-%m-%dT%H")
        for i in range(hours)
    }


def _as_aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def check_current_day(settings: Settings, store: BlobStore, now: datetime) -> list[str]:
    container = settings.hfp_storage_container_name
    yesterday = (now - timedelta(days=1)).strftime("%Y-%m-%d")
    wanted_hours = recent_hour_keys(now, settings.blob_name_within_hours)

    found_name: str | None = None
    unique: dict[str, str] = {}  # hour_key -> first blob name
    for name in store.find_blob_names(oday_filter(container, ">=", yesterday)):
        parsed = parse_blob_name(name)
        if parsed is None:
            logger.warning("Skipping blob with unexpected name: %s", name)
            continue
        if found_name is None and parsed.hour_key in wanted_hours and name.endswith(BLOB_SUFFIX):
            found_name = name
        unique.setdefault(parsed.hour_key, name)

    # Newest hours first; one property lookup at a time, stop at the first fresh blob.
    min_time = now.astimezone(timezone.utc) - timedelta(hours=settings.blob_last_modified_within_hours)
    fresh_name: str | None = None
    for hour_key in sorted(unique, reverse=True):
        last_modified = store.get_last_modified(unique[hour_key])
        if last_modified is not None and _as_aware(last_modified) > min_time:
            fresh_name = unique[hour_key]
            break

    if fresh_name is None:
        return [
            "Critical alert: HFP sink might be down. Did not find any blob with lastModified "
            f"within {settings.blob_last_modified_within_hours} hours. {ALERT_END}"
        ]
    if found_name is None:
        return [
            f"Did not find any blob with name within {settings.blob_name_within_hours} hours. "
            f"{ALERT_END}"
        ]

    logger.info("[%s] Monitoring OK, found a blob with name: %s", now.strftime("%d.%m.%Y %H:%M"), found_name)
    return []


def run_current_day_monitor(
    settings: Settings,
    store: BlobStore | None = None,
    notify: Notifier | None = None,
    now: datetime | None = None,
) -> MonitorResult:
    def check() -> list[str]:
        blob_store = store or AzureBlobStore(
            settings.hfp_storage_connection_string, settings.hfp_storage_container_name
        )
        return check_current_day(settings, blob_store, now or local_now(settings))

    return run_monitor(NAME, settings, check, FAILURE_MESSAGE, required=REQUIRED, notify=notify)
