"""Previous-day gap monitor.

Runs once per day, late enough that HFP-sink has written all of yesterday's
data. Every quarter hour of yesterday should have at least one blob.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from hfp_monitor.config import Settings
from hfp_monitor.connectors.blob_storage import AzureBlobStore, BlobStore, oday_filter
from hfp_monitor.gaps.presence import PresenceSet, extract_gaps
from hfp_monitor.gaps.ranges import coalesce, format_gap_alert
from hfp_monitor.monitors.base import MonitorResult, Notifier, local_now, run_monitor

logger = logging.getLogger(__name__)

NAME = "previous_day"
FAILURE_MESSAGE = (
    "Something bad happened. There seems to be an issue with monitoring HFP-data. "
    "Investigate and fix the problem."
)
REQUIRED = ("hfp_storage_connection_string", "hfp_storage_container_name")


def check_previous_day(settings: Settings, store: BlobStore, now: datetime) -> list[str]:
    target_date = (now - timedelta(days=1)).strftime("%Y-%m-%d")
    container = settings.hfp_storage_container_name
    logger.info("Checking HFP gaps for %s in container %s", target_date, container)

    presence = PresenceSet.build(target_date)
    listed = 0
    for name in store.find_blob_names(oday_filter(container, "=", target_date)):
        listed += 1
        presence.mark(name)

    gaps = extract_gaps(presence)
    logger.info(
        "Listed %d blobs: %d/%d segments observed, %d unparseable names",
        listed,
        presence.observed_count,
        len(presence),
        len(presence.skipped_names),
    )
    if not gaps:
        return []
    return [format_gap_alert(target_date, coalesce(gaps))]


def run_previous_day_monitor(
    settings: Settings,
    store: BlobStore | None = None,
    notify: Notifier | None = None,
    now: datetime | None = None,
) -> MonitorResult:
    def check() -> list[str]:
        blob_store = store or AzureBlobStore(
            settings.hfp_storage_connection_string, settings.hfp_storage_container_name
        )
        return check_previous_day(settings, blob_store, now or local_now(settings))

    return run_monitor(NAME, settings, check, FAILURE_MESSAGE, required=REQUIRED, notify=notify)
