"""Available disk space monitor for Pulsar bookies.

Each bookie VM runs a small script that answers on a port with the USED
disk percentage of the ledger disk, e.g. "83%".
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from hfp_monitor.config import Settings
from hfp_monitor.connectors.pulsar import fetch_used_disk_pct
from hfp_monitor.monitors.base import MonitorResult, Notifier, run_monitor

logger = logging.getLogger(__name__)

NAME = "disk_space"
FAILURE_MESSAGE = (
    "Something bad happened. There seems to be an issue with available disk space monitor. "
    "Investigate and fix the problem."
)
REQUIRED = (
    "hfp_monitor_pulsar_bookie_disk_space_port",
    "hfp_monitor_pulsar_bookie_ip_1",
    "hfp_monitor_pulsar_bookie_ip_2",
    "hfp_monitor_pulsar_bookie_ip_3",
)


def iter_disk_space_alerts(settings: Settings, sleep: Callable[[float], None] = time.sleep) -> Iterator[str]:
    """Query bookies one by one, yielding each low-space alert before the next request.

    A failed request stops the run; alerts already yielded stay sent.
    """
    required = settings.required_available_disk_pct
    for i, ip in enumerate(settings.bookie_ips):
        if i:
            sleep(settings.bookie_request_delay_sec)
        used = fetch_used_disk_pct(
            ip, settings.hfp_monitor_pulsar_bookie_disk_space_port, timeout=settings.http_timeout_sec
        )
        available = 100 - used
        logger.info("Bookie %s available disk space: %g%%", ip, available)
        if available < required:
            yield (
                f"Pulsar bookie ({ip}) available disk space was: {available:g}%, required available "
                f"percentage is: {required:g}%. Investigate this and fix as soon as possible."
            )


def check_disk_space(settings: Settings, sleep: Callable[[float], None] = time.sleep) -> list[str]:
    return list(iter_disk_space_alerts(settings, sleep=sleep))


def run_disk_space_monitor(
    settings: Settings,
    notify: Notifier | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> MonitorResult:
    return run_monitor(
        NAME,
        settings,
        lambda: iter_disk_space_alerts(settings, sleep=sleep),
        FAILURE_MESSAGE,
        required=REQUIRED,
        notify=notify,
    )
