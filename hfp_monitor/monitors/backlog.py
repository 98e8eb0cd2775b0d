"""Pulsar backlog monitor for the HFP sink subscription."""

from __future__ import annotations

import logging

from hfp_monitor.config import Settings
from hfp_monitor.connectors.pulsar import fetch_backlog
from hfp_monitor.monitors.base import MonitorResult, Notifier, run_monitor

logger = logging.getLogger(__name__)

NAME = "pulsar_backlog"
FAILURE_MESSAGE = (
    "Something bad happened. There seems to be an issue with pulsar backlog message count. "
    "Investigate and fix the problem."
)
REQUIRED = ("hfp_monitor_pulsar_proxy_ip", "hfp_monitor_pulsar_admin_port")


def format_backlog_alert(millions: float) -> str:
    return (
        f"HFP-sink Pulsar backlog has ~{millions:.1f} million messages (as a comparison "
        "65 million messages corresponds to approximately data from 12 hours in congestion times). "
        "This is just for your info, it's good to keep an eye on this situation. "
        "Note: a long backlog can delay the time when blobs are loaded. Currently backlog size "
        "is 80 Gb so it can hold data from 3 days. Warning: after passing this boundary, "
        "HFP-data starts to disappear."
    )


def check_backlog(settings: Settings) -> list[str]:
    count = fetch_backlog(
        host=settings.hfp_monitor_pulsar_proxy_ip,
        port=settings.hfp_monitor_pulsar_admin_port,
        tenant=settings.pulsar_tenant,
        namespace=settings.pulsar_namespace,
        topic=settings.pulsar_topic,
        subscription=settings.pulsar_subscription,
        timeout=settings.http_timeout_sec,
    )
    millions = count / 1_000_000
    logger.info("Pulsar backlog message count: %.1fM (alert above %.0fM)", millions, settings.backlog_alert_millions)
    if millions > settings.backlog_alert_millions:
        return [format_backlog_alert(millions)]
    return []


def run_backlog_monitor(settings: Settings, notify: Notifier | None = None) -> MonitorResult:
    return run_monitor(
        NAME, settings, lambda: check_backlog(settings), FAILURE_MESSAGE, required=REQUIRED, notify=notify
    )
