"""Shared run wrapper for all monitors.

A monitor is a check function yielding alert texts (nothing = healthy).
run_monitor validates configuration, runs the check, and turns any failure
into the monitor's generic alert so a broken monitor is never silent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from hfp_monitor.config import Settings, require
from hfp_monitor.notifications.slack import send_alert

logger = logging.getLogger(__name__)

Notifier = Callable[[str], bool]


@dataclass
class MonitorResult:
    """Outcome of one monitor run."""

    monitor: str
    ok: bool = True  # False when the run itself failed
    alerts: list[str] = field(default_factory=list)
    sent: int = 0
    error: str | None = None

    @property
    def alerted(self) -> bool:
        return bool(self.alerts)


def local_now(settings: Settings) -> datetime:
    return datetime.now(ZoneInfo(settings.timezone))


def run_monitor(
    name: str,
    settings: Settings,
    check: Callable[[], Iterable[str]],
    failure_message: str,
    required: Iterable[str] = (),
    notify: Notifier | None = None,
) -> MonitorResult:
    if notify is None:
        def notify(message: str) -> bool:
            return send_alert(settings, message)

    result = MonitorResult(monitor=name)

    def deliver(message: str) -> None:
        result.alerts.append(message)
        try:
            if notify(message):
                result.sent += 1
        except Exception:
            logger.exception("Alert delivery failed for %s monitor", name)

    logger.info("Running %s monitor", name, extra={"monitor": name})
    try:
        require(settings, *required)
        # Alerts go out as soon as the check yields them, so a later failure
        # cannot swallow a threshold alert found earlier in the same run.
        for message in check():
            deliver(message)
    except Exception as e:
        logger.exception("%s monitor failed", name, extra={"monitor": name})
        result.ok = False
        result.error = str(e)
        deliver(failure_message)

    if not result.alerts:
        logger.info("%s monitor OK", name, extra={"monitor": name})
    return result
