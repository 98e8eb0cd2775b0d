"""Cron scheduling of the monitors (APScheduler)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from hfp_monitor.config import Settings, require
from hfp_monitor.monitors.backlog import run_backlog_monitor
from hfp_monitor.monitors.base import MonitorResult
from hfp_monitor.monitors.current_day import run_current_day_monitor
from hfp_monitor.monitors.disk_space import run_disk_space_monitor
from hfp_monitor.monitors.previous_day import run_previous_day_monitor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonitorJob:
    name: str
    cron_field: str  # Settings field holding the crontab expression
    runner: Callable[[Settings], MonitorResult]


MONITOR_JOBS: list[MonitorJob] = [
    MonitorJob("current_day", "hfp_current_day_monitor_cron", run_current_day_monitor),
    MonitorJob("previous_day", "hfp_previous_day_monitor_cron", run_previous_day_monitor),
    MonitorJob("pulsar_backlog", "pulsar_backlog_monitor_cron", run_backlog_monitor),
    MonitorJob("disk_space", "available_disk_space_monitor_cron", run_disk_space_monitor),
]


def get_job(name: str) -> MonitorJob:
    for job in MONITOR_JOBS:
        if job.name == name:
            return job
    raise KeyError(f"Unknown monitor: {name}")


def build_scheduler(settings: Settings, scheduler: BlockingScheduler | None = None) -> BlockingScheduler:
    """Register every monitor with its cron expression.

    All cron settings are validated before any job is added.
    """
    require(settings, *(job.cron_field for job in MONITOR_JOBS))

    scheduler = scheduler or BlockingScheduler(timezone=settings.timezone)
    for job in MONITOR_JOBS:
        cron = getattr(settings, job.cron_field)
        trigger = CronTrigger.from_crontab(cron, timezone=settings.timezone)
        scheduler.add_job(
            job.runner,
            trigger,
            args=[settings],
            id=job.name,
            name=job.name,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info("Scheduled %s monitor with cron: %s", job.name, cron)
    return scheduler


def run_once(settings: Settings, names: list[str]) -> list[MonitorResult]:
    """Run the given monitors immediately, in order (local debugging)."""
    results = []
    for name in names:
        result = get_job(name).runner(settings)
        logger.info(
            "%s: ok=%s alerts=%d sent=%d", result.monitor, result.ok, len(result.alerts), result.sent
        )
        results.append(result)
    return results
