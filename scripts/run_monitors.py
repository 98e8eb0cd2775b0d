#!/usr/bin/env python3
"""HFP sink monitor: schedules all monitors with cron, or runs them once.

Usage:
    # Start the scheduler (crons from env / .env / /run/secrets)
    python scripts/run_monitors.py

    # Run a single monitor right now (local debugging)
    python scripts/run_monitors.py --once previous_day

    # Run every monitor once
    python scripts/run_monitors.py --once all
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

log = logging.getLogger(__name__)


def main() -> None:
    from hfp_monitor.config import SECRETS_DIR, load_settings
    from hfp_monitor.logging_config import setup_logging
    from hfp_monitor.monitors.base import local_now
    from hfp_monitor.scheduler import MONITOR_JOBS, build_scheduler, run_once

    names = [job.name for job in MONITOR_JOBS]
    parser = argparse.ArgumentParser(description="HFP sink data-freshness monitor")
    parser.add_argument(
        "--once",
        choices=names + ["all"],
        default=None,
        help="Run a monitor immediately instead of scheduling",
    )
    parser.add_argument(
        "--secrets-dir",
        type=str,
        default=str(SECRETS_DIR),
        help="Docker secrets directory (default: /run/secrets)",
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Write JSON lines to the log file",
    )
    args = parser.parse_args()

    run_id = setup_logging(structured=args.structured_logs)
    settings = load_settings(secrets_dir=args.secrets_dir)
    log.info("=== HFP monitor start (run_id=%s, env=%s) ===", run_id, settings.hfp_monitor_target_environment)

    if args.once:
        results = run_once(settings, names if args.once == "all" else [args.once])
        sys.exit(0 if all(r.ok for r in results) else 1)

    scheduler = build_scheduler(settings)
    for job in scheduler.get_jobs():
        log.info("Next %s monitoring will run: %s", job.name, job.trigger.get_next_fire_time(None, local_now(settings)))
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        log.info("Scheduler stopped")


if __name__ == "__main__":
    main()
