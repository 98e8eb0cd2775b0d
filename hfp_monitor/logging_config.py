"""Structured logging configuration.

JSON formatter + TimedRotatingFileHandler for monitor logs.
Every process start gets a run_id; monitor runs tag records with `monitor`.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import uuid
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "data" / "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RunIdFilter(logging.Filter):
    """Stamp every record with the process run_id."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = self.run_id
        return True


class JSONFormatter(logging.Formatter):
    """JSON structured log formatter with run_id / monitor support."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "run_id": getattr(record, "run_id", ""),
            "monitor": getattr(record, "monitor", ""),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    structured: bool = False,
    log_dir: Path | str | None = None,
) -> str:
    """Configure root logger. Returns the run_id for this process.

    Args:
        structured: If True, use JSON format. Controlled by STRUCTURED_LOGGING env var.
        log_dir: Override log directory. Defaults to data/logs/.
    """
    run_id = uuid.uuid4().hex[:12]
    log_path = Path(log_dir) if log_dir else LOG_DIR
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.handlers.clear()

    run_filter = RunIdFilter(run_id)

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    console.addFilter(run_filter)
    root.addHandler(console)

    # daily rotation, 30 days retention
    use_structured = structured or os.environ.get("STRUCTURED_LOGGING", "").lower() in ("true", "1")
    file_handler = logging.handlers.TimedRotatingFileHandler(
        log_path / "monitor.log",
        when="midnight",
        backupCount=30,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter() if use_structured else logging.Formatter(LOG_FORMAT))
    file_handler.addFilter(run_filter)
    root.addHandler(file_handler)

    # azure-core logs every HTTP request at INFO
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return run_id
