from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings

from hfp_monitor.errors import MissingConfigurationError

logger = logging.getLogger(__name__)

SECRETS_DIR = Path("/run/secrets")


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # === Schedules (crontab expressions) ===
    hfp_current_day_monitor_cron: str = ""
    hfp_previous_day_monitor_cron: str = ""
    pulsar_backlog_monitor_cron: str = ""
    available_disk_space_monitor_cron: str = ""

    # === Slack ===
    hfp_monitor_slack_webhook_url: str = ""
    hfp_monitor_slack_user_ids: str = ""  # comma separated, e.g. "U123,U456"
    hfp_monitor_target_environment: str = ""  # shown as [ENV] in every alert

    # === Blob storage ===
    hfp_storage_connection_string: str = ""
    hfp_storage_container_name: str = ""

    # === Pulsar ===
    hfp_monitor_pulsar_proxy_ip: str = ""
    hfp_monitor_pulsar_admin_port: str = ""
    hfp_monitor_pulsar_bookie_disk_space_port: str = ""
    hfp_monitor_pulsar_bookie_ip_1: str = ""
    hfp_monitor_pulsar_bookie_ip_2: str = ""
    hfp_monitor_pulsar_bookie_ip_3: str = ""
    pulsar_tenant: str = "dev-transitdata"
    pulsar_namespace: str = "hfp"
    pulsar_topic: str = "v2"
    pulsar_subscription: str = "transitlog_hfp_csv_sink"

    # === Thresholds ===
    timezone: str = "Europe/Helsinki"  # operating day boundaries
    blob_name_within_hours: int = 12
    blob_last_modified_within_hours: int = 4
    backlog_alert_millions: float = 50.0  # 50M messages ~ 12h of data
    required_available_disk_pct: float = 20.0
    http_timeout_sec: float = 10.0
    bookie_request_delay_sec: float = 2.5

    @property
    def slack_user_ids(self) -> list[str]:
        return [u.strip() for u in self.hfp_monitor_slack_user_ids.split(",") if u.strip()]

    @property
    def bookie_ips(self) -> list[str]:
        return [
            self.hfp_monitor_pulsar_bookie_ip_1,
            self.hfp_monitor_pulsar_bookie_ip_2,
            self.hfp_monitor_pulsar_bookie_ip_3,
        ]


def _secret_version(filename: str, key: str) -> int | None:
    """'KEY' -> 0, 'KEY3' -> 3, anything else -> None."""
    if not filename.startswith(key):
        return None
    suffix = filename[len(key):]
    if suffix == "":
        return 0
    return int(suffix) if suffix.isdigit() else None


def read_secrets(secrets_dir: Path | str) -> dict[str, str]:
    """Collect Docker secrets matching Settings fields.

    A secret may be rotated as NAME, NAME2, NAME3...; the highest version wins.
    """
    path = Path(secrets_dir)
    if not path.is_dir():
        return {}

    filenames = [p.name for p in path.iterdir() if p.is_file()]
    values: dict[str, str] = {}
    for field_name in Settings.model_fields:
        key = field_name.upper()
        versions = [
            (v, name) for name in filenames
            if (v := _secret_version(name, key)) is not None
        ]
        if not versions:
            continue
        _, newest = max(versions)
        values[field_name] = (path / newest).read_text(encoding="utf-8").strip()
        logger.debug("Loaded %s from secret file %s", key, newest)
    return values


def load_settings(secrets_dir: Path | str | None = SECRETS_DIR, **overrides) -> Settings:
    """Build Settings once at process entry.

    Priority: explicit overrides > secret files > environment > .env
    """
    values = read_secrets(secrets_dir) if secrets_dir else {}
    values.update(overrides)
    return Settings(**values)


def require(settings: Settings, *field_names: str) -> None:
    """Raise MissingConfigurationError for the first empty field."""
    for name in field_names:
        if not getattr(settings, name):
            raise MissingConfigurationError(name.upper())
