"""Slack incoming-webhook notification sender."""

from __future__ import annotations

import logging

import httpx

from hfp_monitor.config import Settings

logger = logging.getLogger(__name__)


def format_alert(message: str, user_ids: list[str], environment: str = "") -> str:
    """'Hey <@U1> <@U2>, [PROD] message'. Mention prefix only when ids exist."""
    parts = []
    if user_ids:
        parts.append("Hey " + " ".join(f"<@{u}>" for u in user_ids) + ",")
    if environment:
        parts.append(f"[{environment}]")
    parts.append(message)
    return " ".join(parts)


def send_alert(settings: Settings, message: str) -> bool:
    """Post an alert to Slack. Returns True on success.

    Failures are logged and not retried; the next scheduled run is the retry.
    """
    if not settings.hfp_monitor_slack_webhook_url:
        logger.warning("Slack webhook not configured, skipping alert: %s", message)
        return False

    text = format_alert(
        message,
        settings.slack_user_ids,
        settings.hfp_monitor_target_environment,
    )
    logger.info("Sending a message to Slack: %s", text)

    try:
        resp = httpx.post(
            settings.hfp_monitor_slack_webhook_url,
            json={"type": "mrkdwn", "text": text},
            timeout=settings.http_timeout_sec,
        )
        resp.raise_for_status()
        return True
    except httpx.HTTPStatusError as e:
        logger.error("Slack HTTP error %d: %s", e.response.status_code, e)
        return False
    except httpx.TimeoutException:
        logger.warning("Slack request timed out")
        return False
    except Exception:
        logger.exception("Failed to send Slack message")
        return False
