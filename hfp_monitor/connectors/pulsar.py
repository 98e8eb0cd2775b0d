"""Pulsar admin API and bookie disk-space endpoints.

Both are plain HTTP. Responses go through an explicit parse step that raises
CollaboratorFailure on missing or non-numeric fields.

NOTE: when running locally, open a tunnel to the Pulsar proxy / bookies first.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import httpx

from hfp_monitor.errors import CollaboratorFailure

logger = logging.getLogger(__name__)

# GET /admin/v2/:schema/:tenant/:namespace/:topic/stats
# https://pulsar.apache.org/docs/en/admin-api-topics/#get-stats
TOPIC_STATS_URL = "http://{host}:{port}/admin/v2/persistent/{tenant}/{namespace}/{topic}/stats"
BOOKIE_DISK_URL = "http://{host}:{port}/"


def _get(url: str, timeout: float) -> httpx.Response:
    try:
        resp = httpx.get(url, timeout=timeout)
        resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise CollaboratorFailure(f"Request timed out: {url}") from e
    except httpx.HTTPStatusError as e:
        raise CollaboratorFailure(f"HTTP {e.response.status_code} from {url}") from e
    except httpx.HTTPError as e:
        raise CollaboratorFailure(f"Request failed: {url}: {e}") from e
    return resp


def parse_backlog(stats: Any, subscription: str) -> int:
    """Read subscriptions.<subscription>.msgBacklog from topic stats JSON."""
    subscriptions = stats.get("subscriptions") if isinstance(stats, dict) else None
    sub_stats = subscriptions.get(subscription) if isinstance(subscriptions, dict) else None
    if not isinstance(sub_stats, dict):
        raise CollaboratorFailure(
            f"Could not find stats for subscription {subscription}. "
            "Has the pulsar IP / tenant / namespace / topic changed recently?"
        )

    backlog = sub_stats.get("msgBacklog")
    if (
        isinstance(backlog, bool)
        or not isinstance(backlog, (int, float))
        or not math.isfinite(backlog)
    ):
        raise CollaboratorFailure(f"Could not read backlog message count, msgBacklog was {backlog!r}")
    return int(backlog)


def fetch_backlog(
    host: str,
    port: str,
    tenant: str,
    namespace: str,
    topic: str,
    subscription: str,
    timeout: float = 10.0,
) -> int:
    """Current backlog message count of the sink subscription."""
    url = TOPIC_STATS_URL.format(host=host, port=port, tenant=tenant, namespace=namespace, topic=topic)
    resp = _get(url, timeout)
    try:
        stats = resp.json()
    except ValueError as e:
        raise CollaboratorFailure(f"Topic stats response was not JSON: {url}") from e
    return parse_backlog(stats, subscription)


def parse_used_disk_pct(body: str) -> float:
    """'83%' -> 83.0. The bookie script reports USED space."""
    raw = body.strip().replace("%", "").strip()
    if not raw:
        raise CollaboratorFailure("Empty disk space response")
    try:
        used = float(raw)
    except ValueError as e:
        raise CollaboratorFailure(f"Disk space response was not a number: {body!r}") from e
    if not 0 <= used <= 100:
        raise CollaboratorFailure(f"Disk space percentage out of range: {used}")
    return used


def fetch_used_disk_pct(host: str, port: str, timeout: float = 10.0) -> float:
    resp = _get(BOOKIE_DISK_URL.format(host=host, port=port), timeout)
    return parse_used_disk_pct(resp.text)
