"""Shared fixtures for hfp_monitor tests.

Helper functions (make_settings, FakeBlobStore, etc.) are in tests/helpers.py.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from hfp_monitor.config import Settings
from tests.helpers import Recorder, make_settings

HELSINKI = ZoneInfo("Europe/Helsinki")


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def now() -> datetime:
    """Fixed clock: 2024-05-02 09:20 Helsinki time (target day 2024-05-01)."""
    return datetime(2024, 5, 2, 9, 20, tzinfo=HELSINKI)


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()
