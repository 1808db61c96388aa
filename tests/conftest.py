import time
from datetime import datetime

import pytest

from jalalitools.config import ISO_SHIFT_ENV, TIME_AGO_SUFFIX_ENV

# US Eastern rules as a POSIX TZ string, so no zoneinfo database is needed.
EASTERN_TZ = "EST5EDT,M3.2.0,M11.1.0"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ISO_SHIFT_ENV, raising=False)
    monkeypatch.delenv(TIME_AGO_SUFFIX_ENV, raising=False)


@pytest.fixture
def fixed_now():
    return datetime(2024, 11, 6, 12, 0, 0)


@pytest.fixture
def eastern_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", EASTERN_TZ)
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
