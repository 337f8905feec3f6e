import os
import sys
from datetime import date, timedelta

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from rwh.domain.rainfall_series import DailyObservation, RainfallSeries  # noqa: E402
from rwh.domain.site import SiteParameters  # noqa: E402

START = date(2016, 1, 1)


def make_series(values, start=START):
    """Series from a list of rainfall values; ``None`` marks a missing day."""
    return RainfallSeries(
        [
            DailyObservation(start + timedelta(days=i), missing=True)
            if v is None
            else DailyObservation(start + timedelta(days=i), float(v))
            for i, v in enumerate(values)
        ]
    )


@pytest.fixture
def every_tenth_day():
    """3 years, 10 mm on every 10th day (day 10, 20, ...)."""
    return make_series([10.0 if i % 10 == 9 else 0.0 for i in range(1096)])


@pytest.fixture
def small_site():
    return SiteParameters(roof_area_m2=100, daily_usage_L=50, runoff_coefficient=0.85)


@pytest.fixture
def seasonal_series():
    """3 years: 10 mm every 3rd day for half a year, then half a year dry."""
    values = []
    for i in range(3 * 365):
        d = i % 365
        values.append(10.0 if d < 182 and d % 3 == 0 else 0.0)
    return make_series(values, start=date(2015, 1, 1))


@pytest.fixture
def seasonal_site():
    return SiteParameters(roof_area_m2=100, daily_usage_L=150, runoff_coefficient=0.85)
