from datetime import date

import pandas as pd
import pytest

from conftest import make_series
from rwh import DailyObservation, InvalidInput, RainfallSeries, RainwaterAnalyzer, SiteParameters
from rwh.core.water_balance import WaterBalanceSimulator


def test_missing_day_has_zero_rainfall():
    obs = DailyObservation(date(2016, 1, 1), 12.0, missing=True)
    assert obs.rainfall_mm == 0.0


@pytest.mark.parametrize("rain", [-0.1, float("nan")])
def test_invalid_rainfall(rain):
    with pytest.raises(InvalidInput):
        DailyObservation(date(2016, 1, 1), rain)


def test_series_must_be_strictly_increasing():
    a = DailyObservation(date(2016, 1, 2), 1.0)
    b = DailyObservation(date(2016, 1, 1), 1.0)
    with pytest.raises(InvalidInput):
        RainfallSeries([a, b])
    with pytest.raises(InvalidInput):
        RainfallSeries([a, a])
    # gaps are fine
    RainfallSeries([b, DailyObservation(date(2016, 3, 1), 0.0)])


def test_series_counters():
    s = make_series([1.0, None, 2.5])
    assert len(s) == 3
    assert s.missing_days == 1
    assert s.total_rainfall_mm == 3.5
    assert s.years == pytest.approx(3 / 365.25)


def test_frame_round_trip_with_nan_as_missing():
    df = pd.DataFrame(
        {"date": pd.date_range("2016-01-01", periods=3), "rainfall_mm": [1.0, float("nan"), 0.0]}
    )
    s = RainfallSeries.from_frame(df)
    assert [o.missing for o in s] == [False, True, False]
    assert s[0].date == date(2016, 1, 1)
    out = s.to_frame()
    assert list(out.columns) == ["date", "rainfall_mm", "missing", "quality"]
    assert list(out["missing"]) == [False, True, False]


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(roof_area_m2=0),
        dict(daily_usage_L=0),
        dict(runoff_coefficient=0),
        dict(runoff_coefficient=1.2),
        dict(water_rate_per_kL=-1),
    ],
)
def test_site_validation(kwargs):
    with pytest.raises(InvalidInput):
        SiteParameters(**kwargs)


def test_site_defaults():
    site = SiteParameters()
    assert (site.roof_area_m2, site.daily_usage_L, site.runoff_coefficient) == (180, 500, 0.85)
    assert site.water_rate_per_kL == 3.5


@pytest.mark.parametrize(
    "days",
    [
        [date(2016, 1, 3), date(2016, 1, 1), date(2016, 1, 1)],
        [date(2016, 1, 1), date(2016, 1, 2), date(2016, 1, 2)],
        [date(2016, 1, d) for d in range(5, 0, -1)],
    ],
)
def test_plain_lists_are_checked_for_order(days):
    records = [DailyObservation(d, 0.0) for d in days]
    with pytest.raises(InvalidInput):
        WaterBalanceSimulator(records, SiteParameters(100, 400))
    with pytest.raises(InvalidInput):
        RainwaterAnalyzer(records)


def test_ordered_plain_list_is_accepted():
    records = [DailyObservation(date(2016, 1, d), 0.0) for d in range(1, 6)]
    res = RainwaterAnalyzer(records, SiteParameters(100, 400)).simulate(1000)
    assert all(p.start_date <= p.end_date for p in res.empty_periods)
    assert res.summary.total_days == 5
