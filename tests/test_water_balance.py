import numpy as np
import pytest

from conftest import make_series
from rwh.core.water_balance import (
    WaterBalanceSimulator,
    roof_potential,
    run_water_balance,
    simulate_many,
)
from rwh.domain.results import PeriodKind
from rwh.domain.site import SiteParameters
from rwh.errors import InvalidInput


def test_golden_first_twenty_days(every_tenth_day, small_site):
    res = WaterBalanceSimulator(every_tenth_day, small_site).run(2000)
    levels = [s.level_L for s in res.daily_states[:20]]
    expected = [950, 900, 850, 800, 750, 700, 650, 600, 550, 1350,
                1300, 1250, 1200, 1150, 1100, 1050, 1000, 950, 900, 1700]
    assert levels == expected
    assert [s.inflow_L for s in res.daily_states[:20]] == [850.0 if i % 10 == 9 else 0.0 for i in range(20)]
    assert all(s.usage_L == 50 for s in res.daily_states)
    assert all(s.overflow_L == 0 and s.deficit_L == 0 for s in res.daily_states[:20])


def test_overflow_when_tank_full(every_tenth_day, small_site):
    res = WaterBalanceSimulator(every_tenth_day, small_site).run(1000, initial_level_L=1000)
    day10 = res.daily_states[9]
    assert day10.level_L == 1000
    assert day10.overflow_L == 350
    assert day10.deficit_L == 0


def test_all_missing_drains_and_flushes_open_period():
    series = make_series([None] * 30)
    res = run_water_balance(series, tank_size_L=1000, roof_area_m2=100, daily_usage_L=150)
    levels = [s.level_L for s in res.daily_states]
    assert levels[:4] == [350, 200, 50, 0]
    assert all(lvl == 0 for lvl in levels[3:])
    assert res.daily_states[3].deficit_L == 100
    assert all(s.deficit_L == 150 for s in res.daily_states[4:])

    s = res.summary
    assert s.days_empty == 27
    assert s.reliability_percent == (30 - 27) / 30 * 100
    assert s.total_deficit_L == 100 + 26 * 150

    # last day is mid-period: the open period must be flushed
    assert len(res.empty_periods) == 1
    p = res.empty_periods[0]
    assert p.kind is PeriodKind.EMPTY
    assert p.start_date == series[3].date
    assert p.end_date == series[-1].date
    assert p.duration == 27
    assert p.year == 2016


def test_initial_level_is_clamped():
    series = make_series([0.0, 0.0])
    res = run_water_balance(series, 1000, 100, 100, initial_level_L=5000)
    assert res.daily_states[0].level_L == 900
    res = run_water_balance(series, 1000, 100, 100, initial_level_L=-10)
    assert res.daily_states[0].level_L == 0
    assert res.daily_states[0].deficit_L == 100


def test_stress_periods_track_minimum_level():
    # 1000 L tank, stress below 200 L
    series = make_series([0, 0, 0, 0, 10, 0])
    res = run_water_balance(series, 1000, 100, 150, runoff_coefficient=1.0)
    # levels: 350, 200, 50, 0, 850, 700
    assert [s.is_stressed for s in res.daily_states] == [False, False, True, True, False, False]
    assert len(res.stress_periods) == 1
    p = res.stress_periods[0]
    assert p.kind is PeriodKind.STRESS
    assert p.duration == 2
    assert p.min_level_L == 0
    assert res.summary.days_below_stress == 2
    assert res.summary.days_below_50pct == 4


@pytest.mark.parametrize("capacity", [500, 1500, 4000, 20000])
def test_invariants_on_random_record(capacity):
    rng = np.random.default_rng(42)
    values = [
        None if rng.random() < 0.05 else float(rng.gamma(0.5, 8.0)) * (rng.random() < 0.3)
        for _ in range(800)
    ]
    series = make_series(values)
    res = WaterBalanceSimulator(series, SiteParameters(120, 300)).run(capacity)

    for s in res.daily_states:
        assert 0 <= s.level_L <= capacity
        assert s.overflow_L == 0 or s.deficit_L == 0

    empty_days = sum(s.level_L == 0 for s in res.daily_states)
    assert res.summary.days_empty == empty_days == sum(p.duration for p in res.empty_periods)
    assert 0 <= res.summary.reliability_percent <= 100
    assert (res.summary.reliability_percent == 100) == (res.summary.days_empty == 0)

    # periods are ordered and do not overlap
    for prev, curr in zip(res.empty_periods, res.empty_periods[1:]):
        assert prev.end_date < curr.start_date
    stressed = sum(s.is_stressed for s in res.daily_states)
    assert stressed == sum(p.duration for p in res.stress_periods)


def test_worst_dry_spell_is_attached_and_capacity_independent(seasonal_series, seasonal_site):
    sim = WaterBalanceSimulator(seasonal_series, seasonal_site)
    a, b = sim.run(1000), sim.run(50000)
    assert a.worst_dry_spell == b.worst_dry_spell
    assert a.worst_dry_spell.kind is PeriodKind.DRY_AVERAGE


def test_result_to_frame(every_tenth_day, small_site):
    df = WaterBalanceSimulator(every_tenth_day, small_site).run(2000).to_frame()
    assert len(df) == 1096
    assert {"date", "level_L", "overflow_L", "deficit_L", "is_empty"} <= set(df.columns)


def test_simulate_many_keyed_by_capacity(every_tenth_day, small_site):
    results = simulate_many(every_tenth_day, small_site, [1000, 2000])
    assert list(results) == [1000, 2000]
    assert results[2000].tank_size_L == 2000


def test_roof_potential(every_tenth_day):
    pot = roof_potential(every_tenth_day, 100, 0.85)
    assert pot.valid_days == 1096
    assert pot.total_L == pytest.approx(109 * 850)
    assert pot.years == pytest.approx(1096 / 365.25)
    with pytest.raises(InvalidInput):
        roof_potential(make_series([None, None]), 100)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(tank_size_L=0, roof_area_m2=100, daily_usage_L=50),
        dict(tank_size_L=1000, roof_area_m2=0, daily_usage_L=50),
        dict(tank_size_L=1000, roof_area_m2=100, daily_usage_L=-1),
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidInput):
        run_water_balance(make_series([1.0]), **kwargs)


def test_empty_record_rejected(small_site):
    with pytest.raises(InvalidInput):
        WaterBalanceSimulator([], small_site)
    with pytest.raises(InvalidInput):
        run_water_balance(make_series([]), 1000, 100, 50)
