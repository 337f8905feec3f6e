import pytest

from rwh import selectors
from rwh.domain.results import ComparisonEntry
from rwh.errors import InvalidInput
from rwh.selectors.marginal import (
    MarginalEfficiencySelector,
    MaxOffsetSelector,
    marginal_benefits,
)


def entries(sizes, offsets):
    return [
        ComparisonEntry(
            tank_size_L=s,
            rainwater_used_L=0.0,
            mains_needed_L=0.0,
            percent_offset=o,
            annual_rainwater_used_L=0.0,
            annual_mains_needed_L=0.0,
            annual_savings=o * 2,
            overflow_L=0.0,
            overflow_percent=0.0,
            capture_efficiency=0.0,
            days_empty=0,
        )
        for s, o in zip(sizes, offsets)
    ]


def test_marginal_benefits():
    steps = marginal_benefits(entries([2000, 5000, 10000], [40, 70, 85]))
    assert [s.marginal_efficiency for s in steps] == [10, 3]
    assert steps[0].from_size == 2000 and steps[0].to_size == 5000
    assert steps[1].savings_increase == 30


def test_stops_on_relative_drop():
    # 10 %/kL then 3 %/kL (< half of 10)
    assert MarginalEfficiencySelector().select(entries([2000, 5000, 10000, 15000], [40, 70, 85, 88])) == 1


def test_stops_below_floor():
    assert MarginalEfficiencySelector().select(entries([2000, 5000, 10000], [50, 52, 60])) == 0


def test_no_stop_selects_largest():
    assert MarginalEfficiencySelector().select(entries([1000, 2000, 3000], [10, 20, 30])) == 2


def test_moderate_decline_keeps_going():
    # 10 -> 6 -> 4: each step keeps more than half of the previous one
    assert MarginalEfficiencySelector().select(entries([1000, 2000, 3000, 4000], [10, 20, 26, 30])) == 3


def test_single_and_empty():
    assert MarginalEfficiencySelector().select(entries([5000], [50])) == 0
    with pytest.raises(InvalidInput):
        MarginalEfficiencySelector().select([])


def test_unsorted_rejected():
    with pytest.raises(InvalidInput):
        MarginalEfficiencySelector().select(entries([5000, 2000], [50, 40]))


def test_custom_thresholds():
    sel = MarginalEfficiencySelector(floor=0.1, drop_ratio=0.1)
    assert sel.select(entries([2000, 5000, 10000, 15000], [40, 70, 85, 88])) == 3


def test_max_offset_selector_prefers_smaller_on_tie():
    assert MaxOffsetSelector().select(entries([2000, 5000, 10000], [40, 90, 90])) == 1


def test_factory():
    assert isinstance(selectors.get(), MarginalEfficiencySelector)
    assert isinstance(selectors.get("max-offset"), MaxOffsetSelector)
    with pytest.raises(InvalidInput):
        selectors.get("nope")
