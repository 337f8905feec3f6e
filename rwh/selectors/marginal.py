# rwh/selectors/marginal.py
"""Knee detection over the "percent offset vs. capacity" curve.

For every step up in capacity the marginal efficiency is the percent of
demand offset gained per additional 1000 L::

    eff[i] = (offset[i] - offset[i-1]) / ((cap[i] - cap[i-1]) / 1000)

Walking the steps from the smallest tank, the pointer advances past each
step that is still worth it.  It stops at the first step whose
efficiency is below an absolute floor (2 %/1000 L) or below half of the
previous step's efficiency; the tank before that step is the "best
value".  If no step stops the walk, the largest tank wins.

This assumes diminishing returns and is a heuristic, not an optimum.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from . import AbstractSelector
from ..constants import EFFICIENCY_DROP_RATIO, EFFICIENCY_FLOOR
from ..domain.results import ComparisonEntry
from ..errors import InvalidInput


@dataclass(frozen=True, slots=True)
class MarginalBenefit:
    from_size: int
    to_size: int
    offset_increase: float
    savings_increase: float
    marginal_efficiency: float  # % offset per 1000 L


def marginal_benefits(entries: Sequence[ComparisonEntry]) -> List[MarginalBenefit]:
    """Benefit of each consecutive step up in capacity."""
    out = []
    for prev, curr in zip(entries, entries[1:]):
        size_increase = curr.tank_size_L - prev.tank_size_L
        if size_increase <= 0:
            raise InvalidInput("Candidates must be sorted by strictly increasing capacity")
        offset_increase = curr.percent_offset - prev.percent_offset
        out.append(
            MarginalBenefit(
                from_size=prev.tank_size_L,
                to_size=curr.tank_size_L,
                offset_increase=offset_increase,
                savings_increase=curr.annual_savings - prev.annual_savings,
                marginal_efficiency=offset_increase / (size_increase / 1000),
            )
        )
    return out


class MarginalEfficiencySelector(AbstractSelector):
    """Stop at the first step of poor or sharply falling marginal value."""

    def __init__(
        self,
        floor: float = EFFICIENCY_FLOOR,
        drop_ratio: float = EFFICIENCY_DROP_RATIO,
    ) -> None:
        self.floor = floor
        self.drop_ratio = drop_ratio

    def select(self, entries: Sequence[ComparisonEntry]) -> int:
        if not entries:
            raise InvalidInput("No candidates to choose from")

        best = 0
        prev_eff = None
        for i, step in enumerate(marginal_benefits(entries)):
            eff = step.marginal_efficiency
            if eff < self.floor:
                break
            if prev_eff is not None and eff < self.drop_ratio * prev_eff:
                break
            best = i + 1
            prev_eff = eff
        return best


class MaxOffsetSelector(AbstractSelector):
    """Largest offset; ties go to the smaller tank."""

    def select(self, entries: Sequence[ComparisonEntry]) -> int:
        if not entries:
            raise InvalidInput("No candidates to choose from")
        best = 0
        for i, e in enumerate(entries):
            if e.percent_offset > entries[best].percent_offset:
                best = i
        return best
