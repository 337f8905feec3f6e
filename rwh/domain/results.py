# rwh/domain/results.py
"""Records produced by the simulation engine.

All records are created once by the code that computes them and are
never modified afterwards, hence ``frozen=True``.  Units follow the
reporting conventions of the tool: litres, millimetres, percent.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum, auto
from typing import Optional, Tuple

import pandas as pd


class PeriodKind(Enum):
    """Predicate that defines a run of consecutive days."""

    EMPTY = auto()        # tank level == 0
    STRESS = auto()       # tank level below the stress threshold
    DRY = auto()          # rainfall below a fixed per-day threshold
    DRY_AVERAGE = auto()  # running-average rainfall below threshold

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, slots=True)
class Period:
    """Maximal run of consecutive days satisfying a *kind* predicate.

    Only the extras relevant to the kind are filled in: ``year`` for empty
    and stress periods, ``min_level_L`` for stress periods,
    ``total_rainfall_mm`` for running-average dry spells.
    """

    kind: PeriodKind
    start_date: date
    end_date: date
    duration: int  # days
    year: Optional[int] = None
    min_level_L: Optional[float] = None
    total_rainfall_mm: Optional[float] = None


@dataclass(frozen=True, slots=True)
class DailyState:
    """Tank state at the end of one simulated day."""

    date: date
    level_L: float
    inflow_L: float
    usage_L: float
    overflow_L: float
    deficit_L: float
    is_empty: bool
    is_stressed: bool


@dataclass(frozen=True, slots=True)
class SummaryStatistics:
    total_days: int
    days_empty: int
    days_below_stress: int
    days_below_50pct: int
    total_overflow_L: float
    total_deficit_L: float
    reliability_percent: float
    stress_percent: float


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Full output of one water-balance run at a fixed capacity."""

    tank_size_L: float
    daily_states: Tuple[DailyState, ...]
    summary: SummaryStatistics
    empty_periods: Tuple[Period, ...]
    stress_periods: Tuple[Period, ...]
    worst_dry_spell: Period

    def to_frame(self) -> pd.DataFrame:
        """Daily trace as a DataFrame (one row per simulated day)."""
        return pd.DataFrame.from_records([asdict(s) for s in self.daily_states])

    def min_level_between(self, start: date, end: date) -> Optional[float]:
        """Lowest level reached in ``[start, end]`` or ``None`` if no day falls inside."""
        levels = [s.level_L for s in self.daily_states if start <= s.date <= end]
        return min(levels) if levels else None


@dataclass(frozen=True, slots=True)
class TankSizingResult:
    """Outcome of the minimum-capacity search.

    ``achieved_confidence`` is the reliability (percent) of
    ``recommended_size``.  ``exact_minimum`` is the smallest grid capacity
    meeting the target; it is ``None`` when even the largest capacity of
    the domain misses the target (``reached_limit``).
    """

    recommended_size: int
    achieved_confidence: float
    exact_minimum: Optional[int]
    reached_limit: bool
    monotonicity_violations: Tuple[Tuple[int, float], ...] = ()


@dataclass(frozen=True, slots=True)
class ComparisonEntry:
    """Economic and offset metrics for one candidate capacity."""

    tank_size_L: int
    rainwater_used_L: float
    mains_needed_L: float
    percent_offset: float
    annual_rainwater_used_L: float
    annual_mains_needed_L: float
    annual_savings: float  # $/year
    overflow_L: float
    overflow_percent: float
    capture_efficiency: float
    days_empty: int
