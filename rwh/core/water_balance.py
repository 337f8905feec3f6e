# rwh/core/water_balance.py
"""Day-by-day water-balance simulation of a rainwater tank.

* Takes as input:
  - the daily rainfall record (``DailyObservation`` sequence),
  - the site parameters (roof area, daily usage, runoff coefficient),
  - the tank capacity and, optionally, the starting level.
* Produces a ``SimulationResult``: the state of the tank at the end of
  every day, summary statistics, the empty and stress periods and the
  worst running-average dry spell of the record.

Recurrence for one day (``current`` = level at the end of the previous
day)::

    inflow   = rainfall × area × runoff       (0 on missing days)
    raw      = current + inflow − usage
    overflow = max(0, raw − capacity)
    deficit  = max(0, −raw)
    level    = clamp(raw, 0, capacity)

Overflow and deficit are the positive and negative parts of the same
out-of-range amount, so at most one of them is nonzero on a given day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

from ..constants import (
    DAYS_PER_YEAR,
    DEFAULT_RUNOFF_COEFFICIENT,
    HALF_FULL_FRACTION,
    STRESS_FRACTION,
)
from ..domain.rainfall_series import DailyObservation, as_observations
from ..domain.results import (
    DailyState,
    PeriodKind,
    SimulationResult,
    SummaryStatistics,
)
from ..domain.site import SiteParameters
from ..errors import InvalidInput
from .dry_spells import find_worst_dry_spell
from .formulas import clamp, compute_inflow, percent
from .periods import PeriodTracker

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Main simulator class
# ---------------------------------------------------------------------------


class WaterBalanceSimulator:
    """Simulates one rainfall record against any number of capacities.

    The simulator keeps no state between ``run`` calls: each call reads
    only the record and its arguments and returns a new result, so runs
    at different capacities are independent of each other.
    """

    def __init__(
        self,
        observations: Sequence[DailyObservation],
        site: SiteParameters,
        stress_fraction: float = STRESS_FRACTION,
    ) -> None:
        self.observations = as_observations(observations)
        if not 0 < stress_fraction < 1:
            raise InvalidInput("Stress fraction must lie in (0, 1)")
        self.site = site
        self.stress_fraction = stress_fraction

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def run(self, tank_size_L: float, initial_level_L: Optional[float] = None) -> SimulationResult:
        """Simulate the whole record at capacity *tank_size_L*.

        The tank starts half full unless *initial_level_L* is given; the
        starting level is clamped to ``[0, tank_size_L]``.
        """
        if tank_size_L <= 0:
            raise InvalidInput("Tank size must be positive")

        area = self.site.roof_area_m2
        usage = self.site.daily_usage_L
        runoff = self.site.runoff_coefficient
        stress_level = tank_size_L * self.stress_fraction
        half_level = tank_size_L * HALF_FULL_FRACTION

        if initial_level_L is None:
            initial_level_L = tank_size_L / 2
        current = clamp(initial_level_L, 0.0, tank_size_L)

        states: list[DailyState] = []
        total_overflow = total_deficit = 0.0
        days_empty = days_stressed = days_below_half = 0
        empty = PeriodTracker(PeriodKind.EMPTY, track_year=True)
        stress = PeriodTracker(PeriodKind.STRESS, track_year=True, track_min_level=True)

        for obs in self.observations:
            inflow = compute_inflow(obs, area, runoff)
            raw = current + inflow - usage
            overflow = max(0.0, raw - tank_size_L)
            deficit = max(0.0, -raw)
            level = clamp(raw, 0.0, tank_size_L)

            total_overflow += overflow
            total_deficit += deficit

            is_empty = level == 0
            is_stressed = level < stress_level
            days_empty += is_empty
            days_stressed += is_stressed
            days_below_half += level < half_level

            empty.step(obs.date, is_empty)
            stress.step(obs.date, is_stressed, level)

            states.append(
                DailyState(
                    date=obs.date,
                    level_L=level,
                    inflow_L=inflow,
                    usage_L=usage,
                    overflow_L=overflow,
                    deficit_L=deficit,
                    is_empty=is_empty,
                    is_stressed=is_stressed,
                )
            )
            current = level

        total_days = len(states)
        summary = SummaryStatistics(
            total_days=total_days,
            days_empty=days_empty,
            days_below_stress=days_stressed,
            days_below_50pct=days_below_half,
            total_overflow_L=total_overflow,
            total_deficit_L=total_deficit,
            reliability_percent=percent(total_days - days_empty, total_days),
            stress_percent=percent(days_stressed, total_days),
        )

        logger.debug(
            "tank=%.0f L reliability=%.2f%% empty=%d overflow=%.0f L deficit=%.0f L",
            tank_size_L,
            summary.reliability_percent,
            days_empty,
            total_overflow,
            total_deficit,
        )

        return SimulationResult(
            tank_size_L=tank_size_L,
            daily_states=tuple(states),
            summary=summary,
            empty_periods=tuple(empty.finish()),
            stress_periods=tuple(stress.finish()),
            # Depends on neither capacity nor usage; recomputed per run so
            # that every result is self-contained.
            worst_dry_spell=find_worst_dry_spell(self.observations),
        )

    def run_many(self, tank_sizes: Iterable[float]) -> Dict[float, SimulationResult]:
        """Independent runs keyed by capacity (input order preserved)."""
        return {size: self.run(size) for size in tank_sizes}


# ---------------------------------------------------------------------------
# Functional shortcuts
# ---------------------------------------------------------------------------


def run_water_balance(
    observations: Sequence[DailyObservation],
    tank_size_L: float,
    roof_area_m2: float,
    daily_usage_L: float,
    runoff_coefficient: float = DEFAULT_RUNOFF_COEFFICIENT,
    initial_level_L: Optional[float] = None,
) -> SimulationResult:
    """One-off simulation with explicit parameters."""
    site = SiteParameters(
        roof_area_m2=roof_area_m2,
        daily_usage_L=daily_usage_L,
        runoff_coefficient=runoff_coefficient,
    )
    return WaterBalanceSimulator(observations, site).run(tank_size_L, initial_level_L)


def simulate_many(
    observations: Sequence[DailyObservation],
    site: SiteParameters,
    tank_sizes: Iterable[float],
) -> Dict[float, SimulationResult]:
    return WaterBalanceSimulator(observations, site).run_many(tank_sizes)


# ---------------------------------------------------------------------------
# Roof potential (capacity independent)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RoofPotential:
    """Total runoff the roof could deliver over the record (L)."""

    total_L: float
    annual_L: float
    daily_average_L: float  # per day with a measurement
    years: float
    valid_days: int


def roof_potential(
    observations: Sequence[DailyObservation],
    roof_area_m2: float,
    runoff_coefficient: float = DEFAULT_RUNOFF_COEFFICIENT,
) -> RoofPotential:
    observations = as_observations(observations)
    total = 0.0
    valid = 0
    for obs in observations:
        if not obs.missing:
            total += compute_inflow(obs, roof_area_m2, runoff_coefficient)
            valid += 1
    if valid == 0:
        raise InvalidInput("Every day of the record is missing; roof potential is undefined")

    years = len(observations) / DAYS_PER_YEAR
    return RoofPotential(
        total_L=total,
        annual_L=total / years,
        daily_average_L=total / valid,
        years=years,
        valid_days=valid,
    )
