# rwh/core/comparison.py
"""Side-by-side comparison of fixed tank sizes ("opportunistic mode").

Every candidate capacity is simulated independently on the same record
and turned into a :class:`ComparisonEntry`: how much of the demand the
tank covers, what that saves per year at the given water price and how
much of the roof's runoff is lost to overflow.  One candidate is then
flagged as the "best value" by a pluggable selector (see
:mod:`rwh.selectors`).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional, Sequence, Tuple

import pandas as pd

from ..constants import DAYS_PER_YEAR, LITRES_PER_KL, TANK_SIZES_L
from ..domain.rainfall_series import DailyObservation
from ..domain.results import ComparisonEntry, SimulationResult
from ..domain.site import SiteParameters
from ..errors import InvalidInput
from ..selectors import AbstractSelector, get as get_selector
from .formulas import percent
from .water_balance import RoofPotential, WaterBalanceSimulator, roof_potential

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WaterCost:
    annual_demand_kL: float
    annual_cost: float  # $/year if all demand came from mains
    rate_per_kL: float


@dataclass(frozen=True, slots=True)
class OpportunisticAnalysis:
    comparisons: Tuple[ComparisonEntry, ...]  # ascending capacity
    best_value_index: int
    roof_potential: RoofPotential
    water_cost: WaterCost

    @property
    def best_value_size_L(self) -> int:
        return self.comparisons[self.best_value_index].tank_size_L

    @property
    def best_value(self) -> ComparisonEntry:
        return self.comparisons[self.best_value_index]

    @property
    def roof_potential_value(self) -> float:
        """Yearly value ($) of the whole roof runoff at the water rate."""
        return self.roof_potential.annual_L / LITRES_PER_KL * self.water_cost.rate_per_kL

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame.from_records([asdict(c) for c in self.comparisons])
        df["best_value"] = df.index == self.best_value_index
        return df


class ComparativeAnalyzer:
    """Evaluates a list of capacities against one record and site."""

    def __init__(
        self,
        observations: Sequence[DailyObservation],
        site: SiteParameters,
        selector: AbstractSelector | str = "marginal",
    ) -> None:
        self.sim = WaterBalanceSimulator(observations, site)
        self.site = site
        # Accept either an alias or a ready selector object
        self.selector = get_selector(selector) if isinstance(selector, str) else selector

    def entry(self, result: SimulationResult, potential: RoofPotential) -> ComparisonEntry:
        """Derive the economic metrics of one simulated capacity."""
        s = result.summary
        years = s.total_days / DAYS_PER_YEAR
        total_demand = self.site.daily_usage_L * s.total_days
        rainwater_used = total_demand - s.total_deficit_L
        mains_needed = s.total_deficit_L
        annual_used = rainwater_used / years

        return ComparisonEntry(
            tank_size_L=int(result.tank_size_L),
            rainwater_used_L=rainwater_used,
            mains_needed_L=mains_needed,
            percent_offset=percent(rainwater_used, total_demand),
            annual_rainwater_used_L=annual_used,
            annual_mains_needed_L=mains_needed / years,
            annual_savings=annual_used / LITRES_PER_KL * self.site.water_rate_per_kL,
            overflow_L=s.total_overflow_L,
            overflow_percent=percent(s.total_overflow_L, potential.total_L),
            capture_efficiency=percent(potential.total_L - s.total_overflow_L, potential.total_L),
            days_empty=s.days_empty,
        )

    def analyze(self, tank_sizes: Optional[Sequence[int]] = None) -> OpportunisticAnalysis:
        sizes = list(TANK_SIZES_L if tank_sizes is None else tank_sizes)
        if not sizes:
            raise InvalidInput("No tank sizes to compare")
        if any(s <= 0 for s in sizes):
            raise InvalidInput("Tank sizes must be positive")
        if len(set(sizes)) != len(sizes):
            raise InvalidInput("Tank sizes must be distinct")
        sizes.sort()

        # Capacity independent: computed once for all candidates
        potential = roof_potential(
            self.sim.observations, self.site.roof_area_m2, self.site.runoff_coefficient
        )
        if potential.total_L == 0:
            raise InvalidInput("The record holds no rainfall; capture efficiency is undefined")

        logger.info("Comparing %d tank sizes over %.1f years", len(sizes), potential.years)
        entries = []
        for size in sizes:
            e = self.entry(self.sim.run(size), potential)
            logger.debug(
                "tank=%6d L offset=%.1f%% savings=$%.0f/yr efficiency=%.1f%%",
                size,
                e.percent_offset,
                e.annual_savings,
                e.capture_efficiency,
            )
            entries.append(e)

        annual_demand_kL = self.site.daily_usage_L * DAYS_PER_YEAR / LITRES_PER_KL
        return OpportunisticAnalysis(
            comparisons=tuple(entries),
            best_value_index=self.selector.select(entries),
            roof_potential=potential,
            water_cost=WaterCost(
                annual_demand_kL=annual_demand_kL,
                annual_cost=annual_demand_kL * self.site.water_rate_per_kL,
                rate_per_kL=self.site.water_rate_per_kL,
            ),
        )


def analyze_opportunistic(
    observations: Sequence[DailyObservation],
    site: SiteParameters,
    tank_sizes: Optional[Sequence[int]] = None,
    selector: AbstractSelector | str = "marginal",
) -> OpportunisticAnalysis:
    return ComparativeAnalyzer(observations, site, selector).analyze(tank_sizes)
