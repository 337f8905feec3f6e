# rwh/facade/analyzer.py
"""High-level *facade* for running the analyses and drawing the charts.

**RainwaterAnalyzer** bundles one rainfall record with one site and
exposes the two sizing modes:

1. ``security`` – minimum tank for a reliability target;
2. ``opportunistic`` – comparison of standard tank sizes;

plus the record-level summaries (dry spells, seasonal pattern) and thin
``plot_*`` wrappers, so client code needs a single object.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from ..constants import DEFAULT_SECURITY_CONFIDENCE, DRY_DAY_THRESHOLD_MM
from ..core.comparison import OpportunisticAnalysis, analyze_opportunistic
from ..core.dry_spells import DrySpellAnalysis, analyze_dry_spells
from ..core.rainfall_stats import (
    RainfallPatterns,
    analyze_rainfall_patterns,
    monthly_rainfall_statistics,
)
from ..core.tank_search import SecurityAnalysis, analyze_security
from ..core.water_balance import WaterBalanceSimulator
from ..domain.rainfall_series import DailyObservation, as_observations
from ..domain.results import SimulationResult
from ..domain.site import SearchDomain, SiteParameters
from ..selectors import AbstractSelector
from ..visualization import plots


class RainwaterAnalyzer:
    """Single entry point for external users of the library."""

    def __init__(
        self,
        observations: Sequence[DailyObservation],
        site: SiteParameters = SiteParameters(),
    ) -> None:
        self.obs = as_observations(observations)
        self.site = site

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    def simulate(self, tank_size_L: float, initial_level_L: Optional[float] = None) -> SimulationResult:
        return WaterBalanceSimulator(self.obs, self.site).run(tank_size_L, initial_level_L)

    def security(
        self,
        confidence: float = DEFAULT_SECURITY_CONFIDENCE,
        domain: SearchDomain = SearchDomain(),
    ) -> SecurityAnalysis:
        return analyze_security(self.obs, self.site, confidence, domain)

    def opportunistic(
        self,
        tank_sizes: Optional[Sequence[int]] = None,
        selector: AbstractSelector | str = "marginal",
    ) -> OpportunisticAnalysis:
        return analyze_opportunistic(self.obs, self.site, tank_sizes, selector)

    def dry_spells(self, threshold_mm: float = DRY_DAY_THRESHOLD_MM) -> DrySpellAnalysis:
        return analyze_dry_spells(self.obs, threshold_mm)

    def monthly_rainfall(self) -> pd.DataFrame:
        return monthly_rainfall_statistics(self.obs)

    def rainfall_patterns(self) -> RainfallPatterns:
        return analyze_rainfall_patterns(self.obs)

    # ------------------------------------------------------------------
    # Chart wrappers
    # ------------------------------------------------------------------

    def plot_tank_level(self, result: SimulationResult, ax=None):
        """Tank level trace of a simulation."""
        return plots.plot_tank_level(result, ax)

    def plot_dry_spells(self, threshold_mm: float = DRY_DAY_THRESHOLD_MM, ax=None):
        """Histogram of dry-spell durations."""
        return plots.plot_dry_spells(self.dry_spells(threshold_mm), ax)

    def plot_monthly_rainfall(self, ax=None):
        """Average monthly rainfall with min/max range."""
        return plots.plot_monthly_rainfall(self.monthly_rainfall(), ax)
