# rwh/core/tank_search.py
"""Minimum tank capacity for a reliability target ("security mode").

Algorithm
---------
1. Simulate the largest capacity of the search domain.  If even that
   tank misses the target, no capacity in the domain can satisfy it: the
   maximum is returned with ``reached_limit=True`` and no search is done.
2. Otherwise binary-search the domain on its ``step`` grid.  All
   bracketing is done in integer step counts, so the probes can never
   fall off the grid or outside ``[min, max]``.  A probe that meets the
   target becomes the current best and the upper half is discarded;
   otherwise the lower half is discarded.
3. The grid minimum is rounded up to a practical size (next 1000 L) and
   simulated again to report the reliability actually achieved.

The search relies on reliability being non-decreasing in capacity.  That
is an assumption about the model, not a proven property; when a re-check
contradicts it the violation is logged and returned in the result.

The module also holds the "what if I buy a smaller tank" sweep and the
combined security-mode report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from ..constants import (
    DEFAULT_SECURITY_CONFIDENCE,
    PRACTICAL_SIZE_STEP_L,
    SMALLER_TANK_FRACTIONS,
)
from ..domain.rainfall_series import DailyObservation
from ..domain.results import Period, SimulationResult, TankSizingResult
from ..domain.site import SearchDomain, SiteParameters
from ..errors import InvalidInput
from .formulas import round_to_multiple, round_up_to_multiple
from .water_balance import WaterBalanceSimulator

logger = logging.getLogger(__name__)

PROBE_STRIDE_L = 5000


def _validate_target(target_confidence: float) -> None:
    if not 0 < target_confidence <= 1:
        raise InvalidInput(
            f"Confidence target must lie in (0, 1], got {target_confidence!r}"
        )


def _meets(result: SimulationResult, target_confidence: float) -> bool:
    return result.summary.reliability_percent / 100 >= target_confidence


# ---------------------------------------------------------------------------
# Result records of the smaller-tank sweep and the security report
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SmallerTankOutcome:
    tank_size_L: int
    total_failures: int
    days_empty: int
    years_with_failures: Tuple[int, ...]
    failure_events: Tuple[Period, ...]
    description: str


@dataclass(frozen=True, slots=True)
class DrySpellImpact:
    """How the recommended tank copes with the worst dry spell."""

    date_range: str
    duration: int
    total_rainfall_mm: float
    min_level_L: float
    min_level_percent: float
    tank_impact: str


@dataclass(frozen=True, slots=True)
class SecurityAnalysis:
    sizing: TankSizingResult
    simulation: SimulationResult
    target_confidence: float  # percent
    confidence_statement: str
    smaller_tanks: Tuple[SmallerTankOutcome, ...]
    dry_spell_impact: DrySpellImpact

    @property
    def recommended_tank_size_L(self) -> int:
        return self.sizing.recommended_size

    @property
    def actual_reliability(self) -> float:
        return self.simulation.summary.reliability_percent

    @property
    def failure_events(self) -> Tuple[Period, ...]:
        return self.simulation.empty_periods

    @property
    def worst_dry_spell(self) -> Period:
        return self.simulation.worst_dry_spell

    @property
    def stress_statistics(self) -> dict:
        s = self.simulation.summary
        return {
            "days_below_20pct": s.days_below_stress,
            "days_below_50pct": s.days_below_50pct,
            "total_days": s.total_days,
            "percentage_stressed": s.stress_percent,
        }


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class TankSizeSearch:
    """Capacity search using a :class:`WaterBalanceSimulator` as oracle."""

    def __init__(self, simulator: WaterBalanceSimulator, domain: SearchDomain = SearchDomain()) -> None:
        self.sim = simulator
        self.domain = domain

    def find_minimum(self, target_confidence: float) -> TankSizingResult:
        """Smallest practical capacity whose reliability meets *target_confidence*."""
        _validate_target(target_confidence)
        d = self.domain

        # 1) Can the largest tank do it at all?
        at_max = self.sim.run(d.max_L)
        if not _meets(at_max, target_confidence):
            logger.info(
                "Even %d L reaches only %.2f%% reliability (target %.2f%%)",
                d.max_L,
                at_max.summary.reliability_percent,
                target_confidence * 100,
            )
            return TankSizingResult(
                recommended_size=d.max_L,
                achieved_confidence=at_max.summary.reliability_percent,
                exact_minimum=None,
                reached_limit=True,
            )

        # 2) Binary search in step units
        lo = -(-d.min_L // d.step_L)
        hi = d.max_L // d.step_L
        best = hi
        while lo <= hi:
            mid = (lo + hi + 1) // 2  # nearest grid point, halves up
            size = mid * d.step_L
            res = self.sim.run(size)
            ok = _meets(res, target_confidence)
            logger.debug(
                "probe %6d L -> %.3f%% %s",
                size,
                res.summary.reliability_percent,
                "ok" if ok else "short",
            )
            if ok:
                best = mid
                hi = mid - 1
            else:
                lo = mid + 1
        exact = best * d.step_L

        # 3) Round up to a size that is actually sold and re-check.  The
        # domain maximum is known to meet the target, so it caps the result.
        practical = min(round_up_to_multiple(exact, PRACTICAL_SIZE_STEP_L), d.max_L)
        verify = self.sim.run(practical)
        violations: Tuple[Tuple[int, float], ...] = ()
        if not _meets(verify, target_confidence):
            logger.warning(
                "Reliability is not monotone in capacity: %d L meets the target "
                "but %d L reaches only %.3f%%",
                exact,
                practical,
                verify.summary.reliability_percent,
            )
            violations = ((practical, verify.summary.reliability_percent),)

        return TankSizingResult(
            recommended_size=practical,
            achieved_confidence=verify.summary.reliability_percent,
            exact_minimum=exact,
            reached_limit=False,
            monotonicity_violations=violations,
        )

    def probe_monotonicity(
        self,
        recommended_size: int,
        target_confidence: float,
        capacities: Optional[Sequence[int]] = None,
    ) -> List[Tuple[int, float]]:
        """Capacities >= *recommended_size* that miss the target.

        An empty list means the sample agrees with the monotonicity
        assumption; anything else is logged and returned for the caller to
        act on.
        """
        _validate_target(target_confidence)
        if capacities is None:
            first = round_up_to_multiple(recommended_size + 1, PROBE_STRIDE_L)
            capacities = [recommended_size, *range(first, self.domain.max_L, PROBE_STRIDE_L)]
            if self.domain.max_L >= recommended_size:
                capacities.append(self.domain.max_L)

        violations = []
        for size in capacities:
            if size < recommended_size:
                continue
            res = self.sim.run(size)
            if not _meets(res, target_confidence):
                logger.warning(
                    "Monotonicity violated: %d L >= %d L but reliability %.3f%% < %.3f%%",
                    size,
                    recommended_size,
                    res.summary.reliability_percent,
                    target_confidence * 100,
                )
                violations.append((size, res.summary.reliability_percent))
        return violations

    # ------------------------------------------------------------------
    # "What if smaller" sweep
    # ------------------------------------------------------------------

    def smaller_tanks(self, recommended_size: int) -> List[SmallerTankOutcome]:
        sizes = {
            round_to_multiple(recommended_size * f, PRACTICAL_SIZE_STEP_L)
            for f in SMALLER_TANK_FRACTIONS
        }
        outcomes = []
        for size in sorted((s for s in sizes if s >= self.domain.min_L), reverse=True):
            res = self.sim.run(size)
            events = res.empty_periods
            outcomes.append(
                SmallerTankOutcome(
                    tank_size_L=size,
                    total_failures=len(events),
                    days_empty=res.summary.days_empty,
                    years_with_failures=tuple(sorted({p.year for p in events})),
                    failure_events=events,
                    description=describe_failures(events),
                )
            )
        return outcomes


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def _days(n: int) -> str:
    return "1 day" if n == 1 else f"{n} days"


def _month(d: date) -> str:
    return d.strftime("%b %Y")


def describe_failures(empty_periods: Sequence[Period]) -> str:
    """One-line summary of the times a tank ran empty."""
    n = len(empty_periods)
    if n == 0:
        return "Never ran empty"
    if n == 1:
        p = empty_periods[0]
        return f"Empty once: {_month(p.start_date)} ({_days(p.duration)})"
    if n <= 4:
        events = ", ".join(f"{_month(p.start_date)} ({_days(p.duration)})" for p in empty_periods)
        return f"Empty {n} times: {events}"
    years = sorted({p.year for p in empty_periods})
    return f"Empty {n} times across {len(years)} years ({', '.join(map(str, years))})"


def confidence_statement(actual_reliability: float, target_percent: float) -> str:
    if actual_reliability >= 100:
        return "This tank never ran empty in the historical data"
    if actual_reliability >= target_percent:
        return f"Meets your {target_percent:g}% security target ({actual_reliability:.1f}% reliability)"
    return f"Best available: {actual_reliability:.1f}% reliability (target was {target_percent:g}%)"


def dry_spell_impact(spell: Period, result: SimulationResult) -> DrySpellImpact:
    """Lowest tank level reached during *spell* in *result*."""
    min_level = result.min_level_between(spell.start_date, spell.end_date)
    if min_level is None:
        min_level = 0.0
    pct = min_level / result.tank_size_L * 100
    if min_level == 0:
        impact = "Tank would have run empty"
    else:
        impact = f"Tank dropped to {pct:.0f}% ({round(min_level):,} L)"
    return DrySpellImpact(
        date_range=f"{spell.start_date:%d %b %Y} to {spell.end_date:%d %b %Y}",
        duration=spell.duration,
        total_rainfall_mm=spell.total_rainfall_mm or 0.0,
        min_level_L=min_level,
        min_level_percent=pct,
        tank_impact=impact,
    )


# ---------------------------------------------------------------------------
# Security-mode report
# ---------------------------------------------------------------------------


def analyze_security(
    observations: Sequence[DailyObservation],
    site: SiteParameters,
    confidence: float = DEFAULT_SECURITY_CONFIDENCE,
    domain: SearchDomain = SearchDomain(),
) -> SecurityAnalysis:
    """Size the tank for *confidence* and describe how it and smaller tanks behave."""
    _validate_target(confidence)
    sim = WaterBalanceSimulator(observations, site)
    search = TankSizeSearch(sim, domain)

    logger.info("Security analysis: target %.1f%%, %d days", confidence * 100, len(sim.observations))
    sizing = search.find_minimum(confidence)
    result = sim.run(sizing.recommended_size)
    target_percent = confidence * 100

    return SecurityAnalysis(
        sizing=sizing,
        simulation=result,
        target_confidence=target_percent,
        confidence_statement=confidence_statement(
            result.summary.reliability_percent, target_percent
        ),
        smaller_tanks=tuple(search.smaller_tanks(sizing.recommended_size)),
        dry_spell_impact=dry_spell_impact(result.worst_dry_spell, result),
    )
