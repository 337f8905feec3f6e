# rwh/core/dry_spells.py
"""Detection of dry spells in the rainfall record.

Two procedures with *different* predicates live here and must not be
merged:

1. **Threshold runs** (``analyze_dry_spells``) – a day is dry when it is
   missing or its rainfall is below a fixed threshold (1 mm by default).
   Every maximal run of dry days is collected and bucketed into duration
   bins for the histogram.
2. **Worst running-average spell** (``find_worst_dry_spell``) – a run
   keeps growing while its *average* rainfall stays below 2 mm/day, so a
   single wet day does not necessarily end it.  Only the longest run is
   reported; the water-balance simulator attaches it to every result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple

from ..constants import DRY_DAY_THRESHOLD_MM, WORST_SPELL_THRESHOLD_MM_PER_DAY
from ..domain.rainfall_series import DailyObservation, as_observations
from ..domain.results import Period, PeriodKind
from .periods import PeriodTracker

logger = logging.getLogger(__name__)

# (label, min days, max days); ``None`` = open-ended
DURATION_BINS: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("1-3 days", 1, 3),
    ("4-7 days", 4, 7),
    ("8-14 days", 8, 14),
    ("15-30 days", 15, 30),
    ("31-60 days", 31, 60),
    ("60+ days", 61, None),
)


@dataclass(frozen=True, slots=True)
class DrySpellBin:
    label: str
    min_days: int
    max_days: Optional[int]
    spells: Tuple[Period, ...]

    @property
    def count(self) -> int:
        return len(self.spells)

    def example_dates(self, limit: int = 3) -> List[Tuple[date, date]]:
        """(start, end) of the first *limit* spells in this bin."""
        return [(p.start_date, p.end_date) for p in self.spells[:limit]]


@dataclass(frozen=True, slots=True)
class DrySpellAnalysis:
    """Histogram of threshold dry spells plus headline statistics."""

    bins: Tuple[DrySpellBin, ...]
    spells: Tuple[Period, ...]
    longest_spell: Optional[Period]  # None when no day was dry
    total_days: int
    threshold_mm: float

    @property
    def total_spells(self) -> int:
        return len(self.spells)

    @property
    def total_dry_days(self) -> int:
        return sum(p.duration for p in self.spells)

    @property
    def avg_spell_duration(self) -> float:
        return self.total_dry_days / self.total_spells if self.spells else 0.0

    @property
    def dry_day_percentage(self) -> float:
        return self.total_dry_days / self.total_days * 100.0


# ---------------------------------------------------------------------------
# 1) Threshold runs
# ---------------------------------------------------------------------------


def analyze_dry_spells(
    observations: Sequence[DailyObservation],
    threshold_mm: float = DRY_DAY_THRESHOLD_MM,
) -> DrySpellAnalysis:
    """Find all maximal dry runs and bucket them by duration."""
    observations = as_observations(observations)

    tracker = PeriodTracker(PeriodKind.DRY)
    for obs in observations:
        tracker.step(obs.date, obs.missing or obs.rainfall_mm < threshold_mm)
    spells = tracker.finish()

    bins = []
    for label, lo, hi in DURATION_BINS:
        members = tuple(
            p for p in spells if p.duration >= lo and (hi is None or p.duration <= hi)
        )
        bins.append(DrySpellBin(label, lo, hi, members))

    longest: Optional[Period] = None
    for p in spells:
        if longest is None or p.duration > longest.duration:
            longest = p

    logger.debug(
        "dry spells: threshold=%.2f mm, %d spells, longest=%s days",
        threshold_mm,
        len(spells),
        longest.duration if longest else 0,
    )
    return DrySpellAnalysis(
        bins=tuple(bins),
        spells=tuple(spells),
        longest_spell=longest,
        total_days=len(observations),
        threshold_mm=threshold_mm,
    )


# ---------------------------------------------------------------------------
# 2) Worst running-average spell
# ---------------------------------------------------------------------------


def find_worst_dry_spell(
    observations: Sequence[DailyObservation],
    threshold_mm_per_day: float = WORST_SPELL_THRESHOLD_MM_PER_DAY,
) -> Period:
    """Longest run whose average daily rainfall stays below the threshold.

    A day that would lift the run's average to the threshold or above
    closes the run and starts a new one on that very day.  Ties keep the
    earlier run.
    """
    observations = as_observations(observations)

    worst: Optional[Tuple[date, date, float, int]] = None
    first = observations[0]
    # current run: start, end, total rainfall, duration
    start, end, total, duration = first.date, first.date, first.rainfall_mm, 1

    for obs in observations[1:]:
        rain = obs.rainfall_mm  # 0 for missing days
        if (total + rain) / (duration + 1) < threshold_mm_per_day:
            end, total, duration = obs.date, total + rain, duration + 1
            continue
        if worst is None or duration > worst[3]:
            worst = (start, end, total, duration)
        start, end, total, duration = obs.date, obs.date, rain, 1

    if worst is None or duration > worst[3]:
        worst = (start, end, total, duration)

    return Period(
        kind=PeriodKind.DRY_AVERAGE,
        start_date=worst[0],
        end_date=worst[1],
        duration=worst[3],
        total_rainfall_mm=worst[2],
    )
