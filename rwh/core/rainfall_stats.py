# rwh/core/rainfall_stats.py
"""Seasonal pattern of the rainfall record.

Monthly totals are built per (year, month) from measured days only, then
summarised per calendar month across years.  Seasons follow the southern
hemisphere (summer = Dec–Feb), as the BoM records this tool reads do.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pandas as pd

from ..domain.rainfall_series import DailyObservation, as_observations

SEASONS: Tuple[Tuple[str, Tuple[int, ...]], ...] = (
    ("Summer", (12, 1, 2)),
    ("Autumn", (3, 4, 5)),
    ("Winter", (6, 7, 8)),
    ("Spring", (9, 10, 11)),
)


def monthly_rainfall_statistics(observations: Sequence[DailyObservation]) -> pd.DataFrame:
    """Per calendar month: ``avg``, ``min``, ``max`` monthly total and ``years``.

    The frame is indexed by month number 1–12; months never measured get
    zeros.
    """
    observations = as_observations(observations)
    df = observations.to_frame()
    df = df[~df["missing"]]

    stats = pd.DataFrame(
        0.0, index=pd.RangeIndex(1, 13, name="month"), columns=["avg", "min", "max", "years"]
    )
    if df.empty:
        stats["years"] = 0
        return stats

    dates = pd.to_datetime(df["date"])
    totals = df.groupby([dates.dt.year.rename("year"), dates.dt.month.rename("month")])[
        "rainfall_mm"
    ].sum()
    by_month = totals.groupby(level="month")
    agg = pd.DataFrame(
        {
            "avg": by_month.mean(),
            "min": by_month.min(),
            "max": by_month.max(),
            "years": by_month.size(),
        }
    )
    stats.update(agg)
    stats["years"] = stats["years"].astype(int)
    return stats


@dataclass(frozen=True, slots=True)
class RainfallPatterns:
    driest: List[Tuple[str, float]]   # (month name, avg mm/month)
    wettest: List[Tuple[str, float]]
    wettest_season: Tuple[str, float]
    driest_season: Tuple[str, float]
    total_years: int


def analyze_rainfall_patterns(observations: Sequence[DailyObservation]) -> RainfallPatterns:
    stats = monthly_rainfall_statistics(observations)
    name = lambda m: calendar.month_name[m]  # noqa: E731

    ordered = stats.sort_values("avg", kind="stable")
    driest = [(name(m), float(r.avg)) for m, r in ordered.head(3).iterrows() if r.avg > 0]
    wettest = [(name(m), float(r.avg)) for m, r in ordered.tail(3).iloc[::-1].iterrows()]

    seasons = [(label, float(stats.loc[list(months), "avg"].mean())) for label, months in SEASONS]
    by_rain = sorted(seasons, key=lambda s: s[1], reverse=True)

    return RainfallPatterns(
        driest=driest,
        wettest=wettest,
        wettest_season=by_rain[0],
        driest_season=by_rain[-1],
        total_years=int(stats["years"].max()),
    )
