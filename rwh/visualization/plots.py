# rwh/visualization/plots.py
"""Thin matplotlib wrappers for the key charts.

Each function draws on the ``ax`` it is given (or on a new figure) and
returns the ``Axes`` so the caller decides whether to ``plt.show()`` or
save the figure into a report.
"""

from __future__ import annotations

import calendar
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..constants import STRESS_FRACTION
from ..core.dry_spells import DrySpellAnalysis
from ..domain.results import SimulationResult

MAX_POINTS = 500

# ---------------------------------------------------------------------------
# 1) Tank level over time
# ---------------------------------------------------------------------------


def decimate_levels(result: SimulationResult, max_points: int = MAX_POINTS) -> pd.DataFrame:
    """Window-averaged trace with at most *max_points* rows.

    A window counts as empty if any of its days was empty.
    """
    df = result.to_frame()[["date", "level_L", "is_empty"]]
    if len(df) <= max_points:
        return df.reset_index(drop=True)
    factor = -(-len(df) // max_points)
    window = np.arange(len(df)) // factor
    grouped = df.groupby(window)
    return pd.DataFrame(
        {
            "date": grouped["date"].first(),
            "level_L": grouped["level_L"].mean(),
            "is_empty": grouped["is_empty"].any(),
        }
    ).reset_index(drop=True)


def plot_tank_level(result: SimulationResult, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Tank level line with the stress band and empty days highlighted."""
    ax = ax or plt.figure().gca()
    df = decimate_levels(result)
    cap = result.tank_size_L

    ax.plot(df["date"], df["level_L"], lw=1)
    empty = df[df["is_empty"]]
    ax.scatter(empty["date"], empty["level_L"], color="red", s=8, label="empty")
    ax.axhline(cap, ls="--", color="green", label="capacity")
    ax.axhline(cap * STRESS_FRACTION, ls="--", color="orange", label="stress")

    ax.set_title(f"Tank level, {cap:,.0f} L tank")
    ax.set_xlabel("Date")
    ax.set_ylabel("Level, L")
    ax.set_ylim(0, cap * 1.05)
    ax.grid(True)
    ax.legend()
    return ax


# ---------------------------------------------------------------------------
# 2) Dry-spell histogram
# ---------------------------------------------------------------------------

# light yellow → dark red, by bin
_SEVERITY = ["#fef08a", "#fcd34d", "#fb923c", "#ef4444", "#b91c1c", "#7f1d1d"]


def plot_dry_spells(analysis: DrySpellAnalysis, ax: Optional[plt.Axes] = None) -> plt.Axes:
    ax = ax or plt.figure().gca()
    labels: List[str] = [b.label for b in analysis.bins]
    ax.bar(labels, [b.count for b in analysis.bins], color=_SEVERITY[: len(labels)], edgecolor="grey")
    ax.set_title(f"Dry spells (rainfall < {analysis.threshold_mm:g} mm/day)")
    ax.set_xlabel("Duration")
    ax.set_ylabel("Number of spells")
    ax.grid(True, axis="y")
    return ax


# ---------------------------------------------------------------------------
# 3) Monthly rainfall
# ---------------------------------------------------------------------------


def plot_monthly_rainfall(stats: pd.DataFrame, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Average monthly rainfall bars with min–max whiskers.

    *stats* is the frame of :func:`rwh.core.rainfall_stats.monthly_rainfall_statistics`.
    """
    ax = ax or plt.figure().gca()
    months = list(stats.index)
    err = [stats["avg"] - stats["min"], stats["max"] - stats["avg"]]
    ax.bar(months, stats["avg"], yerr=err, capsize=3)
    ax.set_xticks(months)
    ax.set_xticklabels([calendar.month_abbr[m] for m in months])
    ax.set_title("Average monthly rainfall")
    ax.set_xlabel("Month")
    ax.set_ylabel("Rainfall, mm")
    ax.grid(True, axis="y")
    return ax
