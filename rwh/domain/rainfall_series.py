# rwh/domain/rainfall_series.py
"""Daily rainfall record used as input to every analysis.

* **DailyObservation** – one day of the record: the date, the measured
  rainfall in millimetres and a *missing* flag for days without a
  measurement.  A missing day always carries ``rainfall_mm == 0``.
* **RainfallSeries** – an ordered container of observations.  Dates must
  be strictly increasing (chronological, no duplicates); the check is done
  once in ``__post_init__`` so the analyses can rely on it.

The series may be empty; the analyses reject an empty record themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, List, Sequence

import pandas as pd

from ..constants import DAYS_PER_YEAR
from ..errors import InvalidInput


@dataclass(frozen=True, slots=True)
class DailyObservation:
    """A single day of the rainfall record."""

    date: date
    rainfall_mm: float = 0.0
    missing: bool = False
    quality: str = ""  # BoM quality flag ("Y", "N" or empty)

    def __post_init__(self) -> None:
        if self.missing:
            object.__setattr__(self, "rainfall_mm", 0.0)
            return
        if math.isnan(self.rainfall_mm) or self.rainfall_mm < 0:
            raise InvalidInput(
                f"Rainfall on {self.date} must be a non-negative number, "
                f"got {self.rainfall_mm!r}"
            )


@dataclass(slots=True)
class RainfallSeries:
    """Chronologically ordered daily observations."""

    observations: List[DailyObservation] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.observations = list(self.observations)
        for prev, curr in zip(self.observations, self.observations[1:]):
            if curr.date <= prev.date:
                raise InvalidInput(
                    f"Observations must be in strictly increasing date order "
                    f"({prev.date} followed by {curr.date})"
                )

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[DailyObservation]:
        return iter(self.observations)

    def __getitem__(self, idx):
        return self.observations[idx]

    # ------------------------------------------------------------------
    # Summary helpers
    # ------------------------------------------------------------------

    @property
    def missing_days(self) -> int:
        return sum(1 for o in self.observations if o.missing)

    @property
    def total_rainfall_mm(self) -> float:
        return sum(o.rainfall_mm for o in self.observations)

    @property
    def years(self) -> float:
        """Length of the record in years (days / 365.25)."""
        return len(self.observations) / DAYS_PER_YEAR

    # ------------------------------------------------------------------
    # pandas conversion
    # ------------------------------------------------------------------

    def to_frame(self) -> pd.DataFrame:
        """One row per day with columns date, rainfall_mm, missing, quality."""
        return pd.DataFrame.from_records(
            [
                {
                    "date": o.date,
                    "rainfall_mm": o.rainfall_mm,
                    "missing": o.missing,
                    "quality": o.quality,
                }
                for o in self.observations
            ],
            columns=["date", "rainfall_mm", "missing", "quality"],
        )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        date_col: str = "date",
        rainfall_col: str = "rainfall_mm",
    ) -> "RainfallSeries":
        """Build a series from a frame; NaN rainfall marks a missing day.

        An explicit boolean ``missing`` column, when present, is honoured
        as well.
        """
        has_flag = "missing" in df.columns
        observations = []
        for row in df.itertuples(index=False):
            rec = row._asdict()
            rain = rec[rainfall_col]
            missing = bool(rec["missing"]) if has_flag else False
            if rain is None or pd.isna(rain):
                missing = True
            observations.append(
                DailyObservation(
                    date=pd.Timestamp(rec[date_col]).date(),
                    rainfall_mm=0.0 if missing else float(rain),
                    missing=missing,
                )
            )
        return cls(observations)


def as_observations(data: Sequence[DailyObservation]) -> RainfallSeries:
    """Return *data* as a validated :class:`RainfallSeries`.

    Plain sequences go through the same ordering and duplicate-date
    checks as a series built directly.
    """
    if data is None or len(data) == 0:
        raise InvalidInput("No rainfall data provided")
    if isinstance(data, RainfallSeries):
        return data
    return RainfallSeries(list(data))
