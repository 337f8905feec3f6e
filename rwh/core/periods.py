# rwh/core/periods.py
"""Open/close tracking of runs of consecutive days.

A tracker is a two-state machine: *no open period* / *open period*.  Each
day is fed with ``step`` together with the outcome of the kind's
predicate:

* predicate true, nothing open  → a period opens on this day;
* predicate true, period open   → the period is extended;
* predicate false, period open  → the period is closed and stored.

A period still open after the last observation is only stored by
``flush``; forgetting the flush silently drops the tail of the record, so
``finish`` (flush + result) is the intended way to read the periods.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..domain.results import Period, PeriodKind


@dataclass(slots=True)
class _OpenPeriod:
    start: date
    end: date
    duration: int
    min_level: Optional[float]


class PeriodTracker:
    """Collects maximal runs of days for one :class:`PeriodKind`."""

    def __init__(self, kind: PeriodKind, track_year: bool = False, track_min_level: bool = False) -> None:
        self.kind = kind
        self._track_year = track_year
        self._track_min = track_min_level
        self._open: Optional[_OpenPeriod] = None
        self._closed: List[Period] = []

    def step(self, day: date, qualifies: bool, level: Optional[float] = None) -> None:
        """Advance the state machine by one day."""
        if qualifies:
            if self._open is None:
                self._open = _OpenPeriod(day, day, 1, level if self._track_min else None)
            else:
                self._open.end = day
                self._open.duration += 1
                if self._track_min:
                    self._open.min_level = min(self._open.min_level, level)
        elif self._open is not None:
            self._close()

    def flush(self) -> None:
        """Store a period left open at the end of the data."""
        if self._open is not None:
            self._close()

    def finish(self) -> List[Period]:
        self.flush()
        return list(self._closed)

    # ------------------------------------------------------------------

    def _close(self) -> None:
        p = self._open
        self._closed.append(
            Period(
                kind=self.kind,
                start_date=p.start,
                end_date=p.end,
                duration=p.duration,
                year=p.start.year if self._track_year else None,
                min_level_L=p.min_level,
            )
        )
        self._open = None
