# rwh/io/bom_csv.py
"""Reader for Bureau of Meteorology daily rainfall CSV files.

Expected layout (product IDCJAC0009)::

    Product code,Bureau of Meteorology station number,Year,Month,Day,
    Rainfall amount (millimetres),Period over which rainfall was measured (days),Quality
    IDCJAC0009,070351,2016,03,18,7.4,1,N

Columns are taken by position.  Rows that cannot be understood are
skipped and reported in ``warnings`` instead of aborting the read; an
empty rainfall cell marks a missing day.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import pandas as pd

from ..constants import DAYS_PER_YEAR
from ..domain.rainfall_series import DailyObservation, RainfallSeries
from ..errors import InvalidInput

logger = logging.getLogger(__name__)

REQUIRED_HEADER_WORDS = ("Year", "Month", "Day", "Rainfall")
MISSING_WARN_PERCENT = 10.0


@dataclass(slots=True)
class BomParseResult:
    series: RainfallSeries
    station: Optional[str] = None
    product_code: Optional[str] = None
    warnings: List[str] = field(default_factory=list)


def validate_header(columns) -> None:
    header = ",".join(str(c) for c in columns)
    missing = [w for w in REQUIRED_HEADER_WORDS if not re.search(w, header, re.IGNORECASE)]
    if missing:
        raise InvalidInput(
            "File doesn't appear to be a BoM rainfall CSV. "
            f"Missing columns: {', '.join(missing)}"
        )


def _parse_row(cells: List[str]) -> DailyObservation:
    if len(cells) < 6:
        raise ValueError(f"Expected at least 6 columns, got {len(cells)}")
    try:
        year, month, day = (int(c) for c in cells[2:5])
    except ValueError:
        raise ValueError("Invalid date values") from None
    if not 1800 <= year <= 2100:
        raise ValueError(f"Invalid year: {year}")
    try:
        when = date(year, month, day)
    except ValueError:
        raise ValueError(f"Invalid date: {year}-{month}-{day}") from None

    raw = cells[5].strip()
    quality = cells[7].strip() if len(cells) > 7 else ""
    if raw == "" or raw.lower() == "null":
        return DailyObservation(when, missing=True, quality=quality)
    try:
        rain = float(raw)
    except ValueError:
        raise ValueError(f"Invalid rainfall value: {raw}") from None
    if rain < 0:
        raise ValueError(f"Negative rainfall value: {rain}")
    return DailyObservation(when, rain, quality=quality)


def read_bom_csv(path_or_buffer) -> BomParseResult:
    """Read a BoM daily rainfall CSV into a chronologically sorted series."""
    df = pd.read_csv(
        path_or_buffer,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        header=0,
    )
    validate_header(df.columns)

    warnings: List[str] = []
    rows: List[DailyObservation] = []
    station = product = None

    # header is line 1, data starts on line 2
    for lineno, cells in enumerate(df.itertuples(index=False, name=None), start=2):
        cells = [str(c) for c in cells]
        try:
            obs = _parse_row(cells)
        except ValueError as exc:
            warnings.append(f"Row {lineno}: {exc}")
            continue
        if station is None and cells[1].strip():
            station, product = cells[1].strip(), cells[0].strip()
        rows.append(obs)

    if not rows:
        raise InvalidInput("No valid data rows found in file")

    rows.sort(key=lambda o: o.date)
    unique: List[DailyObservation] = []
    for obs in rows:
        if unique and unique[-1].date == obs.date:
            warnings.append(f"Duplicate date {obs.date} ignored")
            continue
        unique.append(obs)
    series = RainfallSeries(unique)

    span_years = (unique[-1].date - unique[0].date).days / DAYS_PER_YEAR
    if span_years < 1:
        warnings.append("Less than 1 year of data - results may not reflect seasonal variation")
    missing_pct = series.missing_days / len(series) * 100
    if missing_pct > MISSING_WARN_PERCENT:
        warnings.append(
            f"High amount of missing data ({missing_pct:.1f}%) - results may be less reliable"
        )

    for w in warnings:
        logger.warning(w)
    logger.info(
        "Read %d days (%s to %s), %d missing", len(series), unique[0].date, unique[-1].date,
        series.missing_days,
    )
    return BomParseResult(series=series, station=station, product_code=product, warnings=warnings)
