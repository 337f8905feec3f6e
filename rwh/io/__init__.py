"""Readers turning rainfall files into :class:`~rwh.domain.rainfall_series.RainfallSeries`."""

from .bom_csv import BomParseResult, read_bom_csv

__all__ = ["BomParseResult", "read_bom_csv"]
