# rwh/__init__.py
"""**RWH** (Rain-Water Harvesting) tank sizing package.

The initialisation module re-exports the key entities so that client
code can write::

    from rwh import RainwaterAnalyzer, RainfallSeries, SiteParameters

The exported names listed in ``__all__`` form the public API of the
package.
"""

from __future__ import annotations

from .domain.rainfall_series import DailyObservation, RainfallSeries
from .domain.site import SearchDomain, SiteParameters
from .errors import InvalidInput
from .facade.analyzer import RainwaterAnalyzer

__all__ = [
    "RainwaterAnalyzer",  # facade for analyses and charts
    "DailyObservation",   # one day of the rainfall record
    "RainfallSeries",     # ordered daily record
    "SiteParameters",     # roof area, usage, runoff, water price
    "SearchDomain",       # capacity range of the minimum-tank search
    "InvalidInput",       # the single error kind
]
