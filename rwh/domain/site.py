# rwh/domain/site.py

from dataclasses import dataclass

from ..constants import (
    DEFAULT_DAILY_USAGE_L,
    DEFAULT_ROOF_AREA_M2,
    DEFAULT_RUNOFF_COEFFICIENT,
    DEFAULT_WATER_RATE_PER_KL,
    SEARCH_MAX_L,
    SEARCH_MIN_L,
    SEARCH_STEP_L,
)
from ..errors import InvalidInput


@dataclass(frozen=True, slots=True)
class SiteParameters:
    """Catchment and household demand, fixed across simulated capacities."""

    roof_area_m2: float = DEFAULT_ROOF_AREA_M2
    daily_usage_L: float = DEFAULT_DAILY_USAGE_L
    runoff_coefficient: float = DEFAULT_RUNOFF_COEFFICIENT
    water_rate_per_kL: float = DEFAULT_WATER_RATE_PER_KL  # $/kL

    def __post_init__(self) -> None:
        if self.roof_area_m2 <= 0 or self.daily_usage_L <= 0:
            raise InvalidInput("Roof area and daily usage must be positive")
        if not 0 < self.runoff_coefficient <= 1:
            raise InvalidInput("Runoff coefficient must lie in (0, 1]")
        if self.water_rate_per_kL < 0:
            raise InvalidInput("Water rate cannot be negative")


@dataclass(frozen=True, slots=True)
class SearchDomain:
    """Capacity range and grid for the minimum-tank search (litres)."""

    min_L: int = SEARCH_MIN_L
    max_L: int = SEARCH_MAX_L
    step_L: int = SEARCH_STEP_L

    def __post_init__(self) -> None:
        if self.step_L <= 0 or self.min_L <= 0:
            raise InvalidInput("Search minimum and step must be positive")
        if self.min_L > self.max_L:
            raise InvalidInput("Search minimum exceeds maximum")
        if self.max_L % self.step_L:
            raise InvalidInput("Search maximum must be a multiple of the step")
