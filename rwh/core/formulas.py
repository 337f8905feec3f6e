# rwh/core/formulas.py

import math

from ..domain.rainfall_series import DailyObservation
from ..errors import InvalidInput


def compute_inflow(obs: DailyObservation, roof_area_m2: float, runoff_coefficient: float) -> float:
    """Roof runoff into the tank (L); a missing day contributes nothing.

    Formula: *Q* = P(mm) × A(m²) × C, since 1 mm on 1 m² is 1 L.
    """
    if obs.missing:
        return 0.0
    return obs.rainfall_mm * roof_area_m2 * runoff_coefficient


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def percent(part: float, whole: float) -> float:
    """``part / whole × 100``; a zero denominator is an input error, not NaN."""
    if whole == 0:
        raise InvalidInput("Percentage of an empty quantity is undefined")
    return part / whole * 100.0


def round_to_multiple(value: float, step: int) -> int:
    """Nearest multiple of *step*, halves rounded up."""
    return int(math.floor(value / step + 0.5)) * step


def round_up_to_multiple(value: int, step: int) -> int:
    """Smallest multiple of *step* that is ``>= value`` (integer arithmetic)."""
    return -(-int(value) // step) * step
