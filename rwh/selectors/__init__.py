# rwh/selectors/__init__.py
"""Base abstraction and factory of "best value" tank selectors.

*The module combines:*
1. **AbstractSelector** – abstract base class defining the single
   ``select`` interface shared by every elbow-detection strategy.
2. The factory function **get(name)** returning a selector by its string
   alias, so a strategy can be chosen from configuration or the CLI.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..domain.results import ComparisonEntry
from ..errors import InvalidInput


class AbstractSelector(ABC):
    """Interface of any strategy that picks one candidate capacity.

    ``select`` receives the comparison entries sorted by ascending
    capacity and returns the **index** of the chosen entry.
    """

    @abstractmethod
    def select(self, entries: Sequence[ComparisonEntry]) -> int:
        ...


def get(name: str = "marginal") -> AbstractSelector:
    """Return a ready selector for alias *name*.

    Parameters
    ----------
    name : str
        Supported values:
        * ``"marginal"`` – MarginalEfficiencySelector (default),
        * ``"max-offset"`` – MaxOffsetSelector.

    Raises
    ------
    InvalidInput
        If the name is unknown.
    """
    if name == "marginal":
        from .marginal import MarginalEfficiencySelector

        return MarginalEfficiencySelector()
    if name == "max-offset":
        from .marginal import MaxOffsetSelector

        return MaxOffsetSelector()

    raise InvalidInput(f"Unknown selector '{name}'")
