"""Break-even detection on a simulated monthly series.

These helpers analyze simulation output AFTER the run; they never drive it.
Both scans walk the series in ascending month order and return the first
qualifying point, or ``None`` when buying never catches up within the horizon.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .defaults import MONTHS_PER_YEAR
from .models import SimulationDataPoint


def _first_point(
    data: Iterable[SimulationDataPoint],
    predicate: Callable[[SimulationDataPoint], bool],
) -> SimulationDataPoint | None:
    return next((d for d in data if d.month > 0 and predicate(d)), None)


def find_break_even_wealth(data: Iterable[SimulationDataPoint]) -> SimulationDataPoint | None:
    """First month where the owner's net wealth reaches the tenant's."""
    return _first_point(data, lambda d: d.owner_wealth >= d.tenant_wealth)


def find_break_even_monthly(data: Iterable[SimulationDataPoint]) -> SimulationDataPoint | None:
    """First month where the owner's average monthly cost drops to the rent's."""
    return _first_point(data, lambda d: d.monthly_cost_owner <= d.monthly_cost_tenant)


def format_break_even_delay(point: SimulationDataPoint | None) -> str:
    """Human-readable delay until break-even, e.g. ``"7 ans et 3 mois"``.

    Returns ``"Jamais"`` when there is no break-even point.
    """
    if point is None:
        return "Jamais"
    return f"{point.month // MONTHS_PER_YEAR} ans et {point.month % MONTHS_PER_YEAR} mois"
