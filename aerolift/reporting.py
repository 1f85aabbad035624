"""Format uncertain quantities for console reports and exported tables.

A quantity is reported as ``mean ± std`` where the spread keeps one
significant figure, or two when its leading digit is 1, and the mean is
shown to the same decimal place. A zero or non-finite spread is not rounded.
These helpers only build strings; values are never modified.
"""

from __future__ import annotations

import math

from .stats.distribution import Operand, mean_of, std_of


def _decimal_places(spread: float) -> int | None:
    """Decimal place the spread is rounded to; ``None`` if it is not rounded."""
    if not math.isfinite(spread) or spread <= 0:
        return None
    exponent = math.floor(math.log10(spread))
    leading = int(spread / 10**exponent)
    figures = 2 if leading == 1 else 1
    return figures - 1 - exponent


def format_mean_std(mean: float, std: float, unit: str = "") -> str:
    """Format a mean and standard deviation as ``mean ± std unit``."""
    places = _decimal_places(abs(std))
    if places is None:
        text = f"{mean:.6g} ± {std:.6g}"
    else:
        shown = max(places, 0)
        text = f"{round(mean, places):.{shown}f} ± {round(abs(std), places):.{shown}f}"
    return f"{text} {unit}".rstrip()


def format_quantity(value: Operand, unit: str = "") -> str:
    """Format an uncertain value (or plain number) as ``mean ± std unit``."""
    return format_mean_std(mean_of(value), std_of(value), unit)


def relative_uncertainty(value: Operand) -> float:
    """Standard deviation as a percentage of ``|mean|``; NaN for a zero mean."""
    mean = mean_of(value)
    if mean == 0:
        return math.nan
    return 100.0 * std_of(value) / abs(mean)


def format_report_line(label: str, unit: str, value: Operand) -> str:
    """One report line: ``label (unit) = mean ± std``."""
    name = f"{label} ({unit})" if unit else label
    return f"{name} = {format_quantity(value)}"
