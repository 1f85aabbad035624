"""
Run the lift models and summarise their distributions.

Each model run produces a result dict holding:
- the model key and title
- ordered input and output entries ``(label, unit, value)``
- the elevation trend decided on the mean of ``F_lift_adjusted``
- the probability that the aircraft climbs, P(F_lift_adjusted > 0)

Results are turned into a tidy pandas DataFrame (one row per quantity) for
export, and printed in the same order as the quantities are computed.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .physics import bernoulli, lift_equation
from .physics.flight import elevation_trend
from .reporting import format_report_line, relative_uncertainty
from .stats.distribution import UncertainValue, as_uncertain

logger = logging.getLogger(__name__)

MODELS = {
    "bernoulli": bernoulli,
    "lift-equation": lift_equation,
}

RESULT_COLUMNS = [
    "Model",
    "Role",
    "Quantity",
    "Unit",
    "Family",
    "Samples",
    "Mean",
    "Std Dev",
    "P05",
    "Median",
    "P95",
    "Relative Uncertainty (%)",
]


def _get_model(name: str):
    try:
        return MODELS[name]
    except KeyError:
        raise KeyError(
            f"Unknown model '{name}'. Valid models: {sorted(MODELS)}"
        ) from None


def run_model(name: str, inputs=None) -> Dict:
    """
    Evaluate one lift model.

    Args:
        name: Key in :data:`MODELS` (``"bernoulli"`` or ``"lift-equation"``).
        inputs: Optional inputs dataclass of that model. Defaults to the
            model's ``load_inputs()`` distributions.

    Returns:
        dict: ``model``, ``title``, ``inputs`` and ``outputs`` (lists of
        ``(label, unit, UncertainValue)``), ``trend`` (``ElevationTrend``)
        and ``p_climb``.
    """
    model = _get_model(name)
    if inputs is None:
        inputs = model.load_inputs()

    logger.info("Evaluating %s model", name)
    outputs = model.evaluate(inputs)

    input_entries = [
        (label, unit, as_uncertain(getattr(inputs, attr)))
        for attr, label, unit in model.INPUT_LABELS
    ]
    output_entries = [
        (label, model.OUTPUT_UNITS[label], as_uncertain(value))
        for label, value in outputs.items()
    ]

    net_force = output_entries[-1][2]
    trend = elevation_trend(net_force)
    p_climb = net_force.probability_greater_than(0.0)
    logger.info(
        "%s model: %s (P(climb) = %.3f)", name, trend.value, p_climb
    )

    return {
        "model": name,
        "title": model.TITLE,
        "inputs": input_entries,
        "outputs": output_entries,
        "trend": trend,
        "p_climb": p_climb,
    }


def run_models(names: Optional[List[str]] = None) -> List[Dict]:
    """Run several models in order; all registered models by default."""
    if names is None:
        names = list(MODELS)
    return [run_model(name) for name in names]


def _summary_row(model: str, role: str, label: str, unit: str, value: UncertainValue):
    stats = value.describe()
    return {
        "Model": model,
        "Role": role,
        "Quantity": label,
        "Unit": unit,
        "Family": stats["family"],
        "Samples": stats["sample_count"],
        "Mean": stats["mean"],
        "Std Dev": stats["std"],
        "P05": stats["p05"],
        "Median": stats["median"],
        "P95": stats["p95"],
        "Relative Uncertainty (%)": relative_uncertainty(value),
    }


def create_results_dataframe(results: List[Dict]) -> pd.DataFrame:
    """One row per input and output quantity of every model run."""
    rows = []
    for res in results:
        for role in ("inputs", "outputs"):
            for label, unit, value in res[role]:
                rows.append(_summary_row(res["model"], role[:-1], label, unit, value))
    if not rows:
        return pd.DataFrame(columns=RESULT_COLUMNS)
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def summarize_trends(results: List[Dict]) -> pd.DataFrame:
    """Elevation decision per model with the mean net force and P(climb)."""
    rows = []
    for res in results:
        net_force = res["outputs"][-1][2]
        rows.append(
            {
                "Model": res["model"],
                "Mean F_lift_adjusted (N)": net_force.mean(),
                "P(climb)": res["p_climb"],
                "Trend": res["trend"].value,
            }
        )
    return pd.DataFrame(
        rows, columns=["Model", "Mean F_lift_adjusted (N)", "P(climb)", "Trend"]
    )


def print_report(result: Dict):
    """Print a model run in the order its quantities are computed."""
    print(result["title"])
    for label, unit, value in result["inputs"]:
        print(format_report_line(label, unit, value))

    outputs = result["outputs"]
    for label, unit, value in outputs[:-1]:
        print(format_report_line(label, unit, value))

    print(result["trend"].message)
    _, unit, net_force = outputs[-1]
    print(
        format_report_line(
            "F_lift subtracting the weight of the airplane", unit, net_force
        )
    )
    if np.isfinite(result["p_climb"]):
        print(f"Probability of climbing = {result['p_climb']:.3f}")
