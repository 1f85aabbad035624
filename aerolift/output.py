"""Write model summaries and materialised samples to CSV files.

This module is the output boundary between in-memory uncertain values and
tabular artifacts.
"""

from __future__ import annotations

import logging
import os

import pandas as pd

from .reporting import format_mean_std
from .stats.sampling import current_config

logger = logging.getLogger(__name__)


def add_reported_column(results_df: pd.DataFrame) -> pd.DataFrame:
    """Add a ``Reported`` string column ``mean ± std unit`` to a summary table.

    Raises:
        KeyError: If ``Mean``, ``Std Dev`` or ``Unit`` is missing.
    """
    for col in ("Mean", "Std Dev", "Unit"):
        if col not in results_df.columns:
            raise KeyError(f"Missing column '{col}' required for reporting format.")
    out = results_df.copy()
    out["Reported"] = [
        format_mean_std(mean, std, unit)
        for mean, std, unit in zip(out["Mean"], out["Std Dev"], out["Unit"])
    ]
    return out


def save_data_to_csv(results_df: pd.DataFrame, output_dir: str = "output") -> str:
    """Save the per-quantity summary table to ``distribution_summary.csv``.

    Args:
        results_df (pandas.DataFrame): Output from
            ``create_results_dataframe``.
        output_dir (str): Directory where the CSV is written.

    Returns:
        str: Path of the written file.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, "distribution_summary.csv")
    add_reported_column(results_df).to_csv(path, index=False)
    logger.info("Saved distribution summary to %s", path)
    return path


def save_samples_to_csv(
    result: dict, output_dir: str = "output", size: int | None = None
) -> str:
    """Save every quantity of a model run as a column of samples.

    All quantities are materialised at the same size (the canonical sample
    size by default) so rows are paired draws.

    Args:
        result (dict): Output of ``run_model``.
        output_dir (str): Directory where ``<model>_samples.csv`` is written.
        size (int, optional): Number of rows.

    Returns:
        str: Path of the written file.

    Raises:
        KeyError: If ``result`` lacks ``model``, ``inputs`` or ``outputs``.
    """
    for key in ("model", "inputs", "outputs"):
        if key not in result:
            raise KeyError(f"Model result is missing '{key}'.")
    if size is None:
        size = current_config().sample_size

    columns = {}
    for label, unit, value in list(result["inputs"]) + list(result["outputs"]):
        name = f"{label} ({unit})" if unit else label
        columns[name] = value.samples(size)

    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{result['model']}_samples.csv")
    pd.DataFrame(columns).to_csv(path, index=False)
    logger.info("Saved %d samples per quantity to %s", size, path)
    return path
