"""
Histogram figures of model input and output distributions.

All plotting functions accept precomputed model results and do not perform
physics calculations. Figures are grayscale, serif, saved at 300 DPI.
"""

from __future__ import annotations

import math
import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .reporting import format_quantity

FIGURE_DPI = 300
HIST_BINS = 60
PANEL_SIZE = (4.2, 3.2)


def setup_plot_style():
    """High-legibility style for black-and-white report figures."""
    plt.style.use("default")
    plt.rcParams.update(
        {
            "font.family": "serif",
            "font.serif": ["Times New Roman", "Times", "Nimbus Roman", "DejaVu Serif"],
            "mathtext.fontset": "stix",
            "font.size": 11,
            "axes.titlesize": 12,
            "axes.labelsize": 11,
            "xtick.labelsize": 9,
            "ytick.labelsize": 9,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "figure.dpi": 120,
            "savefig.dpi": FIGURE_DPI,
            "savefig.bbox": "tight",
        }
    )


def _plot_histogram(ax, label: str, unit: str, value, size: int):
    samples = value.samples(size)
    if value.is_point_mass:
        # Point mass: single vertical line.
        ax.axvline(samples[0], color="black", linewidth=2.0)
    else:
        ax.hist(samples, bins=HIST_BINS, color="0.65", edgecolor="0.25", linewidth=0.4)
    ax.axvline(value.mean(), color="black", linestyle="--", linewidth=1.2)
    ax.set_title(label)
    ax.set_xlabel(f"{label} ({unit})" if unit else label)
    ax.set_ylabel("Count")
    ax.text(
        0.98,
        0.95,
        format_quantity(value, unit),
        transform=ax.transAxes,
        ha="right",
        va="top",
        fontsize=8,
    )


def plot_distributions(
    result: Dict,
    output_dir: str = "output",
    size: Optional[int] = None,
    include_inputs: bool = True,
) -> str:
    """Render one histogram panel per quantity of a model run.

    Args:
        result (dict): Output of ``aerolift.analysis.run_model``.
        output_dir (str, optional): Directory for the figure. Defaults to
            ``"output"``.
        size (int, optional): Samples drawn per quantity. Defaults to each
            value's own sample count.
        include_inputs (bool, optional): Also plot the input distributions.

    Returns:
        str: Path of ``<model>_distributions.png``.

    Raises:
        KeyError: If ``model`` or ``outputs`` is missing from ``result``.
        ValueError: If the result has no quantities to plot.
    """
    for key in ("model", "outputs"):
        if key not in result:
            raise KeyError(f"Model result is missing '{key}'.")

    entries = list(result["outputs"])
    if include_inputs:
        entries = list(result.get("inputs", [])) + entries
    if not entries:
        raise ValueError("No quantities to plot.")

    setup_plot_style()
    ncols = min(3, len(entries))
    nrows = int(math.ceil(len(entries) / ncols))
    fig, axes = plt.subplots(
        nrows,
        ncols,
        figsize=(PANEL_SIZE[0] * ncols, PANEL_SIZE[1] * nrows),
        squeeze=False,
    )
    flat_axes: List = list(np.ravel(axes))
    for ax, (label, unit, value) in zip(flat_axes, entries):
        _plot_histogram(ax, label, unit, value, size if size else value.sample_count)
    for ax in flat_axes[len(entries):]:
        ax.set_visible(False)

    trend = result.get("trend")
    if trend is not None:
        fig.suptitle(f"{result.get('title', result['model'])}: {trend.message}")
    fig.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{result['model']}_distributions.png")
    fig.savefig(path, dpi=FIGURE_DPI)
    plt.close(fig)
    return path
