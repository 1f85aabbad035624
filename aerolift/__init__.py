"""
A Python package for estimating aerodynamic lift on an airfoil under input uncertainty.

Propagates Gaussian, uniform and empirical input distributions through the
Bernoulli pressure-difference model and the lift-equation model, and decides
whether the aircraft's elevation is increasing.

Modules:
    - stats: Uncertain scalar values, sampling configuration and propagation.
    - physics: Constants, input tables and the two lift models.
    - analysis: Runs models, builds summary tables and console reports.
    - reporting: Value ± uncertainty rounding and formatting.
    - output: CSV export of summaries and samples.
    - plotting: Histogram figures of model distributions.
    - errors: Error taxonomy and the degraded-precision warning.
"""

__version__ = "1.0.0"

from .analysis import (
    create_results_dataframe,
    print_report,
    run_model,
    run_models,
    summarize_trends,
)
from .errors import (
    DegradedPrecisionWarning,
    DivisionByZero,
    EmptyInput,
    InvalidParameter,
    UncertaintyError,
)
from .output import save_data_to_csv, save_samples_to_csv
from .plotting import plot_distributions
from .stats import (
    UncertainValue,
    configure,
    constant,
    from_samples,
    gaussian,
    sampling,
    uniform,
)

__all__ = [
    # Uncertain values
    "UncertainValue",
    "gaussian",
    "uniform",
    "from_samples",
    "constant",
    "configure",
    "sampling",
    # Errors
    "UncertaintyError",
    "InvalidParameter",
    "EmptyInput",
    "DivisionByZero",
    "DegradedPrecisionWarning",
    # Analysis
    "run_model",
    "run_models",
    "create_results_dataframe",
    "summarize_trends",
    "print_report",
    # Output
    "save_data_to_csv",
    "save_samples_to_csv",
    "plot_distributions",
]
