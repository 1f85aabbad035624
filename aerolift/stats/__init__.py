"""
Uncertainty propagation primitives for lift estimation.

This subpackage provides the uncertain scalar value type and the sampling
configuration it draws from. All functions operate on numbers and arrays;
no aerodynamics-specific logic is included.

Modules:
    distribution:
        ``UncertainValue`` with Gaussian, uniform and empirical families,
        closed-form propagation where an exact rule exists and paired Monte
        Carlo propagation otherwise.

    sampling:
        Canonical sample size, seed stream and skip-warning threshold.
        ``sampling(seed=...)`` scopes a reproducible configuration.

Design Principle:
    This subpackage has no dependencies on physics/, plotting or pandas.
    It can be independently tested.
"""

from .distribution import (
    UncertainValue,
    as_uncertain,
    constant,
    from_samples,
    gaussian,
    mean_of,
    std_of,
    uniform,
)
from .sampling import (
    SamplingConfig,
    configure,
    current_config,
    next_seed,
    sampling,
)

__all__ = [
    "UncertainValue",
    "gaussian",
    "uniform",
    "from_samples",
    "constant",
    "as_uncertain",
    "mean_of",
    "std_of",
    "SamplingConfig",
    "configure",
    "current_config",
    "next_seed",
    "sampling",
]
