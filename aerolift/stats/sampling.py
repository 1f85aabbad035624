"""
Sampling configuration and reproducible seed stream for Monte Carlo propagation.

Every uncertain value draws one seed from the active stream when it is
created. Materialising a value is a pure function of its parameters, seed and
size, so with a fixed configuration seed the same expression always yields
the same samples.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator

import numpy as np

from ..errors import InvalidParameter

DEFAULT_SAMPLE_SIZE = 10_000
DEFAULT_SKIP_WARN_FRACTION = 0.01


@dataclass(frozen=True)
class SamplingConfig:
    """
    Settings shared by every uncertain value created while they are active.

    Attributes:
        sample_size: Canonical sample count S used when a parametric value is
            materialised.
        seed: Root seed of the seed stream; ``None`` draws fresh OS entropy.
        skip_warn_fraction: Fraction of skipped sample pairs above which a
            ``DegradedPrecisionWarning`` is emitted.
    """

    sample_size: int = DEFAULT_SAMPLE_SIZE
    seed: int | None = None
    skip_warn_fraction: float = DEFAULT_SKIP_WARN_FRACTION

    def __post_init__(self):
        """Validate sampling settings."""
        if not _is_whole(self.sample_size):
            raise InvalidParameter(
                f"sample_size must be an integer, got {self.sample_size!r}"
            )
        if self.sample_size <= 0:
            raise InvalidParameter(f"sample_size must be > 0, got {self.sample_size}")
        if self.seed is not None and not (_is_whole(self.seed) and self.seed >= 0):
            raise InvalidParameter(f"seed must be a non-negative integer, got {self.seed!r}")
        if not isinstance(self.skip_warn_fraction, (int, float)) or not (
            0.0 <= self.skip_warn_fraction <= 1.0
        ):
            raise InvalidParameter(
                f"skip_warn_fraction must be in [0, 1], got {self.skip_warn_fraction!r}"
            )


def _is_whole(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return int(value) == value
    except (TypeError, ValueError, OverflowError):
        return False


_STATE = {
    "config": SamplingConfig(),
    "seeds": np.random.SeedSequence(None),
}


def current_config() -> SamplingConfig:
    """Return the active sampling configuration."""
    return _STATE["config"]


def configure(**overrides) -> SamplingConfig:
    """
    Replace the active configuration and restart the seed stream.

    Args:
        **overrides: Any ``SamplingConfig`` field (``sample_size``, ``seed``,
            ``skip_warn_fraction``).

    Returns:
        The new active configuration.
    """
    config = replace(_STATE["config"], **overrides)
    _STATE["config"] = config
    _STATE["seeds"] = np.random.SeedSequence(config.seed)
    return config


@contextmanager
def sampling(**overrides) -> Iterator[SamplingConfig]:
    """
    Temporarily apply a sampling configuration.

    The previous configuration and seed stream are restored on exit, so
    values created outside the block are unaffected.

    Example:
        >>> with sampling(seed=42, sample_size=2000):
        ...     rho = gaussian(0.597, 0.199)
    """
    saved = dict(_STATE)
    try:
        yield configure(**overrides)
    finally:
        _STATE.update(saved)


def next_seed() -> int:
    """Spawn the next child seed from the active stream."""
    child = _STATE["seeds"].spawn(1)[0]
    return int(child.generate_state(1, dtype=np.uint64)[0])


def resolve_sample_size(sample_size: int | None) -> int:
    """Return ``sample_size`` validated, or the configured canonical size."""
    if sample_size is None:
        return _STATE["config"].sample_size
    if not _is_whole(sample_size) or sample_size <= 0:
        raise InvalidParameter(f"sample_size must be a positive integer, got {sample_size!r}")
    return int(sample_size)
