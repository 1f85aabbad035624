"""
Uncertain scalar values with closed-form and Monte Carlo propagation.

An ``UncertainValue`` is an immutable random variable of one of three
families:

- ``gaussian``: N(mean, stddev^2)
- ``uniform``: continuous uniform on [low, high]
- ``empirical``: equal probability mass on each stored sample

Arithmetic (+, -, *, /, **) uses an exact rule when one exists:

- Gaussian +/- Gaussian
- Gaussian or uniform combined with a constant (affine image)
- Empirical combined with a constant (pointwise on the stored samples)

A Gaussian is kept as its mean plus a weighted sum of standard-normal base
draws, one per seed. Sums and differences merge the weights, so a result
still knows every input it contains: ``(a + b) - a`` has exactly the spread
of ``b``.

Otherwise both operands are materialised as sample arrays, paired by index
under the independence assumption, and combined pointwise. Two empirical
values with the same sample count are paired directly; anything else is
materialised at the canonical sample size S of the active
:mod:`aerolift.stats.sampling` configuration, resampling empirical values
with replacement.

Pairs whose result is undefined (zero divisor, NaN from a fractional power of
a negative base) are skipped. A ``DegradedPrecisionWarning`` is emitted when
the skipped fraction exceeds the configured threshold, and
``DivisionByZero`` is raised if no pair survives.

Comparisons (``>``, ``<``, ``>=``, ``<=``) compare means. This is the
decision rule used for branching on a sign, e.g. ``if lift > 0``.
"""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

import numpy as np
from scipy.stats import norm

from ..errors import (
    DegradedPrecisionWarning,
    DivisionByZero,
    EmptyInput,
    InvalidParameter,
)
from .sampling import current_config, next_seed, resolve_sample_size

logger = logging.getLogger(__name__)

GAUSSIAN = "gaussian"
UNIFORM = "uniform"
EMPIRICAL = "empirical"

_OPS = {
    "add": np.add,
    "sub": np.subtract,
    "mul": np.multiply,
    "truediv": np.divide,
    "pow": np.power,
}
_SYMBOLS = {"add": "+", "sub": "-", "mul": "*", "truediv": "/", "pow": "**"}

Operand = Union["UncertainValue", float]


def _finite(value, name: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(out):
        raise InvalidParameter(f"{name} must be finite, got {value!r}")
    return out


def _is_operand(value) -> bool:
    return isinstance(value, (UncertainValue, numbers.Real))


@dataclass(frozen=True, eq=False, repr=False)
class UncertainValue:
    """
    Immutable random variable supporting arithmetic propagation.

    Use :func:`gaussian`, :func:`uniform`, :func:`from_samples` or
    :func:`constant` to construct values; the fields are an implementation
    detail.

    Attributes:
        family: ``"gaussian"``, ``"uniform"`` or ``"empirical"``.
        params: ``(mean, stddev)`` or ``(low, high)``; empty for empirical.
        seed: Seed of the value's underlying draw.
        sample_size: Canonical sample count S used when materialising.
        orientation: +1 or -1; direction in which a uniform's underlying
            draw maps onto [low, high]. Affine images with a negative factor
            flip it so their samples stay the exact image of the parent's.
        data: Stored samples for the empirical family (read-only).
        weights: Gaussian only. ``(seed, weight)`` pairs; samples are
            ``mean + sum(weight * z_seed)`` with ``z_seed`` the standard
            normal draw of that seed.
    """

    family: str
    params: Tuple[float, ...]
    seed: int
    sample_size: int
    orientation: int = 1
    data: Optional[np.ndarray] = field(default=None)
    weights: Tuple[Tuple[int, float], ...] = ()

    def __post_init__(self):
        if self.data is not None:
            data = np.array(self.data, dtype=float)
            data.setflags(write=False)
            object.__setattr__(self, "data", data)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def gaussian(cls, mean, stddev, *, seed=None, sample_size=None) -> "UncertainValue":
        """Gaussian N(mean, stddev^2). Raises InvalidParameter if stddev < 0."""
        mean = _finite(mean, "mean")
        stddev = _finite(stddev, "stddev")
        if stddev < 0:
            raise InvalidParameter(f"stddev must be >= 0, got {stddev}")
        seed = _resolve_seed(seed)
        return cls(
            GAUSSIAN,
            (mean, stddev),
            seed,
            resolve_sample_size(sample_size),
            weights=((seed, stddev),),
        )

    @classmethod
    def uniform(cls, low, high, *, seed=None, sample_size=None) -> "UncertainValue":
        """Continuous uniform on [low, high]. Raises InvalidParameter if low > high."""
        low = _finite(low, "low")
        high = _finite(high, "high")
        if low > high:
            raise InvalidParameter(f"low ({low}) must be <= high ({high})")
        return cls(
            UNIFORM,
            (low, high),
            _resolve_seed(seed),
            resolve_sample_size(sample_size),
        )

    @classmethod
    def from_samples(cls, samples, *, seed=None, sample_size=None) -> "UncertainValue":
        """
        Empirical distribution with equal mass on each given sample.

        Raises:
            EmptyInput: If ``samples`` is empty.
            InvalidParameter: If ``samples`` is not one-dimensional or holds
                non-finite values.
        """
        try:
            data = np.asarray(samples, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidParameter(f"samples must be real numbers: {exc}") from exc
        if data.ndim != 1:
            raise InvalidParameter(
                f"samples must be one-dimensional, got shape {data.shape}"
            )
        if data.size == 0:
            raise EmptyInput("Cannot build an empirical distribution from no samples.")
        if not np.all(np.isfinite(data)):
            raise InvalidParameter("samples must all be finite.")
        return cls(
            EMPIRICAL,
            (),
            _resolve_seed(seed),
            resolve_sample_size(sample_size),
            data=data,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def sample_count(self) -> int:
        """Number of samples: stored count for empirical, S otherwise."""
        if self.family == EMPIRICAL:
            return int(self.data.size)
        return self.sample_size

    @property
    def is_closed_form(self) -> bool:
        return self.family != EMPIRICAL

    @property
    def is_point_mass(self) -> bool:
        """True when the distribution puts all its mass on one value."""
        if self.family == GAUSSIAN:
            return self.params[1] == 0.0
        if self.family == UNIFORM:
            return self.params[0] == self.params[1]
        return bool(np.all(self.data == self.data[0]))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def mean(self) -> float:
        if self.family == GAUSSIAN:
            return self.params[0]
        if self.family == UNIFORM:
            low, high = self.params
            return 0.5 * (low + high)
        return float(np.mean(self.data))

    def variance(self) -> float:
        if self.family == GAUSSIAN:
            return self.params[1] ** 2
        if self.family == UNIFORM:
            low, high = self.params
            return (high - low) ** 2 / 12.0
        return float(np.var(self.data))

    def std(self) -> float:
        """Standard deviation (population moment for empirical values)."""
        if self.family == GAUSSIAN:
            return self.params[1]
        if self.family == UNIFORM:
            low, high = self.params
            return (high - low) / math.sqrt(12.0)
        return float(np.std(self.data))

    def quantile(self, q: float) -> float:
        """Return the q-quantile of the distribution, q in [0, 1]."""
        q = _finite(q, "q")
        if not 0.0 <= q <= 1.0:
            raise InvalidParameter(f"q must be in [0, 1], got {q}")
        if self.family == GAUSSIAN:
            mean, stddev = self.params
            if stddev == 0.0:
                return mean
            return float(norm.ppf(q, loc=mean, scale=stddev))
        if self.family == UNIFORM:
            low, high = self.params
            return low + q * (high - low)
        return float(np.quantile(self.data, q))

    def interval(self, coverage: float = 0.90) -> Tuple[float, float]:
        """Central interval holding ``coverage`` of the probability mass."""
        coverage = _finite(coverage, "coverage")
        if not 0.0 < coverage < 1.0:
            raise InvalidParameter(f"coverage must be in (0, 1), got {coverage}")
        tail = 0.5 * (1.0 - coverage)
        return self.quantile(tail), self.quantile(1.0 - tail)

    def samples(self, size: Optional[int] = None) -> np.ndarray:
        """
        Materialise the distribution as a new array of samples.

        Args:
            size: Number of samples. Defaults to :attr:`sample_count`.
                Empirical values of another count are resampled with
                replacement.
        """
        if size is None:
            size = self.sample_count
        else:
            size = resolve_sample_size(size)
        return np.array(self._draw(size), dtype=float)

    def compare_greater_than(self, other: Operand) -> bool:
        """Decide ``self > other`` by comparing means."""
        return self.mean() > mean_of(other)

    def probability_greater_than(self, other: Operand = 0.0) -> float:
        """
        Estimate P(self > other) assuming independence.

        Gaussian and uniform differences are evaluated in closed form; other
        results use the fraction of paired samples.
        """
        if not _is_operand(other):
            raise InvalidParameter(f"Cannot compare with {other!r}")
        diff = self - other
        if diff.family == GAUSSIAN:
            mean, stddev = diff.params
            if stddev == 0.0:
                return float(mean > 0.0)
            return float(norm.sf(0.0, loc=mean, scale=stddev))
        if diff.family == UNIFORM:
            low, high = diff.params
            if low == high:
                return float(low > 0.0)
            return float(np.clip(high / (high - low), 0.0, 1.0))
        return float(np.mean(diff.data > 0.0))

    def describe(self) -> Dict[str, object]:
        """Summary statistics used by reports and tables."""
        return {
            "family": self.family,
            "sample_count": self.sample_count,
            "mean": self.mean(),
            "std": self.std(),
            "p05": self.quantile(0.05),
            "median": self.quantile(0.5),
            "p95": self.quantile(0.95),
        }

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------
    def __add__(self, other):
        return _combine(self, other, "add") if _is_operand(other) else NotImplemented

    def __radd__(self, other):
        return _combine(other, self, "add") if _is_operand(other) else NotImplemented

    def __sub__(self, other):
        return _combine(self, other, "sub") if _is_operand(other) else NotImplemented

    def __rsub__(self, other):
        return _combine(other, self, "sub") if _is_operand(other) else NotImplemented

    def __mul__(self, other):
        return _combine(self, other, "mul") if _is_operand(other) else NotImplemented

    def __rmul__(self, other):
        return _combine(other, self, "mul") if _is_operand(other) else NotImplemented

    def __truediv__(self, other):
        return _combine(self, other, "truediv") if _is_operand(other) else NotImplemented

    def __rtruediv__(self, other):
        return _combine(other, self, "truediv") if _is_operand(other) else NotImplemented

    def __pow__(self, other):
        return _combine(self, other, "pow") if _is_operand(other) else NotImplemented

    def __rpow__(self, other):
        return _combine(other, self, "pow") if _is_operand(other) else NotImplemented

    def __neg__(self):
        return _with_constant(self, "mul", -1.0, reflected=False)

    def __pos__(self):
        return self

    def __gt__(self, other):
        return self.compare_greater_than(other) if _is_operand(other) else NotImplemented

    def __lt__(self, other):
        return self.mean() < mean_of(other) if _is_operand(other) else NotImplemented

    def __ge__(self, other):
        return self.mean() >= mean_of(other) if _is_operand(other) else NotImplemented

    def __le__(self, other):
        return self.mean() <= mean_of(other) if _is_operand(other) else NotImplemented

    def __repr__(self):
        return (
            f"UncertainValue(family={self.family!r}, mean={self.mean():.6g}, "
            f"std={self.std():.6g}, n={self.sample_count})"
        )

    def __str__(self):
        return f"{self.mean():.6g} ± {self.std():.6g}"

    # ------------------------------------------------------------------
    # Materialisation
    # ------------------------------------------------------------------
    def _draw(self, size: int) -> np.ndarray:
        if self.family == GAUSSIAN:
            out = np.full(size, self.params[0])
            for seed, weight in self.weights:
                out = out + weight * np.random.default_rng(seed).standard_normal(size)
            return out
        rng = np.random.default_rng(self.seed)
        if self.family == UNIFORM:
            low, high = self.params
            u = rng.random(size)
            if self.orientation > 0:
                return low + (high - low) * u
            return high - (high - low) * u
        if size == self.data.size:
            return self.data
        return self.data[rng.integers(0, self.data.size, size)]


def _resolve_seed(seed) -> int:
    if seed is None:
        return next_seed()
    try:
        valid = not isinstance(seed, bool) and int(seed) == seed and seed >= 0
    except (TypeError, ValueError):
        valid = False
    if not valid:
        raise InvalidParameter(f"seed must be a non-negative integer, got {seed!r}")
    return int(seed)


def gaussian(mean, stddev, *, seed=None, sample_size=None) -> UncertainValue:
    """Construct a Gaussian N(mean, stddev^2)."""
    return UncertainValue.gaussian(mean, stddev, seed=seed, sample_size=sample_size)


def uniform(low, high, *, seed=None, sample_size=None) -> UncertainValue:
    """Construct a continuous uniform distribution on [low, high]."""
    return UncertainValue.uniform(low, high, seed=seed, sample_size=sample_size)


def from_samples(samples, *, seed=None, sample_size=None) -> UncertainValue:
    """Construct an empirical distribution from observed samples."""
    return UncertainValue.from_samples(samples, seed=seed, sample_size=sample_size)


def constant(value, *, sample_size=None) -> UncertainValue:
    """A zero-width Gaussian holding ``value`` exactly."""
    return UncertainValue.gaussian(value, 0.0, sample_size=sample_size)


def as_uncertain(value: Operand) -> UncertainValue:
    """Return ``value`` unchanged if uncertain, else wrap it as a constant."""
    if isinstance(value, UncertainValue):
        return value
    return constant(value)


def mean_of(value: Operand) -> float:
    """Mean of an uncertain value, or the value itself for a plain number."""
    if isinstance(value, UncertainValue):
        return value.mean()
    return _finite(value, "value")


def std_of(value: Operand) -> float:
    """Standard deviation of an uncertain value; 0.0 for a plain number."""
    if isinstance(value, UncertainValue):
        return value.std()
    _finite(value, "value")
    return 0.0


# ----------------------------------------------------------------------
# Propagation
# ----------------------------------------------------------------------
def _constant_of(value) -> Optional[float]:
    """Scalar held by ``value`` if it is a number or a parametric point mass."""
    if isinstance(value, UncertainValue):
        if value.family != EMPIRICAL and value.is_point_mass:
            return value.params[0]
        return None
    return _finite(value, "operand")


def _combine(left: Operand, right: Operand, op: str) -> UncertainValue:
    left_const = _constant_of(left)
    right_const = _constant_of(right)

    if left_const is not None and right_const is not None:
        sizes = [v.sample_size for v in (left, right) if isinstance(v, UncertainValue)]
        result = _apply_scalar(op, left_const, right_const)
        return UncertainValue.gaussian(result, 0.0, sample_size=max(sizes))
    if right_const is not None:
        return _with_constant(left, op, right_const, reflected=False)
    if left_const is not None:
        return _with_constant(right, op, left_const, reflected=True)

    closed = _closed_form_pair(left, right, op)
    if closed is not None:
        return closed
    return _sampled_pair(left, right, op)


def _apply_scalar(op: str, left: float, right: float) -> float:
    if op == "truediv" and right == 0.0:
        raise DivisionByZero(f"Division of {left} by a constant zero.")
    with np.errstate(all="ignore"):
        result = float(_OPS[op](left, right))
    if not math.isfinite(result):
        raise InvalidParameter(
            f"{left} {_SYMBOLS[op]} {right} has no finite real value."
        )
    return result


def _gaussian_from_weights(
    mean: float, weights: Dict[int, float], sample_size: int
) -> UncertainValue:
    kept = tuple((seed, w) for seed, w in weights.items() if w != 0.0)
    seed = kept[0][0] if len(kept) == 1 else next_seed()
    stddev = math.hypot(*(w for _, w in kept))
    return UncertainValue(
        GAUSSIAN, (mean, stddev), seed, sample_size, weights=kept
    )


def _affine(value: UncertainValue, scale: float, shift: float) -> UncertainValue:
    """Exact image ``value * scale + shift`` of a parametric value, same draw."""
    if value.family == GAUSSIAN:
        return _gaussian_from_weights(
            value.params[0] * scale + shift,
            {seed: w * scale for seed, w in value.weights},
            value.sample_size,
        )
    low, high = value.params
    a, b = low * scale + shift, high * scale + shift
    orientation = value.orientation
    if scale < 0:
        a, b = b, a
        orientation = -orientation
    return UncertainValue(UNIFORM, (a, b), value.seed, value.sample_size, orientation)


def _with_constant(
    value: UncertainValue, op: str, c: float, reflected: bool
) -> UncertainValue:
    """Combine a non-degenerate value with a constant (``c op value`` if reflected)."""
    if op == "truediv" and not reflected and c == 0.0:
        raise DivisionByZero("Division by a constant zero.")

    if value.family == EMPIRICAL:
        data = value.data
        out = _apply_pointwise(op, c, data) if reflected else _apply_pointwise(op, data, c)
        seed = value.seed if out.size == data.size else next_seed()
        return UncertainValue(EMPIRICAL, (), seed, value.sample_size, data=out)

    if op == "add":
        return _affine(value, 1.0, c)
    if op == "sub":
        return _affine(value, -1.0, c) if reflected else _affine(value, 1.0, -c)
    if op == "mul":
        return _affine(value, c, 0.0)
    if op == "truediv" and not reflected:
        return _affine(value, 1.0 / c, 0.0)
    if op == "pow" and not reflected and c == 1.0:
        return value

    logger.debug(
        "Sampling %s for %s with constant %s", value.family, _SYMBOLS[op], c
    )
    draws = value._draw(value.sample_size)
    out = _apply_pointwise(op, c, draws) if reflected else _apply_pointwise(op, draws, c)
    return UncertainValue(EMPIRICAL, (), next_seed(), value.sample_size, data=out)


def _closed_form_pair(
    left: UncertainValue, right: UncertainValue, op: str
) -> Optional[UncertainValue]:
    if op not in ("add", "sub") or left.family != GAUSSIAN or right.family != GAUSSIAN:
        return None
    sign = 1.0 if op == "add" else -1.0
    # Shared seeds are the same base draw, so their weights add linearly.
    weights = dict(left.weights)
    for seed, w in right.weights:
        weights[seed] = weights.get(seed, 0.0) + sign * w
    return _gaussian_from_weights(
        left.params[0] + sign * right.params[0],
        weights,
        max(left.sample_size, right.sample_size),
    )


def _sampled_pair(left: UncertainValue, right: UncertainValue, op: str) -> UncertainValue:
    sample_size = max(left.sample_size, right.sample_size)
    if (
        left.family == EMPIRICAL
        and right.family == EMPIRICAL
        and left.sample_count == right.sample_count
    ):
        size = left.sample_count
    else:
        size = sample_size
    logger.debug(
        "Sampling %s %s %s with %d paired samples",
        left.family,
        _SYMBOLS[op],
        right.family,
        size,
    )
    out = _apply_pointwise(op, left._draw(size), right._draw(size))
    return UncertainValue(EMPIRICAL, (), next_seed(), sample_size, data=out)


def _apply_pointwise(op: str, left, right) -> np.ndarray:
    """
    Apply ``op`` elementwise, dropping pairs with no finite result.

    Raises:
        DivisionByZero: If every divisor is zero.
        InvalidParameter: If no pair has a finite result for another reason.
    """
    with np.errstate(all="ignore"):
        out = np.asarray(_OPS[op](left, right), dtype=float)
    undefined = ~np.isfinite(out)
    if op == "truediv":
        undefined |= np.broadcast_to(np.asarray(right) == 0.0, out.shape)

    skipped = int(np.count_nonzero(undefined))
    if skipped == 0:
        return out
    if skipped == out.size:
        if op == "truediv" and np.all(np.asarray(right) == 0.0):
            raise DivisionByZero("Every divisor sample is zero.")
        raise InvalidParameter(
            f"'{_SYMBOLS[op]}' has no finite result for any sample pair."
        )

    fraction = skipped / out.size
    logger.info(
        "Skipped %d of %d sample pairs for '%s' (%.2f%%)",
        skipped,
        out.size,
        _SYMBOLS[op],
        100.0 * fraction,
    )
    if fraction > current_config().skip_warn_fraction:
        reason = "zero divisor" if op == "truediv" else "undefined result"
        warnings.warn(
            f"Skipped {skipped} of {out.size} sample pairs ({100.0 * fraction:.1f}%) "
            f"with {reason} in '{_SYMBOLS[op]}'; result precision is degraded.",
            DegradedPrecisionWarning,
            stacklevel=2,
        )
    return out[~undefined]
