"""
Exponential distribution.

The Exponential distribution has PDF:

.. math::
    p(x|\\lambda) = \\lambda e^{-\\lambda x}

for :math:`x \\geq 0`, where :math:`\\lambda > 0` is the rate parameter.

It is the one-component hyperexponential distribution and every quantity
has a closed form, including the quantile
:math:`F^{-1}(p) = -\\log(1 - p) / \\lambda`.

Note: scipy uses scale = 1/rate parametrization.
"""

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray
from scipy.special import factorial

from hyperexp.base import Distribution
from hyperexp.base.distribution import _scalar_or_array, _validate_probability
from hyperexp.exceptions import InvalidArgumentError
from hyperexp.params import ExponentialParams
from hyperexp.utils.precision import resolve_dtype


class Exponential(Distribution):
    """
    Exponential distribution with rate :math:`\\lambda`.

    Parameters
    ----------
    rate : float
        Rate parameter :math:`\\lambda > 0`.
    dtype : dtype-like, optional
        Floating-point type of every evaluation (float32, float64 or
        longdouble). Default is float64.

    Examples
    --------
    >>> dist = Exponential(rate=2.0)
    >>> dist.mean()
    np.float64(0.5)
    >>> dist = Exponential.from_classical_params(rate=2.0)

    See Also
    --------
    Hyperexponential : Finite mixture of exponential distributions.
    """

    def __init__(self, rate: float, *, dtype: DTypeLike = np.float64):
        self.dtype = resolve_dtype(dtype)
        rate = self.dtype.type(rate)
        if not (np.isfinite(rate) and rate > 0):
            raise InvalidArgumentError(f"Rate must be positive and finite, got {rate}")
        self._rate = rate

    @classmethod
    def from_classical_params(cls, *, rate, dtype: DTypeLike = np.float64) -> 'Exponential':
        """Create distribution from the rate parameter."""
        return cls(rate, dtype=dtype)

    @property
    def rate(self) -> np.floating:
        """Rate parameter :math:`\\lambda`."""
        return self._rate

    @property
    def classical_params(self) -> ExponentialParams:
        """Classical parameters as a frozen dataclass."""
        return ExponentialParams(rate=self._rate)

    def range(self):
        """Theoretical range ``(0, inf)``."""
        return self.dtype.type(0), self.dtype.type(np.inf)

    def support(self):
        """Representable support ``(tiny, max)`` of the dtype."""
        finfo = np.finfo(self.dtype)
        return finfo.tiny, finfo.max

    def mode(self) -> np.floating:
        """Mode of the distribution, always 0."""
        return self.dtype.type(0)

    def pdf(self, x: ArrayLike) -> NDArray:
        """
        Probability density function: f(x) = λ exp(-λx) for x ≥ 0, 0 otherwise.
        """
        x = np.asarray(x, dtype=self.dtype)
        rate = self._rate
        result = rate * np.exp(-rate * np.maximum(x, 0))
        result = np.where(x < 0, 0, result).astype(self.dtype)
        return _scalar_or_array(result)

    def cdf(self, x: ArrayLike) -> NDArray:
        """
        Cumulative distribution function: F(x) = 1 - exp(-λx) for x ≥ 0.
        """
        x = np.asarray(x, dtype=self.dtype)
        result = -np.expm1(-self._rate * np.maximum(x, 0))
        return _scalar_or_array(result)

    def sf(self, x: ArrayLike) -> NDArray:
        """
        Survival function: S(x) = exp(-λx) for x ≥ 0, 1 otherwise.
        """
        x = np.asarray(x, dtype=self.dtype)
        result = np.exp(-self._rate * np.maximum(x, 0))
        return _scalar_or_array(result)

    def ppf(self, q: ArrayLike) -> NDArray:
        """
        Percent point function: -log(1 - q) / λ.

        Raises
        ------
        DomainError
            If ``q`` is outside ``[0, 1]``.
        """
        q = _validate_probability(q, self.dtype)
        with np.errstate(divide='ignore'):
            result = -np.log1p(-q) / self._rate
        return _scalar_or_array(result)

    def isf(self, q: ArrayLike) -> NDArray:
        """
        Inverse survival function: -log(q) / λ.

        Raises
        ------
        DomainError
            If ``q`` is outside ``[0, 1]``.
        """
        q = _validate_probability(q, self.dtype)
        with np.errstate(divide='ignore'):
            result = -np.log(q) / self._rate
        return _scalar_or_array(result)

    def moment(self, n: int) -> np.floating:
        """Raw moment E[X^n] = n! / λ^n."""
        if int(n) != n or n < 0:
            raise InvalidArgumentError(f"Moment order must be a non-negative integer, got {n}")
        n = int(n)
        return self.dtype.type(factorial(n, exact=True)) / self._rate ** n

    def mean(self) -> np.floating:
        """Mean: E[X] = 1/λ."""
        return 1 / self._rate

    def var(self) -> np.floating:
        """Variance: Var[X] = 1/λ²."""
        return 1 / self._rate ** 2

    def skewness(self) -> np.floating:
        """Skewness, always 2."""
        return self.dtype.type(2)

    def kurtosis(self) -> np.floating:
        """Kurtosis, always 9 (excess 6)."""
        return self.dtype.type(9)

    def __repr__(self) -> str:
        return f"Exponential(rate={self._rate!r}, dtype={self.dtype})"
