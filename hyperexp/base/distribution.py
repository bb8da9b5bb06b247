"""
Base class for probability distributions with scipy-like API.

This module provides an abstract base class that defines the standard interface
for continuous univariate distributions, similar to ``scipy.stats``.

The API includes:

- **Density functions**: :meth:`pdf`, :meth:`logpdf`
- **Cumulative distribution**: :meth:`cdf`, :meth:`sf` (survival function)
- **Quantile functions**: :meth:`ppf`, :meth:`isf` (inverse survival)
- **Hazard functions**: :meth:`hazard`, :meth:`chf`
- **Moments**: :meth:`mean`, :meth:`var`, :meth:`std`, :meth:`stats`
- **Ranges**: :meth:`range`, :meth:`support`
"""

from abc import ABC, abstractmethod
from typing import Tuple, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from hyperexp.exceptions import DomainError


def _scalar_or_array(result: NDArray):
    """Unwrap 0-d results into a numpy scalar (keeps the dtype)."""
    result = np.asarray(result)
    if result.ndim == 0:
        return result[()]
    return result


def _validate_probability(q: ArrayLike, dtype: np.dtype, name: str = 'q') -> NDArray:
    """
    Convert ``q`` to ``dtype`` and check every entry lies in ``[0, 1]``.

    Raises
    ------
    DomainError
        If an entry is outside ``[0, 1]`` or NaN.
    """
    q = np.asarray(q, dtype=dtype)
    bad = ~((q >= 0) & (q <= 1))
    if np.any(bad):
        raise DomainError(
            f"Probability {name} must be in [0, 1], got {q[bad].ravel()[0]!r}"
        )
    return q


class Distribution(ABC):
    """
    Abstract base class for continuous univariate distributions.

    This class defines the standard API for probability distributions,
    similar to scipy.stats distributions. All concrete distributions
    should inherit from this class.

    The API includes:
    - pdf: Probability density function
    - logpdf: Log of the probability density function
    - cdf: Cumulative distribution function
    - logcdf: Log of the cumulative distribution function
    - sf: Survival function (1 - CDF)
    - logsf: Log of the survival function
    - ppf: Percent point function (inverse of CDF)
    - isf: Inverse survival function
    - hazard: Hazard rate pdf / sf
    - chf: Cumulative hazard -log(sf)
    - stats: Return moments (mean, variance, skewness, kurtosis)
    - moment: Non-central moment of order n
    - median: Median of the distribution
    - mean: Mean of the distribution
    - var: Variance of the distribution
    - std: Standard deviation of the distribution
    - interval: Confidence interval

    Scalar arguments produce numpy scalars of the distribution's dtype,
    array arguments produce arrays of the same shape.
    """

    #: Floating-point type used for every evaluation.
    dtype = np.dtype(np.float64)

    @abstractmethod
    def pdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Probability density function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the PDF.

        Returns
        -------
        pdf : ndarray
            Probability density at each point.
        """
        pass

    def logpdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Log of the probability density function.

        Default implementation: log(pdf(x))

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the log PDF.

        Returns
        -------
        logpdf : ndarray
            Log probability density at each point.
        """
        with np.errstate(divide='ignore'):
            return _scalar_or_array(np.log(self.pdf(x)))

    @abstractmethod
    def cdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Cumulative distribution function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the CDF.

        Returns
        -------
        cdf : ndarray
            Cumulative probability at each point.
        """
        pass

    def logcdf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Log of the cumulative distribution function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the log CDF.

        Returns
        -------
        logcdf : ndarray
            Log cumulative probability at each point.
        """
        with np.errstate(divide='ignore'):
            return _scalar_or_array(np.log(self.cdf(x)))

    @abstractmethod
    def sf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Survival function (1 - CDF).

        Implementations evaluate it directly; subtracting the CDF from one
        loses all significant digits in the upper tail.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the survival function.

        Returns
        -------
        sf : ndarray
            Survival probability at each point.
        """
        pass

    def logsf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Log of the survival function.

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the log survival function.

        Returns
        -------
        logsf : ndarray
            Log survival probability at each point.
        """
        with np.errstate(divide='ignore'):
            return _scalar_or_array(np.log(self.sf(x)))

    def hazard(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Hazard function h(x) = pdf(x) / sf(x).

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the hazard rate.

        Returns
        -------
        hazard : ndarray
            Instantaneous failure rate at each point.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            return _scalar_or_array(np.asarray(self.pdf(x)) / np.asarray(self.sf(x)))

    def chf(self, x: ArrayLike) -> NDArray[np.floating]:
        """
        Cumulative hazard function H(x) = -log(sf(x)).

        Parameters
        ----------
        x : array_like
            Points at which to evaluate the cumulative hazard.

        Returns
        -------
        chf : ndarray
            Cumulative hazard at each point.
        """
        return _scalar_or_array(-np.asarray(self.logsf(x)))

    @abstractmethod
    def ppf(self, q: ArrayLike) -> NDArray[np.floating]:
        """
        Percent point function (inverse of CDF).

        Parameters
        ----------
        q : array_like
            Probabilities at which to evaluate the PPF.

        Returns
        -------
        ppf : ndarray
            Quantiles corresponding to the given probabilities.
        """
        pass

    @abstractmethod
    def isf(self, q: ArrayLike) -> NDArray[np.floating]:
        """
        Inverse survival function (inverse of SF).

        Parameters
        ----------
        q : array_like
            Probabilities at which to evaluate the ISF.

        Returns
        -------
        isf : ndarray
            Quantiles corresponding to the given survival probabilities.
        """
        pass

    def stats(self, moments: str = 'mv') -> Union[np.floating, Tuple[np.floating, ...]]:
        """
        Return moments of the distribution.

        Parameters
        ----------
        moments : str, optional
            Composed of letters ['mvsk'] defining which moments to compute:
            'm' = mean, 'v' = variance, 's' = skewness, 'k' = kurtosis excess
            (the scipy convention). Default is 'mv'.

        Returns
        -------
        stats : scalar or tuple
            Requested moments.
        """
        results = []
        if 'm' in moments:
            results.append(self.mean())
        if 'v' in moments:
            results.append(self.var())
        if 's' in moments:
            results.append(self.skewness())
        if 'k' in moments:
            results.append(self.kurtosis_excess())

        if len(results) == 1:
            return results[0]
        return tuple(results)

    @abstractmethod
    def mean(self) -> np.floating:
        """Mean of the distribution."""
        pass

    @abstractmethod
    def var(self) -> np.floating:
        """Variance of the distribution."""
        pass

    def std(self) -> np.floating:
        """
        Standard deviation of the distribution.

        Returns
        -------
        std : scalar
            Square root of the variance.
        """
        return np.sqrt(self.var())

    @abstractmethod
    def skewness(self) -> np.floating:
        """Skewness of the distribution."""
        pass

    @abstractmethod
    def kurtosis(self) -> np.floating:
        """Kurtosis of the distribution (normal distribution = 3)."""
        pass

    def kurtosis_excess(self) -> np.floating:
        """
        Excess kurtosis, i.e. kurtosis minus 3.

        Returns
        -------
        kurtosis_excess : scalar
            Kurtosis relative to the normal distribution.
        """
        return self.kurtosis() - self.dtype.type(3)

    def median(self) -> np.floating:
        """
        Median of the distribution.

        Returns
        -------
        median : scalar
            Median value.
        """
        return self.ppf(self.dtype.type(0.5))

    @abstractmethod
    def moment(self, n: int) -> np.floating:
        """
        Non-central moment of order n.

        Parameters
        ----------
        n : int
            Order of the moment.

        Returns
        -------
        moment : scalar
            n-th moment.
        """
        pass

    def interval(self, confidence: float) -> Tuple[np.floating, np.floating]:
        """
        Confidence interval with equal areas around the median.

        Parameters
        ----------
        confidence : float
            Confidence level (between 0 and 1).

        Returns
        -------
        a, b : tuple of scalars
            Lower and upper bounds of the confidence interval.

        Raises
        ------
        DomainError
            If ``confidence`` is not in ``[0, 1]``.
        """
        if not 0 <= confidence <= 1:
            raise DomainError(f"Confidence level must be in [0, 1], got {confidence}")
        alpha = self.dtype.type(confidence)
        one = self.dtype.type(1)
        half = self.dtype.type(0.5)
        lower = self.ppf((one - alpha) * half)
        upper = self.isf((one - alpha) * half)
        return lower, upper

    def range(self) -> Tuple[np.floating, np.floating]:
        """
        Theoretical range of the random variable.

        Returns
        -------
        lower, upper : tuple of scalars
            Default ``(-inf, inf)``.
        """
        return -self.dtype.type(np.inf), self.dtype.type(np.inf)

    def support(self) -> Tuple[np.floating, np.floating]:
        """
        Range of representable values with non-zero density.

        Returns
        -------
        lower, upper : tuple of scalars
            Default ``(-max, max)`` of the dtype.
        """
        finfo = np.finfo(self.dtype)
        return -finfo.max, finfo.max

    def __repr__(self) -> str:
        """String representation of the distribution."""
        return f"{self.__class__.__name__}()"
