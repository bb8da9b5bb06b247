"""
Frozen dataclass parameter containers for all distributions.

Each distribution's classical parameters are represented as a frozen dataclass
with ``slots=True``. This provides:

- **IDE autocompletion**: ``params.rates`` instead of ``params['rates']``
- **Immutability**: Prevents reassignment of the parameters of a distribution
- **Dict conversion**: ``dataclasses.asdict(params)`` when needed

Examples
--------
>>> from hyperexp.params import HyperexponentialParams
>>> p = HyperexponentialParams(probabilities=np.array([0.4, 0.6]),
...                            rates=np.array([1.0, 3.0]))
>>> p.rates
array([1., 3.])
>>> p.rates = np.array([2.0, 3.0])  # Raises FrozenInstanceError

Notes
-----
The arrays handed out by :class:`~hyperexp.distributions.univariate.Hyperexponential`
are copies, so modifying them in place never reaches the distribution.
"""

from dataclasses import dataclass, fields
import numpy as np


class _ParamsBase:
    """Mixin providing dict-style access on frozen dataclass params.

    Allows both ``params.rates`` and ``params['rates']`` access styles,
    plus ``items()``, ``keys()``, ``values()`` for iteration.
    """

    __slots__ = ()

    def __getitem__(self, key: str):
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key)

    def __contains__(self, key: str) -> bool:
        return hasattr(self, key)

    def keys(self):
        """Yield field names."""
        return (f.name for f in fields(self))

    def values(self):
        """Yield field values."""
        return (getattr(self, f.name) for f in fields(self))

    def items(self):
        """Yield ``(name, value)`` pairs."""
        return ((f.name, getattr(self, f.name)) for f in fields(self))


@dataclass(frozen=True, slots=True)
class ExponentialParams(_ParamsBase):
    """
    Classical parameters for the Exponential distribution.

    Attributes
    ----------
    rate : float
        Rate parameter :math:`\\lambda > 0`.
    """
    rate: float


@dataclass(frozen=True, slots=True)
class HyperexponentialParams(_ParamsBase):
    """
    Classical parameters for the Hyperexponential distribution.

    Attributes
    ----------
    probabilities : np.ndarray
        Mixture weights :math:`p_i \\geq 0`, shape ``(k,)``, summing to one.
    rates : np.ndarray
        Component rates :math:`\\lambda_i > 0`, shape ``(k,)``.
    """
    probabilities: np.ndarray
    rates: np.ndarray


__all__ = [
    "ExponentialParams",
    "HyperexponentialParams",
]
