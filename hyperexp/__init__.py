"""
hyperexp: the hyperexponential distribution (finite mixture of exponentials).

Provides a scipy-style distribution object with density, CDF, survival
function, quantile and inverse survival function, and closed-form moments,
evaluated in single, double or extended precision.

Key features:
- Immutable model validated once at construction (weights normalized)
- Survival function summed directly, no ``1 - cdf`` cancellation
- Quantiles by bracketed Newton/bisection with dtype-dependent tolerance
- Frozen dataclass parameter containers (hyperexp.params)
"""

import logging

from hyperexp.exceptions import ConvergenceError, DomainError, InvalidArgumentError
from hyperexp.params import ExponentialParams, HyperexponentialParams
from hyperexp.distributions import Exponential, Hyperexponential

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Distributions
    "Exponential",
    "Hyperexponential",
    # Parameter dataclasses
    "ExponentialParams",
    "HyperexponentialParams",
    # Exceptions
    "InvalidArgumentError",
    "DomainError",
    "ConvergenceError",
]
