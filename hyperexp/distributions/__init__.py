"""Distribution implementations."""

from .univariate import Exponential, Hyperexponential

__all__ = ['Exponential', 'Hyperexponential']
