"""Univariate distributions."""

from .exponential import Exponential
from .hyperexponential import Hyperexponential

__all__ = ['Exponential', 'Hyperexponential']
