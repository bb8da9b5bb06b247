"""Utility functions for hyperexp package."""

from .precision import TolerancePolicy, resolve_dtype, SUPPORTED_DTYPES, DEFAULT_MAX_ITER
from .roots import expand_bracket, newton_bisect
from .moments import variance_from_raw, skewness_from_raw, kurtosis_from_raw

__all__ = [
    'TolerancePolicy', 'resolve_dtype', 'SUPPORTED_DTYPES', 'DEFAULT_MAX_ITER',
    'expand_bracket', 'newton_bisect',
    'variance_from_raw', 'skewness_from_raw', 'kurtosis_from_raw',
]
