"""Base class for univariate distributions."""

from .distribution import Distribution

__all__ = [
    "Distribution",
]
