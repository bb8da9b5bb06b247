"""
Exceptions raised by hyperexp distributions.

The classes derive from the builtin exceptions that the scipy-style API
raises (``ValueError`` for bad arguments, ``RuntimeError`` for failed
iterations), so ``except ValueError`` keeps catching argument errors.
"""


class InvalidArgumentError(ValueError):
    """Distribution parameters (or a moment order) are not valid."""


class DomainError(ValueError):
    """A probability argument lies outside ``[0, 1]``."""


class ConvergenceError(RuntimeError):
    """
    A root search ran out of iterations before meeting its tolerance.

    Parameters
    ----------
    message : str
        Human readable description.
    iterations : int
        Number of iterations performed.
    bracket : tuple of float
        Last ``(lower, upper)`` bracket known to contain the root.
    x : float
        Last iterate.
    """

    def __init__(self, message, iterations=None, bracket=None, x=None):
        super().__init__(message)
        self.iterations = iterations
        self.bracket = bracket
        self.x = x


__all__ = ["InvalidArgumentError", "DomainError", "ConvergenceError"]
