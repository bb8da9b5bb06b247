"""
Bracketed root search for monotone scalar functions.

Two primitives are provided:

- :func:`expand_bracket` grows an upper bound geometrically until a
  monotone function changes sign.
- :func:`newton_bisect` refines a sign-changing bracket with Newton steps,
  falling back to bisection whenever a step leaves the bracket or does not
  shrink it fast enough (the ``rtsafe`` scheme). Brackets spanning many
  orders of magnitude are bisected geometrically.

All arithmetic is carried out in the dtype of the supplied
:class:`~hyperexp.utils.precision.TolerancePolicy`, so the same code serves
float32, float64 and extended precision.
"""

import logging
from typing import Callable, Tuple
import numpy as np

from hyperexp.exceptions import ConvergenceError
from hyperexp.utils.precision import TolerancePolicy

logger = logging.getLogger(__name__)

#: ``func(x) -> (g(x), g'(x))``
ValueAndDerivative = Callable[[np.floating], Tuple[np.floating, np.floating]]


def _split_point(lo, hi, policy: TolerancePolicy) -> np.floating:
    """
    Fallback step inside the bracket.

    The arithmetic midpoint, or the geometric midpoint when a positive
    bracket spans more than a factor of 4. A lower end of 0 is replaced by
    the smallest normal number of the dtype.
    """
    a, b = min(lo, hi), max(lo, hi)
    if a >= 0:
        floor = a if a > 0 else policy.tiny
        if b > 4 * floor:
            return np.sqrt(floor) * np.sqrt(b)
    return a + policy.dtype.type(0.5) * (b - a)


def expand_bracket(
    func: Callable[[np.floating], np.floating],
    upper: np.floating,
    policy: TolerancePolicy,
    factor: float = 2.0,
) -> np.floating:
    """
    Grow ``upper`` until ``func(upper) >= 0`` for a non-decreasing ``func``.

    Parameters
    ----------
    func : callable
        Non-decreasing function of one scalar.
    upper : scalar
        Starting point, must be positive.
    policy : TolerancePolicy
        Provides the dtype, the largest finite value and the iteration bound.
    factor : float, optional
        Growth factor per step. Default is 2.

    Returns
    -------
    upper : scalar
        A point where ``func`` is non-negative.

    Raises
    ------
    ConvergenceError
        If no sign change is found before overflowing the dtype or running
        out of iterations.
    """
    real = policy.dtype.type
    upper = real(upper)
    growth = real(factor)
    for iteration in range(policy.max_iter):
        if func(upper) >= 0:
            logger.debug("bracket upper end %r found after %d expansions", upper, iteration)
            return upper
        if upper > policy.max / growth:
            break
        upper = upper * growth
    raise ConvergenceError(
        f"Could not bracket the root: function still negative at {upper!r}",
        iterations=iteration + 1,
        x=upper,
    )


def newton_bisect(
    func: ValueAndDerivative,
    lower: np.floating,
    upper: np.floating,
    policy: TolerancePolicy,
    x0=None,
) -> np.floating:
    """
    Find the root of ``func`` inside ``[lower, upper]``.

    The bracket must contain a sign change of ``g``. Each iteration takes a
    Newton step ``x - g/g'`` and shrinks the bracket around the root; a step
    that leaves the bracket, or that is less than half as long as the step
    before last, is replaced by bisection, so convergence is never slower
    than bisection. A positive bracket wider than a factor of 4 is split at
    its geometric midpoint, which takes a bracket such as ``[1e-30, 1e30]``
    to the scale of the root in a few steps.

    Parameters
    ----------
    func : callable
        ``func(x) -> (g, dg)`` returning the value and the derivative.
    lower, upper : scalar
        Bracket ends with ``g(lower)`` and ``g(upper)`` of opposite sign (or
        zero).
    policy : TolerancePolicy
        Tolerance, dtype and iteration bound.
    x0 : scalar, optional
        Starting point inside the bracket. Defaults to the (geometric)
        midpoint.

    Returns
    -------
    root : scalar
        Root estimate in ``policy.dtype``.

    Raises
    ------
    ValueError
        If the bracket does not contain a sign change.
    ConvergenceError
        If ``policy.max_iter`` iterations do not meet the tolerance.
    """
    real = policy.dtype.type
    lo, hi = real(lower), real(upper)
    if lo > hi:
        lo, hi = hi, lo

    g_lo, _ = func(lo)
    if g_lo == 0:
        return lo
    g_hi, _ = func(hi)
    if g_hi == 0:
        return hi
    if (g_lo > 0) == (g_hi > 0):
        raise ValueError(
            f"Root is not bracketed: g({lo!r}) = {g_lo!r}, g({hi!r}) = {g_hi!r}"
        )
    # Orient so that g(lo) < 0 < g(hi)
    if g_lo > 0:
        lo, hi = hi, lo

    x = _split_point(lo, hi, policy) if x0 is None else real(x0)
    if not min(lo, hi) < x < max(lo, hi):
        x = _split_point(lo, hi, policy)
    dx_old = abs(hi - lo)
    dx = dx_old

    for iteration in range(1, policy.max_iter + 1):
        g, dg = func(x)
        if g == 0:
            logger.debug("exact root %r after %d iterations", x, iteration)
            return x
        if g < 0:
            lo = x
        else:
            hi = x

        # Newton step unless it leaves the bracket or stalls
        step_ok = (
            dg != 0
            and np.isfinite(dg)
            and ((x - hi) * dg - g) * ((x - lo) * dg - g) < 0
            and abs(2 * g) <= abs(dx_old * dg)
        )
        dx_old = dx
        if step_ok:
            dx = g / dg
            x_new = x - dx
        else:
            x_new = _split_point(lo, hi, policy)
            dx = x_new - lo

        tol = policy.xtol * abs(x_new)
        if abs(dx) <= tol or abs(hi - lo) <= tol or x_new == lo or x_new == hi:
            logger.debug(
                "root %r after %d iterations, bracket [%r, %r]",
                x_new, iteration, min(lo, hi), max(lo, hi),
            )
            return x_new
        x = x_new

    raise ConvergenceError(
        f"Root search did not converge in {policy.max_iter} iterations "
        f"(bracket [{min(lo, hi)!r}, {max(lo, hi)!r}])",
        iterations=policy.max_iter,
        bracket=(min(lo, hi), max(lo, hi)),
        x=x,
    )
