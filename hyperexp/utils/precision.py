"""
Precision introspection for the supported floating-point types.

The quantile search and the reported support depend on the working
precision: a float32 mixture can only be inverted to about seven digits while
an extended precision one is good to about nineteen. Everything here is read
from :func:`numpy.finfo`, so the same algorithm serves every width.
"""

from dataclasses import dataclass
import numpy as np
from numpy.typing import DTypeLike

from hyperexp.exceptions import InvalidArgumentError

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64), np.dtype(np.longdouble))

#: Iteration bound of the quantile root search.
DEFAULT_MAX_ITER = 200


def resolve_dtype(dtype: DTypeLike) -> np.dtype:
    """
    Normalize ``dtype`` and check it is a supported real floating type.

    Parameters
    ----------
    dtype : dtype-like
        ``np.float32``, ``np.float64``, ``np.longdouble`` or an equivalent
        spelling (``'float32'``, ``float``...).

    Returns
    -------
    dtype : numpy.dtype

    Raises
    ------
    InvalidArgumentError
        If the type is not one of the supported floating types.
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise InvalidArgumentError(f"Unsupported dtype {dtype!r}") from exc
    if dt not in SUPPORTED_DTYPES:
        raise InvalidArgumentError(
            f"Unsupported dtype {dt}, expected one of "
            f"{', '.join(str(d) for d in SUPPORTED_DTYPES)}"
        )
    return dt


@dataclass(frozen=True, slots=True)
class TolerancePolicy:
    """
    Precision constants of a floating-point type.

    Attributes
    ----------
    dtype : numpy.dtype
        The floating-point type.
    eps : numpy.floating
        Machine epsilon.
    tiny : numpy.floating
        Smallest positive normal number.
    max : numpy.floating
        Largest finite number.
    digits : int
        Binary digits of the significand (including the implicit bit).
    xtol : numpy.floating
        Relative tolerance of root searches, ``2 * eps``.
    max_iter : int
        Iteration bound of root searches.
    """
    dtype: np.dtype
    eps: np.floating
    tiny: np.floating
    max: np.floating
    digits: int
    xtol: np.floating
    max_iter: int

    @classmethod
    def for_dtype(cls, dtype: DTypeLike, max_iter: int = DEFAULT_MAX_ITER) -> 'TolerancePolicy':
        """
        Build the policy for ``dtype``.

        Parameters
        ----------
        dtype : dtype-like
            Supported floating type, see :func:`resolve_dtype`.
        max_iter : int, optional
            Iteration bound of root searches. Default is 200.

        Returns
        -------
        policy : TolerancePolicy
        """
        dt = resolve_dtype(dtype)
        if int(max_iter) != max_iter or max_iter < 1:
            raise InvalidArgumentError(f"max_iter must be a positive integer, got {max_iter}")
        finfo = np.finfo(dt)
        return cls(
            dtype=dt,
            eps=finfo.eps,
            tiny=finfo.tiny,
            max=finfo.max,
            digits=int(finfo.nmant) + 1,
            xtol=finfo.eps * 2,
            max_iter=int(max_iter),
        )
