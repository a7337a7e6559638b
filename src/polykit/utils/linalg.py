"""Linear algebra helpers used by the polynomial fitter."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from polykit.config import PIVOT_RTOL
from polykit.logger import polykit_logger

__all__ = [
    "SingularMatrixError",
    "invert_matrix",
    "inverted",
]


class SingularMatrixError(ValueError):
    """Raised when a matrix that has to be inverted is (numerically) singular."""


def _check_square(matrix: np.ndarray) -> int:
    """Returns the size of a square 2D array or raises ``ValueError``."""
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square 2D; got shape {matrix.shape}.")
    return matrix.shape[0]


def invert_matrix(matrix: NDArray[np.floating], *, rtol: float = PIVOT_RTOL) -> bool:
    """Inverts a square matrix in place by Gauss-Jordan elimination.

    The matrix is reduced column by column against an augmented identity.
    Each diagonal element is used as the pivot as it stands: there is no
    pivot search and no row exchange. This is adequate for well-conditioned
    symmetric positive-definite matrices such as the normal-equations matrix
    ``X @ X.T`` of distinct sample points, but it is not a general purpose,
    numerically robust inverter.

    Args:
        matrix: Writable square array of a floating dtype. On success it is
            overwritten with its inverse. On failure its content is
            undefined.
        rtol: The pivot of row ``m`` counts as zero when
            ``abs(pivot) <= rtol * abs(d[m])``, with ``d`` the diagonal of
            ``matrix`` before elimination. Exact zeros always fail.

    Returns:
        ``True`` if the inversion succeeded, ``False`` if a zero pivot was
        met, i.e. the matrix is singular or too ill-conditioned for
        elimination without pivoting.

    Raises:
        TypeError: If ``matrix`` is not a NumPy array of a floating dtype.
        ValueError: If ``matrix`` is not square 2D.
    """
    if not isinstance(matrix, np.ndarray) or not np.issubdtype(matrix.dtype, np.floating):
        raise TypeError("matrix must be a floating point numpy.ndarray.")
    n = _check_square(matrix)

    scale = np.abs(np.diag(matrix)).copy()
    unit = np.eye(n, dtype=matrix.dtype)
    for m in range(n):
        pivot = matrix[m, m]
        if abs(pivot) <= rtol * scale[m]:
            polykit_logger.debug("Zero pivot at position %d of a %dx%d matrix.", m, n, n)
            return False
        matrix[m] /= pivot
        unit[m] /= pivot

        # eliminate column m from all other rows
        factors = matrix[:, m].copy()
        factors[m] = 0.0
        matrix -= np.outer(factors, matrix[m])
        unit -= np.outer(factors, unit[m])

    matrix[...] = unit
    return True


def inverted(matrix: NDArray[np.floating], *, rtol: float = PIVOT_RTOL) -> NDArray[np.float64]:
    """Returns the inverse of ``matrix`` without modifying it.

    Args:
        matrix: Square 2D array-like.
        rtol: Zero-pivot threshold, see :func:`invert_matrix`.

    Returns:
        The inverse as a new ``float64`` array.

    Raises:
        ValueError: If ``matrix`` is not square 2D.
        SingularMatrixError: If the elimination meets a zero pivot.
    """
    work = np.array(matrix, dtype=np.float64)
    _check_square(work)
    if not invert_matrix(work, rtol=rtol):
        raise SingularMatrixError("matrix is singular; could not invert it.")
    return work
