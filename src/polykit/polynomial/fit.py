"""Least-squares polynomial fitting through the normal equations.

The fit minimises ``sum((p(x_i) - y_i) ** 2)`` over polynomials ``p`` of a
given degree. With the design matrix ``X`` of shape ``(degree + 1, n)``,
whose row ``j`` holds ``x ** j``, the coefficients solve the normal
equations ``(X @ X.T) @ beta = X @ y``. The symmetric matrix ``X @ X.T`` is
inverted with :func:`polykit.utils.linalg.invert_matrix`.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from polykit.config import DEFAULT_CONFIG, PolyConfig
from polykit.logger import polykit_logger
from polykit.utils.linalg import SingularMatrixError, invert_matrix
from polykit.utils.validate import as_vector, is_nditerable, validate_degree

__all__ = ["polyfit", "design_matrix", "normal_matrix"]


def design_matrix(x: NDArray[np.float64], degree: int) -> NDArray[np.float64]:
    """Builds the transposed Vandermonde matrix of ``x``.

    Args:
        x: 1D sample points of length ``n``.
        degree: Polynomial degree (``>= 0``).

    Returns:
        Array of shape ``(degree + 1, n)``; row ``j`` is ``x ** j``, row 0 is
        all ones.
    """
    xt = np.empty((degree + 1, x.size), dtype=np.float64)
    xt[0] = 1.0
    for j in range(1, degree + 1):
        xt[j] = xt[j - 1] * x
    return xt


def normal_matrix(xt: NDArray[np.float64]) -> NDArray[np.float64]:
    """Returns the symmetric product ``xt @ xt.T`` of a design matrix."""
    return xt @ xt.T


def _parse_args(args: tuple[Any, ...]) -> tuple[NDArray[np.float64], NDArray[np.float64], Any]:
    """Splits ``(y, degree)`` or ``(x, y, degree)`` into arrays and the degree."""
    if len(args) not in (2, 3):
        raise ValueError("number of arguments must be 2, or 3")
    for data in args[:-1]:
        if not is_nditerable(data):
            raise ValueError("input data must be an iterable")

    if len(args) == 2:
        y = as_vector(args[0], name="y")
        # uniformly spaced samples
        x = np.arange(y.size, dtype=np.float64)
    else:
        x = as_vector(args[0], name="x")
        y = as_vector(args[1], name="y")
        if x.size != y.size:
            raise ValueError("input vectors must be of equal length")
    return x, y, args[-1]


def polyfit(*args: Any, config: PolyConfig | None = None) -> NDArray[np.float64]:
    """Fits a polynomial to data in the least-squares sense.

    Two calling conventions are supported:

    * ``polyfit(y, degree)``: the samples are taken at ``x = 0, 1, ..., n - 1``.
    * ``polyfit(x, y, degree)``: explicit sample points.

    A fit with as many samples as the degree (``n == degree``) is not
    rejected up front, only ``n < degree`` is. Such a fit has fewer
    constraints than coefficients, so the normal-equations matrix is rank
    deficient and the inversion will normally fail.

    Args:
        *args: ``(y, degree)`` or ``(x, y, degree)``. ``x`` and ``y`` are
            vector-shaped iterables of real numbers.
        config: Limits and tolerances; defaults to
            :data:`polykit.config.DEFAULT_CONFIG`.

    Returns:
        1D array of ``degree + 1`` coefficients, highest degree first, ready
        for :func:`polykit.polynomial.evaluate.polyval`.

    Raises:
        ValueError: On a wrong number of arguments, non-iterable or
            matrix-shaped data, mismatched lengths, a negative or too large
            degree, or fewer samples than the degree.
        TypeError: If the degree is not an integer.
        SingularMatrixError: If the normal-equations matrix cannot be
            inverted, which happens when the sample points are not pairwise
            distinct (or nearly so).

    Example:
        >>> from polykit import polyfit
        >>> polyfit([1.0, 3.0, 5.0, 7.0], 1)
        array([2., 1.])
    """
    cfg = DEFAULT_CONFIG if config is None else config
    x, y, degree = _parse_args(args)
    degree = validate_degree(degree, cfg.max_degree)

    n = y.size
    if n < degree:
        raise ValueError("more degrees of freedom than data points")
    if n == degree:
        polykit_logger.warning(
            "Fitting a degree %d polynomial to %d samples; the normal equations are rank deficient.",
            degree,
            n,
        )
    polykit_logger.debug("Fitting a degree %d polynomial to %d samples.", degree, n)

    xt = design_matrix(x, degree)
    prod = normal_matrix(xt)
    if not invert_matrix(prod, rtol=cfg.pivot_rtol):
        # X @ X.T is invertible whenever the x values are pairwise distinct
        raise SingularMatrixError("could not invert Vandermonde matrix")

    beta = prod @ (xt @ y)
    # the normal equations yield the constant term first
    return beta[::-1].copy()
