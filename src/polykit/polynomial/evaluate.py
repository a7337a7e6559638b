"""Polynomial evaluation with Horner's method."""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from polykit.utils.concurrency import map_chunks
from polykit.utils.validate import as_float_array, as_vector

__all__ = ["polyval", "horner"]


def horner(coefficients: NDArray[np.float64], x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Evaluates a polynomial at ``x`` by nested multiplication.

    Args:
        coefficients: Non-empty 1D coefficients, highest degree first.
        x: Evaluation points of any shape.

    Returns:
        Array with the shape of ``x``.
    """
    y = np.full(x.shape, coefficients[0], dtype=np.float64)
    for c in coefficients[1:]:
        y *= x
        y += c
    return y


def polyval(
    coefficients: Any,
    points: Any,
    *,
    n_workers: int | None = None,
) -> NDArray[np.float64]:
    """Evaluates a polynomial at every point of ``points``.

    The polynomial of degree ``len(coefficients) - 1`` is given by its
    coefficients in decreasing powers, the order returned by
    :func:`polykit.polynomial.fit.polyfit`. NaN and infinite values
    propagate according to ordinary floating point arithmetic.

    Args:
        coefficients: Non-empty vector of coefficients, highest degree first.
            Row and column shaped arrays are flattened.
        points: Iterable of evaluation points. May be empty, 1D, or a 2D
            array.
        n_workers: Number of threads sharing the points. ``None`` uses the
            default from :mod:`polykit.utils.concurrency`.

    Returns:
        ``float64`` array with the same shape as ``points``.

    Raises:
        ValueError: If ``coefficients`` is empty or not vector-shaped, or if
            either input is not an iterable of numbers.

    Example:
        >>> from polykit import polyval
        >>> polyval([1.0, 0.0, -1.0], [0.0, 1.0, 2.0])
        array([-1.,  0.,  3.])
    """
    coeffs = as_vector(coefficients, name="coefficients")
    if coeffs.size == 0:
        raise ValueError("coefficients must not be empty.")
    x = as_float_array(points, name="points")

    return map_chunks(lambda chunk: horner(coeffs, chunk), x, n_workers=n_workers)
