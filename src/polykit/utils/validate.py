"""Validation utilities for PolyKit.

The numerical routines accept NumPy arrays and plain Python sequences alike.
Instead of branching on container types they ask a single question, whether
the input is a sized iterable of numbers, and convert it to ``float64``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set, Sized
from numbers import Integral, Real
from typing import Any

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "is_nditerable",
    "as_float_array",
    "as_float_query",
    "as_vector",
    "validate_degree",
    "validate_tabulated_xy",
]


def is_nditerable(obj: Any) -> bool:
    """Checks whether ``obj`` can be consumed as a sequence of numbers.

    NumPy arrays of dimension at least one qualify, as does any sized
    iterable (``list``, ``tuple``, ``range``, ...) except strings, bytes,
    mappings and sets, whose iteration order or element type make no sense
    as numeric data.

    Args:
        obj: Object to check.

    Returns:
        True if ``obj`` can be converted into a numeric array.
    """
    if isinstance(obj, np.ndarray):
        return obj.ndim >= 1
    if isinstance(obj, (str, bytes, bytearray, Mapping, Set)):
        return False
    return isinstance(obj, Iterable) and isinstance(obj, Sized)


def as_float_array(obj: Any, *, name: str = "input") -> NDArray[np.float64]:
    """Converts a sized iterable into a ``float64`` array.

    Args:
        obj: Sized iterable of real numbers.
        name: Name used in error messages.

    Returns:
        A ``float64`` array with the shape of ``obj``.

    Raises:
        ValueError: If ``obj`` is not iterable or holds non-numeric values.
    """
    if not is_nditerable(obj):
        raise ValueError(f"{name} must be an iterable; got {type(obj).__name__}.")
    try:
        return np.asarray(obj, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must contain real numbers.") from e


def as_float_query(obj: Any, *, name: str = "input") -> NDArray[np.float64]:
    """Converts query points, a real scalar or a sized iterable, into ``float64``.

    Scalars (Python or NumPy reals and 0-d arrays) keep their 0-d shape.

    Args:
        obj: Real number or sized iterable of real numbers.
        name: Name used in error messages.

    Returns:
        A ``float64`` array with the shape of ``obj``.

    Raises:
        ValueError: If ``obj`` is neither a real number nor a numeric iterable.
    """
    if isinstance(obj, Real) and not isinstance(obj, bool):
        return np.asarray(obj, dtype=np.float64)
    if isinstance(obj, np.ndarray) and obj.ndim == 0:
        try:
            return obj.astype(np.float64)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must contain real numbers.") from e
    return as_float_array(obj, name=name)


def as_vector(obj: Any, *, name: str = "input") -> NDArray[np.float64]:
    """Converts a vector-shaped input into a 1D ``float64`` array.

    Shapes ``(n,)``, ``(1, n)`` and ``(n, 1)`` are accepted. Anything with
    more than two dimensions, or two dimensions both larger than one, is a
    matrix and is rejected.

    Args:
        obj: Sized iterable of real numbers.
        name: Name used in error messages.

    Returns:
        1D ``float64`` array.

    Raises:
        ValueError: If ``obj`` is not iterable or not vector-shaped.
    """
    arr = as_float_array(obj, name=name)
    if arr.ndim > 2 or (arr.ndim == 2 and min(arr.shape) > 1):
        raise ValueError(f"{name} must be one-dimensional; got shape {arr.shape}.")
    return arr.reshape(-1)


def validate_degree(degree: Any, max_degree: int) -> int:
    """Validates a polynomial degree.

    Args:
        degree: Requested degree.
        max_degree: Largest accepted degree.

    Returns:
        The degree as a plain ``int``.

    Raises:
        TypeError: If ``degree`` is not an integer.
        ValueError: If ``degree`` is negative or larger than ``max_degree``.
    """
    if isinstance(degree, bool) or not isinstance(degree, Integral):
        raise TypeError(f"degree must be an integer; got {type(degree).__name__}.")
    degree = int(degree)
    if degree < 0:
        raise ValueError("degree must be >= 0.")
    if degree > max_degree:
        raise ValueError(f"degree must be <= {max_degree}; got {degree}.")
    return degree


def validate_tabulated_xy(
    x: Any,
    y: Any,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Validates and converts tabulated ``x`` and ``y`` arrays into NumPy arrays.

    Requirements:
      - ``x`` is 1D, strictly increasing and has at least two entries.
      - ``y`` has at least 1 dimension.
      - ``y.shape[0] == x.shape[0]``, but ``y`` may have arbitrary trailing
        dimensions (scalar, vector, or ND output).

    Args:
        x: 1D array-like of x values (must be strictly increasing).
        y: Array-like of y values with ``y.shape[0] == len(x)``.

    Returns:
        Tuple of (x_array, y_array) as NumPy arrays.

    Raises:
        ValueError: If input arrays do not meet the required conditions.
    """
    x_arr = as_float_array(x, name="x")
    y_arr = as_float_array(y, name="y")

    if x_arr.ndim != 1:
        raise ValueError("x must be 1D.")
    if x_arr.shape[0] < 2:
        raise ValueError("x must contain at least two points.")
    if x_arr.shape[0] != y_arr.shape[0]:
        raise ValueError("x and y must have the same length along axis 0.")
    if not np.all(np.diff(x_arr) > 0):
        raise ValueError("x must be strictly increasing.")

    return x_arr, y_arr
