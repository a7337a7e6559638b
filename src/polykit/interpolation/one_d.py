"""Piecewise-linear interpolation of 1D tabulated data.

Provides :func:`interp`, which maps query points onto a sampled function
``fp(xp)`` by binary search and linear interpolation, clamping queries
outside ``[xp[0], xp[-1]]`` to configurable boundary values.

On top of it, :class:`PiecewiseLinearModel` wraps tabulated ``y(x)`` data
with scalar, vector or tensor valued outputs. Two entry points are:

* Direct construction with ``(x, y)`` arrays of shape ``(N,)`` and ``(N, ...)``.
* :func:`model_from_table` for simple 2D tables containing x and one
  or more y components in columns.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from polykit.utils.concurrency import map_chunks
from polykit.utils.validate import as_float_array, as_float_query, as_vector, validate_tabulated_xy

__all__ = ["interp", "PiecewiseLinearModel", "model_from_table", "parse_xy_table"]


def _interp_sorted(
    x: NDArray[np.float64],
    xp: NDArray[np.float64],
    fp: NDArray[np.float64],
    left: float,
    right: float,
) -> NDArray[np.float64]:
    """Interpolates 1D queries ``x`` on ascending knots ``xp``."""
    n = xp.size
    # smallest hi with x <= xp[hi], so that xp[hi - 1] < x <= xp[hi]
    hi = np.clip(np.searchsorted(xp, x, side="left"), 1, n - 1)
    lo = hi - 1

    with np.errstate(divide="ignore", invalid="ignore"):
        y = fp[lo] + (x - xp[lo]) * (fp[hi] - fp[lo]) / (xp[hi] - xp[lo])

    # the upper clamp is applied first so that the lower one wins when both match
    y = np.where(x >= xp[-1], right, y)
    y = np.where(x <= xp[0], left, y)
    return y


def interp(
    x: Any,
    xp: Any,
    fp: Any,
    *,
    left: float | None = None,
    right: float | None = None,
    n_workers: int | None = None,
) -> NDArray[np.float64]:
    """Interpolates a piecewise-linear function at the query points ``x``.

    For each query value ``v``:

    * ``v <= xp[0]`` gives ``left`` (``fp[0]`` if not given),
    * ``v >= xp[-1]`` gives ``right`` (``fp[-1]`` if not given),
    * otherwise a binary search finds the bracketing knots
      ``xp[lo] < v <= xp[hi]`` with ``hi - lo == 1`` and the result is
      ``fp[lo] + (v - xp[lo]) * (fp[hi] - fp[lo]) / (xp[hi] - xp[lo])``.

    ``xp`` must be sorted in ascending order. This is not checked. Repeated
    knots are not guarded against either: a zero-width bracket yields
    ``inf`` or ``nan`` as floating point arithmetic dictates. A NaN query
    yields NaN.

    Args:
        x: Query points: a real number or an iterable of any shape.
        xp: Ascending knot positions; a vector of at least two values.
        fp: Function values at the knots, same length as ``xp``.
        left: Value returned below the knot range.
        right: Value returned above the knot range.
        n_workers: Number of threads sharing the query points. ``None`` uses
            the default from :mod:`polykit.utils.concurrency`.

    Returns:
        ``float64`` array with the same shape as ``x``; a 0-d array for a
        scalar query.

    Raises:
        ValueError: If ``xp`` and ``fp`` are not vectors of equal length with
            at least two entries, or if an input is not numeric.

    Example:
        >>> from polykit import interp
        >>> interp([-1.0, 5.0, 12.0], [0.0, 10.0], [0.0, 100.0], right=-1.0)
        array([ 0., 50., -1.])
    """
    x_arr = as_float_query(x, name="x")
    try:
        xp_arr = as_vector(xp, name="xp")
        fp_arr = as_vector(fp, name="fp")
    except ValueError as e:
        raise ValueError("interp is defined for 1D arrays of equal length") from e
    if xp_arr.size < 2 or fp_arr.size < 2 or xp_arr.size != fp_arr.size:
        raise ValueError("interp is defined for 1D arrays of equal length")

    left_value = fp_arr[0] if left is None else float(left)
    right_value = fp_arr[-1] if right is None else float(right)

    return map_chunks(
        lambda chunk: _interp_sorted(chunk, xp_arr, fp_arr, left_value, right_value),
        x_arr,
        n_workers=n_workers,
    )


class PiecewiseLinearModel:
    """Piecewise-linear interpolator for tabulated data.

    Interpolates a tabulated function ``y(x)`` with :func:`interp`.

    Here ``x`` is a one-dimensional, strictly increasing grid of length
    ``N``, and the first dimension of ``y`` must also have length ``N``.
    All remaining dimensions of ``y`` are treated as the output shape.

    For example:
        * ``x`` has shape ``(N,)`` and ``y`` has shape ``(N,)``        -> scalar output
        * ``x`` has shape ``(N,)`` and ``y`` has shape ``(N, M)``      -> vector output of length ``M``
        * ``x`` has shape ``(N,)`` and ``y`` has shape ``(N, d1, d2)`` -> tensor output with shape ``(d1, d2)``

    Outside the tabulated range the model is clamped: every output
    component takes ``left`` (or its first tabulated value) below ``x[0]``
    and ``right`` (or its last tabulated value) above ``x[-1]``.

    Attributes:
        x: Tabulated x grid, strictly increasing.
        y_flat: Flattened tabulated values with shape ``(N, n_out_flat)``.
        left: Value used below the tabulated range, or ``None``.
        right: Value used above the tabulated range, or ``None``.

    Example:
        >>> import numpy as np
        >>> from polykit.interpolation import PiecewiseLinearModel
        >>>
        >>> x_tab = np.array([0.0, 1.0, 2.0, 3.0])
        >>> y_tab = np.array([[0.0, 0.0],
        ...                   [1.0, 1.0],
        ...                   [4.0, 8.0],
        ...                   [9.0, 27.0]])  # shape (4, 2)
        >>>
        >>> model = PiecewiseLinearModel(x_tab, y_tab, left=-1.0)
        >>> model(np.array([-1.0, 0.5, 2.5, 4.0]))
        array([[-1. , -1. ],
               [ 0.5,  0.5],
               [ 6.5, 17.5],
               [ 9. , 27. ]])
    """
    def __init__(
        self,
        x: ArrayLike,
        y: ArrayLike,
        *,
        left: float | None = None,
        right: float | None = None,
    ) -> None:
        """Initializes a tabulated piecewise-linear model.

        Args:
            x: Strictly increasing tabulated x values with shape ``(N,)``, ``N >= 2``.
            y: Tabulated y values with shape ``(N,)`` (scalar) or ``(N, ...)`` (vector/tensor).
               The first dimension must match ``x``.
            left: Value for queries below ``x[0]``. Defaults to the first row of ``y``.
            right: Value for queries above ``x[-1]``. Defaults to the last row of ``y``.
        """
        x_arr, y_arr = validate_tabulated_xy(x, y)

        self.x = x_arr

        if y_arr.ndim == 1:
            self._out_shape: tuple[int, ...] = ()
            y_flat = y_arr[:, np.newaxis]
        else:
            self._out_shape = tuple(y_arr.shape[1:])
            y_flat = y_arr.reshape(y_arr.shape[0], -1)

        self.y_flat = np.asarray(y_flat, dtype=np.float64)
        self.left = left
        self.right = right

    def __call__(self, x_new: ArrayLike, *, n_workers: int | None = None) -> NDArray[np.float64]:
        """Evaluates the interpolated function at the given x values.

        Args:
            x_new: Points where the function should be interpolated.
            n_workers: Forwarded to :func:`interp`.

        Returns:
            Interpolated values with shape ``x_new.shape + out_shape``.
        """
        x_new_arr = as_float_array(x_new, name="x_new")
        flat_x = x_new_arr.ravel()
        n_out_flat = self.y_flat.shape[1]

        flat_y = np.empty((flat_x.size, n_out_flat), dtype=np.float64)
        for k in range(n_out_flat):
            flat_y[:, k] = interp(
                flat_x,
                self.x,
                self.y_flat[:, k],
                left=self.left,
                right=self.right,
                n_workers=n_workers,
            )

        return flat_y.reshape(x_new_arr.shape + self._out_shape)


def model_from_table(
    table: ArrayLike,
    *,
    left: float | None = None,
    right: float | None = None,
) -> PiecewiseLinearModel:
    """Creates a PiecewiseLinearModel from a simple 2D ``(x, y)`` table.

    Supported layouts:
        * ``(N, 2)``: column 0 = x, column 1 = scalar y.
        * ``(N, M+1)``: column 0 = x, columns 1..M = components of y.
        * ``(2, N)``: row 0 = x, row 1 = scalar y.

    Args:
        table: 2D array containing x and y columns.
        left: Value for queries below the tabulated range.
        right: Value for queries above the tabulated range.

    Returns:
        A :class:`PiecewiseLinearModel` constructed from the parsed table.
    """
    x, y = parse_xy_table(table)
    return PiecewiseLinearModel(x, y, left=left, right=right)


def parse_xy_table(
    table: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Parses a 2D table into ``(x, y)`` arrays.

    The ``(2, N)`` layout is tried first, so a ``(2, 2)`` table is read as
    row 0 = x, row 1 = y.

    Args:
        table: 2D array with one of the layouts listed in :func:`model_from_table`.

    Returns:
        A tuple ``(x, y)`` as NumPy arrays.

    Raises:
        ValueError: If the input does not match any of the supported layouts.
    """
    arr = as_float_array(table, name="table")
    if arr.ndim != 2:
        raise ValueError("table must be a 2D array.")

    match arr.shape:
        case (2, n) if n >= 2:
            x = arr[0, :]
            y = arr[1, :]
        case (n, m) if n >= 2 and m >= 2:
            x = arr[:, 0]
            y = arr[:, 1] if m == 2 else arr[:, 1:]
        case _:
            raise ValueError(
                f"Unexpected table shape {arr.shape}; expected (N, 2), (N, M+1) or (2, N)."
            )

    return x, y
