"""Diagnostics for polynomial fits."""

from __future__ import annotations

from typing import Any

import numpy as np

from polykit.polynomial.evaluate import polyval
from polykit.utils.validate import as_vector

__all__ = ["assess_fit"]


def assess_fit(coefficients: Any, x: Any, y: Any) -> dict[str, float | int]:
    """Summarises the residuals of a polynomial fit.

    Args:
        coefficients: Fitted coefficients, highest degree first.
        x: Sample points used in the fit.
        y: Sample values used in the fit.

    Returns:
        A dict with keys:
            - ``"rms"``: root mean square of the residuals ``p(x) - y``.
            - ``"rrms_rel"``: ``rms`` divided by the RMS spread of ``y``
              around its mean (with a ``1e-15`` floor).
            - ``"max_abs_residual"``: largest absolute residual.
            - ``"n_samples"``: number of samples.

    Raises:
        ValueError: If ``x`` and ``y`` differ in length or are empty.
    """
    x_arr = as_vector(x, name="x")
    y_arr = as_vector(y, name="y")
    if x_arr.size != y_arr.size:
        raise ValueError("x and y must have the same length.")
    if y_arr.size == 0:
        raise ValueError("x and y must not be empty.")

    resid = polyval(coefficients, x_arr) - y_arr
    rms = float(np.sqrt(np.mean(resid * resid)))
    yc = y_arr - np.mean(y_arr)
    scale = float(np.sqrt(np.mean(yc * yc))) + 1e-15

    return {
        "rms": rms,
        "rrms_rel": rms / scale,
        "max_abs_residual": float(np.max(np.abs(resid))),
        "n_samples": int(y_arr.size),
    }
