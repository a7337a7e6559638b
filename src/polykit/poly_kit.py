"""Provides the PolyKit class.

A light wrapper around the fitting, evaluation and interpolation helpers
that keeps one set of samples and exposes them through a simple API.

Typical usage examples:

>>> import numpy as np
>>> from polykit.poly_kit import PolyKit  # noqa: F401
>>>
>>> x = np.linspace(0.0, 1.0, 11)
>>> kit = PolyKit(3.0 * x**2 - 1.0, x=x)
>>> coeffs = kit.fit(2)
>>> smooth = kit.evaluate(np.linspace(0.0, 1.0, 101), degree=2)
>>> linear = kit.interpolate([0.05, 0.15])
"""

from typing import Any

import numpy as np

from .config import PolyConfig
from .interpolation import interp
from .polynomial import assess_fit, polyfit, polyval
from .utils.types import ArrayLike1D, FloatArray
from .utils.validate import as_vector


class PolyKit:
    """Provides polynomial fits and interpolation of one set of samples."""

    def __init__(
        self,
        y: ArrayLike1D,
        x: ArrayLike1D | None = None,
        *,
        config: PolyConfig | None = None,
    ):
        """Initialise with samples.

        Args:
            y: Sample values, shape (n,).
            x: Sample points, shape (n,). Defaults to ``0, 1, ..., n - 1``.
            config: Fit configuration forwarded to ``polyfit``.
        """
        self.y = as_vector(y, name="y")
        if x is None:
            self.x = np.arange(self.y.size, dtype=np.float64)
        else:
            self.x = as_vector(x, name="x")
            if self.x.size != self.y.size:
                raise ValueError("input vectors must be of equal length")
        self.config = config

    def fit(self, degree: int) -> FloatArray:
        """Returns the least-squares coefficients, highest degree first."""
        return polyfit(self.x, self.y, degree, config=self.config)

    def evaluate(self, points: Any, degree: int, *, n_workers: int | None = None) -> FloatArray:
        """Fits a polynomial of ``degree`` and evaluates it at ``points``."""
        return polyval(self.fit(degree), points, n_workers=n_workers)

    def interpolate(
        self,
        points: Any,
        *,
        left: float | None = None,
        right: float | None = None,
        n_workers: int | None = None,
    ) -> FloatArray:
        """Interpolates the samples piecewise-linearly; ``x`` must be ascending."""
        return interp(points, self.x, self.y, left=left, right=right, n_workers=n_workers)

    def diagnostics(self, degree: int) -> dict[str, float | int]:
        """Returns residual statistics of the degree ``degree`` fit."""
        return assess_fit(self.fit(degree), self.x, self.y)
