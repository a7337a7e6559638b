"""Provides all polykit methods."""

from importlib.metadata import PackageNotFoundError, version

from polykit.config import PolyConfig
from polykit.interpolation.one_d import PiecewiseLinearModel, interp
from polykit.poly_kit import PolyKit
from polykit.polynomial.diagnostics import assess_fit
from polykit.polynomial.evaluate import polyval
from polykit.polynomial.fit import polyfit
from polykit.utils.linalg import SingularMatrixError, invert_matrix

try:
    __version__ = version("polykit")
except PackageNotFoundError:
    pass

PolyKit.__module__ = "polykit"

__all__ = [
    "PolyKit",
    "PolyConfig",
    "PiecewiseLinearModel",
    "SingularMatrixError",
    "assess_fit",
    "interp",
    "invert_matrix",
    "polyfit",
    "polyval",
]
