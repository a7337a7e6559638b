"""Polynomial evaluation and least-squares fitting."""

from .diagnostics import assess_fit
from .evaluate import polyval
from .fit import polyfit

__all__ = ["polyval", "polyfit", "assess_fit"]
