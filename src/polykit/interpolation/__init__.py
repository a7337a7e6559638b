"""Piecewise-linear interpolation."""

from .one_d import PiecewiseLinearModel, interp, model_from_table, parse_xy_table

__all__ = ["interp", "PiecewiseLinearModel", "model_from_table", "parse_xy_table"]
