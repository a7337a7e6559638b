"""Utility functions for PolyKit package."""

from .linalg import (
    SingularMatrixError,
    invert_matrix,
    inverted,
)

__all__ = [
    "SingularMatrixError",
    "invert_matrix",
    "inverted",
]
