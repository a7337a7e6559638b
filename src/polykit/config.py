"""Configuration for polynomial fitting.

This config controls the limits :func:`polykit.polynomial.fit.polyfit`
enforces on its inputs and the tolerance the matrix inverter uses to
decide that a pivot is zero.
"""

from __future__ import annotations

__all__ = ["PIVOT_RTOL", "MAX_DEGREE", "PolyConfig", "DEFAULT_CONFIG"]

PIVOT_RTOL = 1e-12
MAX_DEGREE = 255


class PolyConfig:
    """Configuration for polynomial fitting."""

    def __init__(
        self,
        max_degree: int = MAX_DEGREE,
        pivot_rtol: float = PIVOT_RTOL,
    ):
        """Initialize configuration.

        Args:
            max_degree:
                Largest polynomial degree accepted by ``polyfit``. Requests
                above it are rejected with ``ValueError`` instead of building
                a design matrix whose powers overflow. The default mirrors
                the 8-bit degree counter of small embedded targets; larger
                values are allowed.

            pivot_rtol:
                Relative threshold for zero pivots during Gauss-Jordan
                elimination. The pivot of row ``m`` counts as zero when
                ``abs(pivot) <= pivot_rtol * abs(a[m, m])``, where
                ``a[m, m]`` is the diagonal entry before elimination. The
                inversion then reports failure and the fit raises
                :class:`polykit.utils.linalg.SingularMatrixError`.

                The test is independent of the magnitude of the samples.
                Repeated sample points whose values are not exact binary
                fractions (``2.7``, ``0.1``) leave a rounding residue of a
                few ``n_samples * eps`` relative to the diagonal instead of
                an exact zero; the default sits well above that residue and
                well below the pivots of well-conditioned fits.

        Raises:
            ValueError: If ``max_degree`` is negative or ``pivot_rtol`` is
                negative or not finite.
        """
        if int(max_degree) < 0:
            raise ValueError("max_degree must be >= 0.")
        pivot_rtol = float(pivot_rtol)
        if not (pivot_rtol >= 0.0 and pivot_rtol != float("inf")):
            raise ValueError("pivot_rtol must be finite and >= 0.")

        self.max_degree = int(max_degree)
        self.pivot_rtol = pivot_rtol

    def __repr__(self) -> str:
        return f"PolyConfig(max_degree={self.max_degree}, pivot_rtol={self.pivot_rtol!r})"


DEFAULT_CONFIG = PolyConfig()
