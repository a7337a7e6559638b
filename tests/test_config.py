"""Tests for polykit.config."""

import pytest

from polykit.config import DEFAULT_CONFIG, MAX_DEGREE, PIVOT_RTOL, PolyConfig


def test_default_config_values():
    """Tests the documented defaults."""
    assert DEFAULT_CONFIG.max_degree == MAX_DEGREE == 255
    assert DEFAULT_CONFIG.pivot_rtol == PIVOT_RTOL


def test_config_accepts_larger_degree_bound():
    """Tests that the degree bound may be relaxed."""
    cfg = PolyConfig(max_degree=1000, pivot_rtol=0.0)
    assert cfg.max_degree == 1000
    assert cfg.pivot_rtol == 0.0
    assert "max_degree=1000" in repr(cfg)


@pytest.mark.parametrize(
    "kwargs",
    [{"max_degree": -1}, {"pivot_rtol": -1.0}, {"pivot_rtol": float("nan")}, {"pivot_rtol": float("inf")}],
)
def test_config_rejects_invalid_values(kwargs):
    """Tests that negative or non-finite settings are rejected."""
    with pytest.raises(ValueError):
        PolyConfig(**kwargs)
