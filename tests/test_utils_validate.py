"""Tests for polykit.utils.validate."""

import numpy as np
import pytest

from polykit.utils.validate import (
    as_float_array,
    as_float_query,
    as_vector,
    is_nditerable,
    validate_degree,
    validate_tabulated_xy,
)


@pytest.mark.parametrize(
    "obj",
    [[1.0, 2.0], (1, 2), range(3), np.arange(3.0), np.ones((2, 2)), []],
)
def test_is_nditerable_accepts_sized_iterables(obj):
    """Tests that arrays, lists, tuples and ranges qualify."""
    assert is_nditerable(obj)


@pytest.mark.parametrize(
    "obj",
    [1.0, np.float64(2.0), np.array(3.0), "123", b"12", {1: 2}, {1, 2}, (v for v in [1, 2]), None],
)
def test_is_nditerable_rejects_scalars_strings_and_unsized(obj):
    """Tests that scalars, strings, mappings, sets and generators are rejected."""
    assert not is_nditerable(obj)


def test_as_float_array_converts_to_float64():
    """Tests that integer input is widened to float64."""
    out = as_float_array(range(3))
    assert out.dtype == np.float64
    assert out.tolist() == [0.0, 1.0, 2.0]


def test_as_float_array_rejects_non_numeric():
    """Tests that non-numeric content is reported by name."""
    with pytest.raises(ValueError, match="xp must contain real numbers"):
        as_float_array(["a", "b"], name="xp")


def test_as_float_query_keeps_scalars_zero_dimensional():
    """Tests that real scalars and 0-d arrays become 0-d float64 arrays."""
    for obj in (3, 2.5, np.int16(4), np.float32(1.5), np.array(7)):
        out = as_float_query(obj)
        assert out.shape == ()
        assert out.dtype == np.float64
    assert as_float_query([1, 2]).shape == (2,)


def test_as_float_query_rejects_non_numeric():
    """Tests that booleans, strings and object scalars are rejected."""
    with pytest.raises(ValueError):
        as_float_query(True)
    with pytest.raises(ValueError):
        as_float_query("1.0")
    with pytest.raises(ValueError, match="real numbers"):
        as_float_query(np.array("a"), name="x")


@pytest.mark.parametrize("shape", [(4,), (1, 4), (4, 1)])
def test_as_vector_accepts_vector_shapes(shape):
    """Tests that row, column and flat vectors become 1D."""
    out = as_vector(np.arange(4.0).reshape(shape))
    assert out.shape == (4,)


@pytest.mark.parametrize("shape", [(2, 2), (1, 2, 2)])
def test_as_vector_rejects_matrices(shape):
    """Tests that matrix-shaped input is rejected."""
    with pytest.raises(ValueError, match="one-dimensional"):
        as_vector(np.zeros(shape))


def test_validate_degree():
    """Tests that degrees are checked for type, sign and bound."""
    assert validate_degree(np.uint8(3), 255) == 3
    with pytest.raises(TypeError):
        validate_degree(2.0, 255)
    with pytest.raises(TypeError):
        validate_degree(False, 255)
    with pytest.raises(ValueError):
        validate_degree(-1, 255)
    with pytest.raises(ValueError):
        validate_degree(11, 10)


def test_validate_tabulated_xy_requirements():
    """Tests strictly increasing x, matching lengths and at least two points."""
    x, y = validate_tabulated_xy([0.0, 1.0], [[1.0, 2.0], [3.0, 4.0]])
    assert x.shape == (2,)
    assert y.shape == (2, 2)
    with pytest.raises(ValueError, match="strictly increasing"):
        validate_tabulated_xy([0.0, 0.0, 1.0], [1.0, 2.0, 3.0])
    with pytest.raises(ValueError, match="same length"):
        validate_tabulated_xy([0.0, 1.0], [1.0])
    with pytest.raises(ValueError, match="at least two"):
        validate_tabulated_xy([0.0], [1.0])
    with pytest.raises(ValueError, match="1D"):
        validate_tabulated_xy(np.zeros((2, 2)), [1.0, 2.0])
