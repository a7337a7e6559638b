"""Tests for polykit.utils.concurrency."""

import threading

import numpy as np
import pytest
from numpy.testing import assert_allclose

from polykit.utils import concurrency as conc


@pytest.mark.parametrize(
    "value, expected",
    [(None, 1), (0, 1), (-3, 1), ("x", 1), (2.9, 2), (4, 4)],
)
def test_normalize_workers_coerces_invalid_to_one(value, expected):
    """Tests that worker counts are coerced to positive integers."""
    assert conc.normalize_workers(value) == expected


def test_resolve_workers_prefers_explicit_then_context_then_default():
    """Tests the precedence of worker settings."""
    assert conc.resolve_workers(3) == 3
    assert conc.resolve_workers(None) == 1
    with conc.use_workers(5) as prev:
        assert prev is None
        assert conc.resolve_workers(None) == 5
        assert conc.resolve_workers(2) == 2
    assert conc.resolve_workers(None) == 1


def test_set_default_workers_roundtrip():
    """Tests that the module default can be changed and restored."""
    try:
        conc.set_default_workers(3)
        assert conc.resolve_workers(None) == 3
    finally:
        conc.set_default_workers(None)
    assert conc.resolve_workers(None) == 1


@pytest.mark.parallel
def test_parallel_execute_preserves_order_and_uses_threads():
    """Tests that threaded execution returns results in submission order."""
    seen = set()

    def worker(i):
        seen.add(threading.get_ident())
        return i * i

    out = conc.parallel_execute(worker, [(i,) for i in range(20)], n_workers=4)
    assert out == [i * i for i in range(20)]
    assert seen
    assert threading.get_ident() not in seen


@pytest.mark.parallel
def test_map_chunks_keeps_shape_and_values():
    """Tests that chunked mapping equals direct application."""
    x = np.linspace(0.0, 1.0, 30).reshape(5, 6)
    out = conc.map_chunks(np.sqrt, x, n_workers=4)
    assert out.shape == (5, 6)
    assert_allclose(out, np.sqrt(x))


def test_map_chunks_handles_empty_input():
    """Tests that an empty query array maps to an empty result."""
    out = conc.map_chunks(np.sqrt, np.empty((0,)), n_workers=8)
    assert out.shape == (0,)


def test_serial_fixture_forces_single_worker():
    """Tests that unmarked tests run parallel_execute serially."""
    idents = set()

    def worker(i):
        idents.add(threading.get_ident())
        return i

    conc.parallel_execute(worker, [(i,) for i in range(8)], n_workers=4)
    assert idents == {threading.get_ident()}
