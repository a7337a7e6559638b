"""Pytest configuration file with a fixture forcing serial execution by default."""

import inspect

import pytest

import polykit.utils.concurrency as conc


@pytest.fixture(autouse=True)
def _serial_by_default(request, monkeypatch):
    """Force n_workers=1 in PolyKit internals unless test is marked @pytest.mark.parallel."""
    if request.node.get_closest_marker("parallel"):
        return  # allow the test to exercise true parallel behavior

    orig = conc.parallel_execute
    allowed = set(inspect.signature(orig).parameters.keys())

    def _wrapped(*args, **kwargs):
        kwargs["n_workers"] = 1
        kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        return orig(*args, **kwargs)

    monkeypatch.setattr(conc, "parallel_execute", _wrapped, raising=True)
