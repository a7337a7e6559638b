"""Concurrency management for per-point evaluations.

Polynomial evaluation and interpolation are independent for every query
point, so large query arrays can be split into contiguous chunks and
processed by a thread pool. NumPy releases the GIL inside its vectorised
kernels, which is what makes threads worthwhile here.
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "set_default_workers",
    "use_workers",
    "resolve_workers",
    "normalize_workers",
    "parallel_execute",
    "map_chunks",
]


_workers_var: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "polykit_workers", default=None
)
_DEFAULT_WORKERS: int = 1


def set_default_workers(n: int | None) -> None:
    """Sets the module-wide default number of workers.

    Args:
        n: Number of workers, or None to restore serial execution.

    Returns:
        None
    """
    global _DEFAULT_WORKERS
    _DEFAULT_WORKERS = 1 if n is None else normalize_workers(n)


@contextmanager
def use_workers(n: int | None) -> Iterator[int | None]:
    """Temporarily sets the number of workers for calls that do not pass one.

    Args:
        n: Number of workers, or ``None`` to fall back to the module default.

    Yields:
        int | None: The previous worker setting (restored on exit).
    """
    prev = _workers_var.get()
    token = _workers_var.set(None if n is None else normalize_workers(n))
    try:
        yield prev
    finally:
        _workers_var.reset(token)


def normalize_workers(
    n_workers: Any
) -> int:
    """Ensures n_workers is a positive integer, defaulting to 1.

    Args:
        n_workers: Input number of workers (can be None, float, negative, etc.)

    Returns:
        int: A positive integer number of workers (at least 1).

    Raises:
        None: Invalid inputs are coerced to 1.
    """
    try:
        n = int(n_workers)
    except (TypeError, ValueError):
        n = 1
    return 1 if n < 1 else n


def resolve_workers(n_workers: Any) -> int:
    """Resolves an explicit worker count against the context and module defaults.

    Args:
        n_workers: Explicit number of workers, or ``None`` to use the value
            set by :func:`use_workers` or :func:`set_default_workers`.

    Returns:
        Positive number of workers.
    """
    if n_workers is not None:
        return normalize_workers(n_workers)
    w = _workers_var.get()
    if w is not None:
        return w
    return _DEFAULT_WORKERS


def parallel_execute(
    worker: Callable[..., Any],
    arg_tuples: Sequence[Tuple[Any, ...]],
    *,
    n_workers: int = 1,
) -> list[Any]:
    """Runs ``worker(*args)`` for each tuple in arg_tuples, in order.

    With ``n_workers > 1`` the calls run in a thread pool; every task gets
    its own copy of the current context.
    """
    if n_workers > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            futures = []
            for args in arg_tuples:
                ctx = contextvars.copy_context()
                futures.append(ex.submit(ctx.run, worker, *args))
            return [f.result() for f in futures]
    return [worker(*args) for args in arg_tuples]


def map_chunks(
    function: Callable[[NDArray[np.float64]], NDArray[np.float64]],
    points: NDArray[np.float64],
    *,
    n_workers: int | None = None,
) -> NDArray[np.float64]:
    """Applies an elementwise ``function`` to ``points``, chunked across workers.

    Args:
        function: Maps a 1D array to a 1D array of the same length.
        points: Query array of any shape.
        n_workers: Number of workers; see :func:`resolve_workers`.

    Returns:
        ``float64`` array with the shape of ``points``.
    """
    flat = points.reshape(-1)
    workers = min(resolve_workers(n_workers), max(flat.size, 1))
    if workers == 1:
        out = function(flat)
    else:
        chunks = np.array_split(flat, workers)
        parts = parallel_execute(function, [(c,) for c in chunks], n_workers=workers)
        out = np.concatenate(parts)
    return np.asarray(out, dtype=np.float64).reshape(points.shape)
