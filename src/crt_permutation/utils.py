"""Shared helpers: random source and index validation."""
from __future__ import annotations

import numbers

import numpy as np

from .errors import InvalidInput, OutOfRange

__all__ = [
    "rng",
    "check_index",
]


def rng(seed: int | np.random.Generator | None) -> np.random.Generator:
    """Return a PCG64 generator initialised from *seed* or fresh OS entropy.

    An existing :class:`numpy.random.Generator` is passed through unchanged so
    that several constructions can share (and advance) one stream.

    Raises:
        InvalidInput: If *seed* is not ``None``, a Generator or a non-negative int.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        return np.random.default_rng()
    if isinstance(seed, (bool, np.bool_)) or not isinstance(seed, numbers.Integral):
        raise InvalidInput(f"seed must be a non-negative int or a Generator, got {type(seed).__name__}")
    if seed < 0:
        raise InvalidInput(f"seed must be non-negative, got {seed}")
    return np.random.Generator(np.random.PCG64(int(seed)))


def check_index(i: int, n: int) -> int:
    """Return ``i`` as a Python int, raising :class:`OutOfRange` unless ``0 <= i < n``."""
    if isinstance(i, (bool, np.bool_)) or not isinstance(i, numbers.Integral):
        raise OutOfRange(f"index must be an integer, got {type(i).__name__}")
    idx = int(i)
    if not 0 <= idx < n:
        raise OutOfRange(f"index {idx} is out of range for a permutation of {n} points")
    return idx
