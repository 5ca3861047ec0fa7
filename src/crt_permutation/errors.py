"""Error kinds raised by the permutation primitives."""
from __future__ import annotations

__all__ = [
    "CrtPermutationError",
    "InvalidInput",
    "OutOfRange",
    "SizeMismatch",
]


class CrtPermutationError(Exception):
    """Base class for every error raised by :mod:`crt_permutation`."""


class InvalidInput(CrtPermutationError, ValueError):
    """Unsupported domain size, malformed table or non-invertible modulus."""


class OutOfRange(CrtPermutationError, IndexError):
    """Index outside ``[0, n)`` passed to an evaluation."""


class SizeMismatch(CrtPermutationError, ValueError):
    """Permutations over different domains combined together."""
