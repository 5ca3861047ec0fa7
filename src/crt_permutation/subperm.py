"""Explicit random bijection on the residues of one prime-power factor."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import InvalidInput, OutOfRange

__all__ = ["SubPermutation"]


def _frozen(values: Sequence[int] | np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=np.int64)
    arr.setflags(write=False)
    return arr


class SubPermutation:
    """Bijection on ``{0, ..., q-1}`` stored as a forward/inverse table pair.

    Instances are built through :meth:`random` or :meth:`from_forward`; both
    tables are read-only numpy arrays afterwards.
    """

    __slots__ = ("_forward", "_inverse")

    def __init__(self, forward: np.ndarray, inverse: np.ndarray):
        if forward.shape != inverse.shape or forward.ndim != 1:
            raise InvalidInput("forward and inverse must be 1-D tables of equal length")
        self._forward = forward
        self._inverse = inverse

    @classmethod
    def random(cls, q: int, rng_obj: np.random.Generator) -> "SubPermutation":
        """Draw a uniform permutation of ``{0, ..., q-1}`` (Fisher-Yates).

        Exactly ``q - 1`` values are drawn from ``rng_obj`` when ``q >= 2``.
        The inverse table is maintained alongside every swap.
        """
        q = int(q)
        if q < 1:
            raise InvalidInput(f"sub-permutation size must be >= 1, got {q}")
        fwd = list(range(q))
        inv = list(range(q))
        if q > 1:
            # j_i uniform in [0, i] for i = q-1 .. 1
            draws = rng_obj.integers(0, np.arange(q, 1, -1, dtype=np.int64)).tolist()
            for i, j in zip(range(q - 1, 0, -1), draws):
                a, b = fwd[j], fwd[i]
                fwd[i], fwd[j] = a, b
                inv[a] = i
                inv[b] = j
        return cls(_frozen(fwd), _frozen(inv))

    @classmethod
    def from_forward(cls, values: Sequence[int] | np.ndarray) -> "SubPermutation":
        """Build the pair from an explicit forward table.

        Raises:
            InvalidInput: If ``values`` is not a permutation of ``range(len(values))``.
        """
        fwd = np.asarray(values)
        if fwd.ndim != 1 or fwd.size == 0:
            raise InvalidInput("forward table must be a non-empty 1-D sequence")
        if not np.issubdtype(fwd.dtype, np.integer):
            raise InvalidInput(f"forward table must hold integers, got dtype={fwd.dtype}")
        fwd = fwd.astype(np.int64, copy=True)
        q = fwd.size
        if fwd.min() < 0 or fwd.max() >= q or np.unique(fwd).size != q:
            raise InvalidInput(f"forward table is not a permutation of range({q})")
        inv = np.empty(q, dtype=np.int64)
        inv[fwd] = np.arange(q, dtype=np.int64)
        return cls(_frozen(fwd), _frozen(inv))

    @property
    def size(self) -> int:
        return int(self._forward.shape[0])

    @property
    def forward(self) -> np.ndarray:
        return self._forward

    @property
    def inverse(self) -> np.ndarray:
        return self._inverse

    def __len__(self) -> int:
        return self.size

    def apply(self, r: int) -> int:
        if not 0 <= r < self.size:
            raise OutOfRange(f"residue {r} is out of range for size {self.size}")
        return int(self._forward[r])

    def apply_inverse(self, r: int) -> int:
        if not 0 <= r < self.size:
            raise OutOfRange(f"residue {r} is out of range for size {self.size}")
        return int(self._inverse[r])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubPermutation):
            return NotImplemented
        return np.array_equal(self._forward, other._forward)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SubPermutation(size={self.size})"
