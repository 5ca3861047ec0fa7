"""CRT-based random permutations with O(k) evaluation and inversion."""
from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Sequence, Tuple

import numpy as np

from .config import PermutationConfig
from .crt import CrtCoefficients
from .errors import InvalidInput
from .factor import PrimePowerFactor, factor
from .subperm import SubPermutation
from .utils import check_index, rng

__all__ = [
    "Permutation",
    "PermutationSequence",
    "PermutationIterator",
    "RandomPermutation",
    "InversePermutation",
]

log = logging.getLogger(__name__)


def _checked_len(n: int) -> int:
    # len() is bounded by sys.maxsize; domains past it are only reachable via .size
    if n > sys.maxsize:
        raise OverflowError(
            f"{n} points do not fit in len(); use the .size attribute instead"
        )
    return n


class Permutation(ABC):
    """Common surface of every bijection on ``{0, ..., n-1}``.

    Subclasses implement :attr:`size`, :meth:`evaluate` and :meth:`invert`;
    iteration, inversion views and composition come for free.
    """

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of points ``n``."""

    @abstractmethod
    def evaluate(self, i: int) -> int:
        """Return ``sigma(i)``; raises :class:`OutOfRange` unless ``0 <= i < n``."""

    @abstractmethod
    def invert(self, i: int) -> int:
        """Return ``sigma^{-1}(i)``; raises :class:`OutOfRange` unless ``0 <= i < n``."""

    def __len__(self) -> int:
        return _checked_len(self.size)

    def __call__(self, i: int) -> int:
        return self.evaluate(i)

    def __getitem__(self, i):
        return self.iter()[i]

    def __iter__(self) -> "PermutationIterator":
        return iter(self.iter())

    def iter(self) -> "PermutationSequence":
        """Lazy sequence ``sigma(0), ..., sigma(n-1)``."""
        return PermutationSequence(self.evaluate, self.size)

    def inverse_iter(self) -> "PermutationSequence":
        """Lazy sequence ``sigma^{-1}(0), ..., sigma^{-1}(n-1)``."""
        return PermutationSequence(self.invert, self.size)

    def inverse(self) -> "Permutation":
        """``sigma^{-1}`` as a view: indexable and iterable like :meth:`inverse_iter`,
        and itself a :class:`Permutation` that can be composed or inverted back."""
        return InversePermutation(self)

    def then(self, *others: "Permutation") -> "Permutation":
        """Composition applying ``self`` first, then each of ``others`` in order."""
        from .composition import Composition

        return Composition((self, *others))


class PermutationSequence(Sequence[int]):
    """Finite, restartable view over the images of a permutation.

    Holds only the evaluation function and the length: nothing is
    precomputed and every ``iter()`` call starts an independent cursor.
    """

    __slots__ = ("_fn", "_n")

    def __init__(self, fn: Callable[[int], int], n: int):
        self._fn = fn
        self._n = int(n)

    @property
    def size(self) -> int:
        return self._n

    def __len__(self) -> int:
        return _checked_len(self._n)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self._fn(j) for j in range(self._n)[i]]
        return self._fn(check_index(i, self._n))

    def __iter__(self) -> "PermutationIterator":
        return PermutationIterator(self._fn, self._n)

    def __reversed__(self) -> Iterator[int]:
        for j in range(self._n - 1, -1, -1):
            yield self._fn(j)

    def take(self, k: int) -> List[int]:
        """First ``min(k, n)`` images."""
        return [self._fn(j) for j in range(min(int(k), self._n))]

    def __repr__(self) -> str:
        return f"PermutationSequence(n={self._n})"


class PermutationIterator(Iterator[int]):
    """Cursor over a :class:`PermutationSequence`; owns its position."""

    __slots__ = ("_fn", "_n", "_pos")

    def __init__(self, fn: Callable[[int], int], n: int, start: int = 0):
        self._fn = fn
        self._n = int(n)
        self._pos = int(start)

    @property
    def position(self) -> int:
        return self._pos

    def __iter__(self) -> "PermutationIterator":
        return self

    def __next__(self) -> int:
        if self._pos >= self._n:
            raise StopIteration
        value = self._fn(self._pos)
        self._pos += 1
        return value

    @property
    def remaining(self) -> int:
        return max(self._n - self._pos, 0)

    def skip(self, k: int) -> "PermutationIterator":
        """Advance the cursor by ``k`` positions without evaluating them."""
        if k < 0:
            raise InvalidInput("cannot skip a negative number of positions")
        self._pos = min(self._pos + int(k), self._n)
        return self


class RandomPermutation(Permutation):
    """Random bijection on ``{0, ..., n-1}`` built from per-factor shuffles.

    ``n`` is split into pairwise coprime prime powers ``q_1 ... q_k``; each
    factor gets its own uniformly random :class:`SubPermutation`, and the
    CRT isomorphism glues them together:

        sigma(i) = CRT(f_1[i mod q_1], ..., f_k[i mod q_k])

    Memory is ``O(sum q_j)`` instead of ``O(n)``; evaluation and inversion are
    ``O(k)``. Only ``prod(q_j!)`` of the ``n!`` permutations are reachable.
    """

    __slots__ = ("_n", "_subs", "_crt")

    def __init__(self, subs: Sequence[SubPermutation], coefficients: CrtCoefficients):
        sizes = tuple(s.size for s in subs)
        if sizes != coefficients.moduli:
            raise InvalidInput(
                f"sub-permutation sizes {sizes} do not match CRT moduli {coefficients.moduli}"
            )
        self._n = coefficients.n
        self._subs: Tuple[SubPermutation, ...] = tuple(subs)
        self._crt = coefficients

    @classmethod
    def new(
        cls,
        n: int,
        rng_obj: int | np.random.Generator | None = None,
        config: PermutationConfig | None = None,
    ) -> "RandomPermutation":
        """Factor ``n`` and draw one sub-permutation per prime power.

        Args:
            n: Number of points, ``n >= 1``.
            rng_obj: Seed or :class:`numpy.random.Generator` used for the
                shuffles; ``None`` draws fresh OS entropy.
            config: Construction limits; defaults to :class:`PermutationConfig`.

        Raises:
            InvalidInput: If ``n`` cannot be factored within the trial-division
                bound, or one of its prime powers exceeds ``max_factor_size``.
        """
        cfg = config or PermutationConfig()
        factors: List[PrimePowerFactor] = factor(n, max_prime=cfg.max_prime)
        for f in factors:
            if f.value > cfg.max_factor_size:
                raise InvalidInput(
                    f"prime power {f.prime}^{f.exponent}={f.value} exceeds "
                    f"max_factor_size={cfg.max_factor_size}"
                )
        g = rng(rng_obj)
        subs = [SubPermutation.random(f.value, g) for f in factors]
        coeffs = CrtCoefficients.from_moduli([s.size for s in subs])
        log.debug("RandomPermutation(n=%d): factor sizes %s", int(n), coeffs.moduli)
        return cls(subs, coeffs)

    @classmethod
    def from_sub_permutations(cls, subs: Sequence[SubPermutation]) -> "RandomPermutation":
        """Assemble a permutation from explicit, pairwise coprime sub-permutations."""
        coeffs = CrtCoefficients.from_moduli([s.size for s in subs])
        return cls(subs, coeffs)

    @property
    def size(self) -> int:
        return self._n

    @property
    def factors(self) -> Tuple[SubPermutation, ...]:
        return self._subs

    @property
    def coefficients(self) -> CrtCoefficients:
        return self._crt

    def evaluate(self, i: int) -> int:
        idx = check_index(i, self._n)
        residues = self._crt.decompose(idx)
        return self._crt.reconstruct(
            [int(s.forward[r]) for s, r in zip(self._subs, residues)]
        )

    def invert(self, i: int) -> int:
        idx = check_index(i, self._n)
        residues = self._crt.decompose(idx)
        return self._crt.reconstruct(
            [int(s.inverse[r]) for s, r in zip(self._subs, residues)]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RandomPermutation):
            return NotImplemented
        return self._n == other._n and self._subs == other._subs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RandomPermutation(n={self._n}, factor_sizes={self._crt.moduli})"


class InversePermutation(Permutation):
    """View of ``sigma^{-1}`` sharing the tables of ``sigma``."""

    __slots__ = ("_base",)

    def __init__(self, base: Permutation):
        self._base = base

    @property
    def base(self) -> Permutation:
        return self._base

    @property
    def size(self) -> int:
        return self._base.size

    def evaluate(self, i: int) -> int:
        return self._base.invert(i)

    def invert(self, i: int) -> int:
        return self._base.evaluate(i)

    def inverse(self) -> Permutation:
        return self._base

    def __repr__(self) -> str:
        return f"InversePermutation({self._base!r})"
