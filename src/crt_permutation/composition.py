"""Sequential composition of permutations over the same domain."""
from __future__ import annotations

from typing import Iterable, Tuple

from .errors import InvalidInput, SizeMismatch
from .permutation import Permutation
from .utils import check_index

__all__ = ["Composition", "compose"]


class Composition(Permutation):
    """Bijection obtained by applying ``members`` left to right.

    ``Composition([p0, p1, p2]).evaluate(i) == p2.evaluate(p1.evaluate(p0.evaluate(i)))``
    and :meth:`invert` undoes the members in reverse order. Members are
    shared by reference; chaining independent CRT permutations breaks the
    residue streaks of a single one at ``k`` times the evaluation cost.
    """

    __slots__ = ("_members", "_n")

    def __init__(self, permutations: Iterable[Permutation]):
        members: Tuple[Permutation, ...] = tuple(permutations)
        if not members:
            raise InvalidInput("cannot compose an empty sequence of permutations")
        n = members[0].size
        for idx, p in enumerate(members[1:], start=1):
            if p.size != n:
                raise SizeMismatch(
                    f"permutation {idx} acts on {p.size} points, expected {n}"
                )
        self._members = members
        self._n = n

    @property
    def members(self) -> Tuple[Permutation, ...]:
        return self._members

    @property
    def size(self) -> int:
        return self._n

    def evaluate(self, i: int) -> int:
        x = check_index(i, self._n)
        for p in self._members:
            x = p.evaluate(x)
        return x

    def invert(self, i: int) -> int:
        x = check_index(i, self._n)
        for p in reversed(self._members):
            x = p.invert(x)
        return x

    def __repr__(self) -> str:
        return f"Composition(n={self._n}, members={len(self._members)})"


def compose(*permutations: Permutation) -> Composition:
    """Shortcut for ``Composition(permutations)``."""
    return Composition(permutations)
