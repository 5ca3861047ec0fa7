"""Chinese Remainder Theorem combiner.

For pairwise coprime moduli ``q_1, ..., q_k`` with product ``n`` the map
``i -> (i mod q_1, ..., i mod q_k)`` is a ring isomorphism between ``Z_n`` and
``Z_{q_1} x ... x Z_{q_k}``. :class:`CrtCoefficients` precomputes, once per
set of moduli, everything needed to go back and forth in ``O(k)``:

* ``M_j = n / q_j``
* ``N_j = M_j^{-1} mod q_j``
* ``W_j = M_j * N_j mod n``, so that ``reconstruct(r) = sum(r_j * W_j) mod n``.

Every product is reduced modulo ``n`` before it is accumulated, which keeps
intermediate values below ``n * max(q_j)`` regardless of ``k``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from .errors import InvalidInput

__all__ = [
    "CrtCoefficients",
    "mod_inverse",
    "chinese_remainder",
]


def mod_inverse(a: int, m: int) -> int:
    """Return ``x`` in ``[0, m)`` with ``a * x = 1 (mod m)``.

    Raises:
        InvalidInput: If ``m < 1`` or ``gcd(a, m) != 1``.
    """
    if m < 1:
        raise InvalidInput(f"modulus must be >= 1, got {m}")
    try:
        return pow(int(a), -1, int(m))
    except ValueError as exc:
        raise InvalidInput(f"{a} has no inverse modulo {m}") from exc


@dataclass(frozen=True)
class CrtCoefficients:
    """Precomputed CRT data for a fixed tuple of pairwise coprime moduli."""

    n: int
    moduli: Tuple[int, ...]
    partials: Tuple[int, ...]
    inverses: Tuple[int, ...]
    weights: Tuple[int, ...]

    @classmethod
    def from_moduli(cls, moduli: Sequence[int]) -> "CrtCoefficients":
        qs = tuple(int(q) for q in moduli)
        for q in qs:
            if q < 2:
                raise InvalidInput(f"moduli must be >= 2, got {q}")
        for a in range(len(qs)):
            for b in range(a + 1, len(qs)):
                if math.gcd(qs[a], qs[b]) != 1:
                    raise InvalidInput(f"moduli {qs[a]} and {qs[b]} are not coprime")
        n = math.prod(qs)
        partials = tuple(n // q for q in qs)
        inverses = tuple(mod_inverse(m % q, q) for m, q in zip(partials, qs))
        weights = tuple((m * inv) % n for m, inv in zip(partials, inverses))
        return cls(n=n, moduli=qs, partials=partials, inverses=inverses, weights=weights)

    @property
    def k(self) -> int:
        return len(self.moduli)

    def decompose(self, i: int) -> Tuple[int, ...]:
        """Residues of ``i`` modulo each factor."""
        return tuple(i % q for q in self.moduli)

    def reconstruct(self, residues: Sequence[int]) -> int:
        """The unique ``i`` in ``[0, n)`` congruent to ``residues[j]`` mod ``moduli[j]``."""
        if len(residues) != len(self.moduli):
            raise InvalidInput(
                f"expected {len(self.moduli)} residues, got {len(residues)}"
            )
        n = self.n
        acc = 0
        for r, w in zip(residues, self.weights):
            acc = (acc + (int(r) * w) % n) % n
        return acc


def chinese_remainder(remainders: Sequence[int], moduli: Sequence[int]) -> int:
    """One-shot CRT: solve ``x = remainders[j] (mod moduli[j])`` for ``x`` in ``[0, prod(moduli))``."""
    if len(remainders) != len(moduli):
        raise InvalidInput("remainders and moduli must have the same length")
    coeffs = CrtCoefficients.from_moduli(moduli)
    return coeffs.reconstruct([int(r) % q for r, q in zip(remainders, coeffs.moduli)])
