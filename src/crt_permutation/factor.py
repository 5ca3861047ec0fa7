"""Trial-division factorisation of a domain size into coprime prime powers."""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .config import DEFAULT_MAX_PRIME
from .errors import InvalidInput

__all__ = [
    "PrimePowerFactor",
    "factor",
    "factor_sizes",
]


@dataclass(frozen=True)
class PrimePowerFactor:
    """One factor ``prime ** exponent`` of a domain size."""

    prime: int
    exponent: int

    @property
    def value(self) -> int:
        return self.prime ** self.exponent


def factor(n: int, max_prime: int = DEFAULT_MAX_PRIME) -> List[PrimePowerFactor]:
    """Split ``n`` into its prime powers, smallest prime first.

    Trial division stops at ``min(sqrt(remaining), max_prime)``. A cofactor
    left over after that is prime, and it is only accepted when it does not
    exceed ``max_prime``.

    Args:
        n: Domain size, ``n >= 1``. ``factor(1)`` is the empty list.
        max_prime: Largest prime factor that is supported.

    Raises:
        InvalidInput: If ``n < 1`` or ``n`` has a prime factor above
            ``max_prime``.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidInput(f"n must be an integer, got {type(n).__name__}")
    n = int(n)
    if n < 1:
        raise InvalidInput(f"n must be >= 1, got {n}")

    factors: List[PrimePowerFactor] = []
    rem = n

    # trailing zero count
    twos = (rem & -rem).bit_length() - 1
    if twos:
        rem >>= twos
        factors.append(PrimePowerFactor(2, twos))

    p = 3
    while p <= max_prime and p * p <= rem:
        if rem % p == 0:
            e = 0
            while rem % p == 0:
                rem //= p
                e += 1
            factors.append(PrimePowerFactor(p, e))
        p += 2

    if rem > 1:
        if rem > max_prime:
            raise InvalidInput(
                f"n={n} has a prime factor above the trial-division bound {max_prime}"
            )
        factors.append(PrimePowerFactor(rem, 1))
    return factors


def factor_sizes(factors: Iterable[PrimePowerFactor]) -> Tuple[int, ...]:
    return tuple(f.value for f in factors)
