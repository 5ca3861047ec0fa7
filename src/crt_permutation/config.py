"""Construction limits for random permutations."""
from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidInput

__all__ = [
    "DEFAULT_MAX_PRIME",
    "DEFAULT_MAX_FACTOR_SIZE",
    "PermutationConfig",
]

DEFAULT_MAX_PRIME = 1_000_000
DEFAULT_MAX_FACTOR_SIZE = 1 << 22


@dataclass(frozen=True)
class PermutationConfig:
    """Limits applied when building a :class:`RandomPermutation`.

    Attributes:
        max_prime: Trial-division bound. Any ``n`` with a prime factor above
            this value is rejected as unsupported.
        max_factor_size: Largest prime power ``p**e`` for which an explicit
            sub-permutation table (two int64 arrays of that length) is built.
    """

    max_prime: int = DEFAULT_MAX_PRIME
    max_factor_size: int = DEFAULT_MAX_FACTOR_SIZE

    def __post_init__(self) -> None:
        if self.max_prime < 2:
            raise InvalidInput("max_prime must be >= 2")
        if self.max_factor_size < 2:
            raise InvalidInput("max_factor_size must be >= 2")
