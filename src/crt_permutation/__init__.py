"""Pseudo-random permutations of ``{0, ..., n-1}`` via the Chinese Remainder Theorem."""
from __future__ import annotations

from .errors import CrtPermutationError, InvalidInput, OutOfRange, SizeMismatch
from .config import DEFAULT_MAX_FACTOR_SIZE, DEFAULT_MAX_PRIME, PermutationConfig
from .factor import PrimePowerFactor, factor, factor_sizes
from .subperm import SubPermutation
from .crt import CrtCoefficients, chinese_remainder, mod_inverse
from .permutation import (
    InversePermutation,
    Permutation,
    PermutationIterator,
    PermutationSequence,
    RandomPermutation,
)
from .composition import Composition, compose
from .permutation_io import load_permutation, save_permutation

__all__ = [
    "CrtPermutationError",
    "InvalidInput",
    "OutOfRange",
    "SizeMismatch",
    "DEFAULT_MAX_FACTOR_SIZE",
    "DEFAULT_MAX_PRIME",
    "PermutationConfig",
    "PrimePowerFactor",
    "factor",
    "factor_sizes",
    "SubPermutation",
    "CrtCoefficients",
    "chinese_remainder",
    "mod_inverse",
    "Permutation",
    "PermutationIterator",
    "PermutationSequence",
    "RandomPermutation",
    "InversePermutation",
    "Composition",
    "compose",
    "load_permutation",
    "save_permutation",
]
