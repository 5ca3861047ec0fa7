from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, Sequence

from . import permutation_io
from .composition import Composition
from .config import DEFAULT_MAX_FACTOR_SIZE, DEFAULT_MAX_PRIME, PermutationConfig
from .errors import CrtPermutationError
from .permutation import Permutation, RandomPermutation
from .utils import rng

log = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sample a CRT random permutation and print its first images.")
    parser.add_argument("--n", type=int, required=True, help="Number of points of the permutation.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the PCG64 random source (fresh entropy when omitted).")
    parser.add_argument("--compose", type=int, default=1, help="Number of independent permutations composed together.")
    parser.add_argument("--head", type=int, default=10, help="Number of leading images printed.")
    parser.add_argument("--inverse", action="store_true", help="Also print the leading images of the inverse permutation.")
    parser.add_argument("--max-prime", type=int, default=DEFAULT_MAX_PRIME, help="Trial-division bound for factoring n.")
    parser.add_argument("--max-factor-size", type=int, default=DEFAULT_MAX_FACTOR_SIZE, help="Largest prime power given an explicit table.")
    parser.add_argument("--save", type=str, default=None, help="Prefix used to persist the permutation (requires --compose 1).")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging.")
    return parser.parse_args(argv)


def _build(args: argparse.Namespace) -> tuple[Permutation, list[RandomPermutation]]:
    cfg = PermutationConfig(max_prime=args.max_prime, max_factor_size=args.max_factor_size)
    g = rng(args.seed)
    members = [RandomPermutation.new(args.n, g, cfg) for _ in range(max(args.compose, 1))]
    perm: Permutation = members[0] if len(members) == 1 else Composition(members)
    return perm, members


def _report(perm: Permutation, members: list[RandomPermutation], args: argparse.Namespace) -> Dict[str, Any]:
    report: Dict[str, Any] = {
        "n": perm.size,
        "factor_sizes": list(members[0].coefficients.moduli),
        "composed": len(members),
        "head": perm.iter().take(args.head),
    }
    if args.inverse:
        report["inverse_head"] = perm.inverse_iter().take(args.head)
    return report


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.save and args.compose > 1:
        log.error("--save only supports a single permutation (got --compose %d)", args.compose)
        return 2

    try:
        perm, members = _build(args)
    except CrtPermutationError as exc:
        log.error("Cannot build a permutation of %d points: %s", args.n, exc)
        return 2
    log.info("Built %r", perm)

    if args.save:
        permutation_io.save_permutation(args.save, members[0])

    json.dump(_report(perm, members, args), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
