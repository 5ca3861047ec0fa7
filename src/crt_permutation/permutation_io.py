from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Tuple

import numpy as np

from .errors import InvalidInput
from .permutation import RandomPermutation
from .subperm import SubPermutation

__all__ = ["save_permutation", "load_permutation"]

log = logging.getLogger(__name__)

FORMAT_VERSION = 1
_SUFFIXES = (".npz", ".json")


def _file_paths(prefix: str | Path) -> Tuple[Path, Path]:
    """``(<prefix>.npz, <prefix>.json)``.

    A trailing ``.npz``/``.json`` on *prefix* is dropped; any other dot stays
    part of the name (``runs/p.v1`` -> ``runs/p.v1.npz``).
    """
    path = Path(prefix)
    if path.suffix in _SUFFIXES:
        path = path.with_suffix("")
    return path.with_name(path.name + ".npz"), path.with_name(path.name + ".json")


def save_permutation(prefix: str | Path, perm: RandomPermutation) -> None:
    """Write ``<prefix>.npz`` (forward tables) and ``<prefix>.json`` (metadata)."""
    arrays_path, meta_path = _file_paths(prefix)
    arrays_path.parent.mkdir(parents=True, exist_ok=True)

    np.savez_compressed(
        arrays_path,
        **{f"forward_{j}": sub.forward.astype(np.int64, copy=False) for j, sub in enumerate(perm.factors)},
    )

    meta = {
        "version": FORMAT_VERSION,
        "n": perm.size,
        "sizes": [sub.size for sub in perm.factors],
    }
    with meta_path.open("w", encoding="utf-8") as fh:
        json.dump(meta, fh, indent=2, sort_keys=True)
    log.info("Saved permutation of %d points to %s", perm.size, arrays_path.with_suffix(""))


def load_permutation(prefix: str | Path) -> RandomPermutation:
    arrays_path, meta_path = _file_paths(prefix)

    meta = json.loads(meta_path.read_text(encoding="utf-8"))
    if meta.get("version") != FORMAT_VERSION:
        raise InvalidInput(f"Unsupported permutation file version: {meta.get('version')}")

    sizes = [int(q) for q in meta["sizes"]]
    with np.load(arrays_path, allow_pickle=False) as arrays:
        subs = []
        for j, q in enumerate(sizes):
            key = f"forward_{j}"
            if key not in arrays.files:
                raise InvalidInput(f"missing table {key} in {arrays_path}")
            table = arrays[key]
            if table.shape != (q,):
                raise InvalidInput(f"table {key} has shape {table.shape}, expected ({q},)")
            subs.append(SubPermutation.from_forward(table))

    perm = RandomPermutation.from_sub_permutations(subs)
    if perm.size != int(meta["n"]):
        raise InvalidInput(f"tables describe {perm.size} points but metadata says {meta['n']}")
    return perm
