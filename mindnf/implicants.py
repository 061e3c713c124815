"""
Prime implicant enumeration.

Instead of merging minterms pairwise (Quine-McCluskey), every one of the
3**n cubes is visited once, most general first, and kept when it covers
a minterm, avoids every non-minterm and is not covered by a cube kept
earlier.  Cost is O(3**n * (#minterms + #non-minterms + #primes)), which
limits practical use to roughly the low teens of inputs.
"""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Sequence

from mindnf.config import DEFAULT_LIMITS, Limits
from mindnf.cube import Cube, weight
from mindnf.errors import LimitExceededError

logger = logging.getLogger(__name__)


def next_cube(cube: Cube) -> Optional[Cube]:
    """
    Odometer step over the variables, variable 0 least significant.

    Each digit runs don't care -> 1 -> 0 and then carries back to don't
    care.  Returns None once the carry runs off the last variable, i.e.
    when the traversal is back at the universe cube.
    """
    mask = cube.mask
    for i in range(cube.num_inputs):
        shift = 2 * i
        pair = (mask >> shift) & 0b11
        if pair == 0b11:
            return Cube(cube.num_inputs, mask & ~(0b01 << shift))
        if pair == 0b10:
            return Cube(cube.num_inputs, mask ^ (0b11 << shift))
        mask |= 0b10 << shift  # 0 -> don't care, carry
    return None


def iter_cubes(num_inputs: int) -> Iterator[Cube]:
    """
    Yield all 3**num_inputs cubes exactly once, starting at the universe.

    A cube is always yielded before any cube it strictly covers: as a
    base-3 number with digits (don't care, 1, 0) = (0, 1, 2), a covering
    cube is digit-wise <= every cube it covers.
    """
    cube: Optional[Cube] = Cube.universe(num_inputs)
    while cube is not None:
        yield cube
        cube = next_cube(cube)


def _check_sizes(num_inputs: int, cubes: Sequence[Cube], what: str) -> None:
    for c in cubes:
        if c.num_inputs != num_inputs:
            raise ValueError(f"{what} {c} has {c.num_inputs} inputs, expected {num_inputs}")
        if not c.is_fully_specified:
            raise ValueError(f"{what} {c} is not fully specified")


def derive_prime_implicants(
    num_inputs: int,
    minterms: Sequence[Cube],
    non_minterms: Sequence[Cube],
    limits: Limits = DEFAULT_LIMITS,
) -> List[Cube]:
    """
    Return every prime implicant, sorted by descending weight.

    The sort is stable, so implicants of equal weight keep traversal order.
    Raises LimitExceededError when num_inputs or the number of prime
    implicants goes past `limits`, ValueError when num_inputs < 1.
    """
    if num_inputs < 1:
        raise ValueError(f"num_inputs must be >= 1, got {num_inputs}")
    if num_inputs > limits.max_inputs:
        raise LimitExceededError(
            f"the number of input variables is too large ({num_inputs} > {limits.max_inputs})"
        )
    _check_sizes(num_inputs, minterms, "minterm")
    _check_sizes(num_inputs, non_minterms, "non-minterm")

    on_masks = [m.mask for m in minterms]
    off_masks = [m.mask for m in non_minterms]
    accepted: List[Cube] = []
    accepted_masks: List[int] = []
    visited = 0
    for t in iter_cubes(num_inputs):
        visited += 1
        tm = t.mask
        if not any(tm & m == m for m in on_masks):
            continue
        if any(tm & m == m for m in off_masks):
            continue
        if any(p & tm == tm for p in accepted_masks):
            continue
        if len(accepted) >= limits.max_prime_implicants:
            raise LimitExceededError(
                f"the number of prime implicants is too large (> {limits.max_prime_implicants})"
            )
        accepted.append(t)
        accepted_masks.append(tm)

    logger.debug("visited %d cubes, kept %d prime implicants", visited, len(accepted))
    return sorted(accepted, key=weight, reverse=True)


def build_minterm_to_pis(minterms: Sequence[Cube], pis: Sequence[Cube]) -> List[List[int]]:
    """For each minterm, the indices of the prime implicants covering it."""
    table: List[List[int]] = []
    for m in minterms:
        table.append([i for i, pi in enumerate(pis) if pi.mask & m.mask == m.mask])
    return table
