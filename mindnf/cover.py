from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from mindnf.cube import Cube
from mindnf.errors import InvariantViolationError
from mindnf.implicants import build_minterm_to_pis

logger = logging.getLogger(__name__)


@dataclass
class MinimalCoverResult:
    """Smallest cover size and every cover of exactly that size."""
    min_size: int
    covers: List[Tuple[int, ...]] = field(default_factory=list)


@dataclass
class _Frame:
    cursor: int
    tried: Set[int]
    pos: int = 0
    pushed: bool = False


class _CoverSearch:
    """
    Depth-first search over minterms with branch and bound.

    At the first minterm the current selection leaves uncovered, branch on
    every prime implicant covering it.  An implicant tried as a branch is
    kept out of the later sibling branches' subtrees, so a combination is
    reached through one choice order only.  The search keeps its own stack
    of frames, one per chosen implicant, so cover size is not bounded by
    the interpreter's recursion limit.
    """

    def __init__(self, minterm_to_pis: List[List[int]], num_pis: int):
        self.minterm_to_pis = minterm_to_pis
        self.covering: List[FrozenSet[int]] = [frozenset(c) for c in minterm_to_pis]
        self.best = num_pis
        self.results: List[Tuple[int, ...]] = []
        self.selection: List[int] = []
        self.nodes = 0
        self._chosen: Set[int] = set()
        self._seen: Set[FrozenSet[int]] = set()

    def _enter(self, cursor: int, tried: Set[int]) -> Optional[_Frame]:
        """Skip covered minterms; None when the path is complete or pruned."""
        self.nodes += 1
        while cursor < len(self.minterm_to_pis) and not self.covering[cursor].isdisjoint(self._chosen):
            cursor += 1
        if cursor == len(self.minterm_to_pis):
            self._record()
            return None
        if len(self.selection) >= self.best:
            return None
        return _Frame(cursor, set(tried))

    def search(self) -> None:
        stack: List[_Frame] = []
        root = self._enter(0, set())
        if root is not None:
            stack.append(root)
        while stack:
            frame = stack[-1]
            if frame.pushed:
                self._chosen.discard(self.selection.pop())
                frame.pushed = False
            candidates = self.minterm_to_pis[frame.cursor]
            while frame.pos < len(candidates) and candidates[frame.pos] in frame.tried:
                frame.pos += 1
            if frame.pos == len(candidates):
                stack.pop()
                continue
            i = candidates[frame.pos]
            frame.pos += 1
            self.selection.append(i)
            self._chosen.add(i)
            frame.tried.add(i)
            frame.pushed = True
            child = self._enter(frame.cursor + 1, frame.tried)
            if child is not None:
                stack.append(child)

    def _record(self) -> None:
        size = len(self.selection)
        if size > self.best:
            return
        if size < self.best:
            self.best = size
            self.results.clear()
            self._seen.clear()
        key = frozenset(self.selection)
        if key not in self._seen:
            self._seen.add(key)
            self.results.append(tuple(self.selection))


def solve_minimal_cover(pis: Sequence[Cube], minterms: Sequence[Cube]) -> MinimalCoverResult:
    """
    Find every minimum-size set of prime implicants covering all minterms.

    `pis` should be sorted by descending weight, as returned by
    derive_prime_implicants; general implicants are then tried first.
    Covers are index tuples into `pis`, in the order they were chosen.
    With no minterms the only minimal cover is the empty one.
    """
    minterm_to_pis = build_minterm_to_pis(minterms, pis)
    for m, cand in zip(minterms, minterm_to_pis):
        if not cand:
            raise InvariantViolationError(f"minterm {m} is not covered by any prime implicant")

    state = _CoverSearch(minterm_to_pis, len(pis))
    state.search()
    logger.debug("cover search visited %d nodes, %d cover(s) of size %d",
                 state.nodes, len(state.results), state.best)
    return MinimalCoverResult(min_size=state.best, covers=state.results)


def is_valid_cover(cover: Sequence[int], pis: Sequence[Cube], minterms: Sequence[Cube]) -> bool:
    """True iff the chosen implicants together cover every minterm."""
    return all(any(pis[i].covers(m) for i in cover) for m in minterms)
