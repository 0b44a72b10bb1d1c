from __future__ import annotations

import logging
from itertools import islice
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .board import BoardParams, col_of, row_of
from .engine import apply_assignment, init_state
from .models import Grid, InvalidBoardSize, UniqueResult
from .state import CandidateState

log = logging.getLogger(__name__)


def _params_for(grid: Sequence[int], h: int, w: int) -> BoardParams:
    if h < 0 or w < 0:
        raise InvalidBoardSize(f"Block dimensions must be non-negative (got {h}x{w}).")
    params = BoardParams(h, w)
    if len(grid) != params.cells:
        raise InvalidBoardSize(
            f"Board for {h}x{w} blocks must have {params.cells} cells (got {len(grid)})."
        )
    return params


def _solutions(params: BoardParams, state: CandidateState, grid: List[int]) -> Iterator[Grid]:
    """
    Depth-first over (state, grid), most constrained cell first,
    candidates ascending. Yields each complete grid reached.
    """
    if not state:
        yield list(grid)
        return

    entry = state.pop_front()
    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            "Branching on r%dc%d (%d candidates, %d cells left)",
            row_of(params, entry.pos) + 1, col_of(params, entry.pos) + 1,
            entry.rank, len(state) + 1,
        )
    for v in entry.values():
        child_state, child_grid = apply_assignment(params, state.clone(), list(grid), entry.pos, v)
        yield from _solutions(params, child_state, child_grid)


def iter_solutions(grid: Sequence[int], h: int, w: int) -> Iterator[Grid]:
    """
    Lazily yield solutions in traversal order. The board size is checked
    eagerly; unsatisfiable givens give an empty iterator.
    """
    params = _params_for(grid, h, w)
    start = init_state(params, grid)
    if start is None:
        return iter(())
    state, work = start
    return _solutions(params, state, work)


def find_one(grid: Sequence[int], h: int, w: int) -> Optional[Grid]:
    """
    Any one solution, or None if there is none.
    Returns a NEW grid; the caller's grid is not mutated.
    """
    solution = next(iter_solutions(grid, h, w), None)
    log.info("find_one (%dx%d blocks) -> %s", h, w, "solved" if solution is not None else "no solution")
    return solution


def find_all(grid: Sequence[int], h: int, w: int) -> List[Grid]:
    """Every solution, duplicate-free, sorted lexicographically by cell index."""
    seen: Set[Tuple[int, ...]] = set()
    for solution in iter_solutions(grid, h, w):
        seen.add(tuple(solution))
    out = [list(s) for s in sorted(seen)]
    log.info("find_all (%dx%d blocks) -> %d solution(s)", h, w, len(out))
    return out


def find_some(grid: Sequence[int], h: int, w: int, limit: int) -> Tuple[List[Grid], bool]:
    """
    At most `limit` solutions plus a flag telling whether the search finished.
    When it finished the list is sorted like find_all; otherwise it is in
    traversal order and there are more solutions than returned.
    """
    if limit < 0:
        raise ValueError("limit must be non-negative")
    batch = list(islice(iter_solutions(grid, h, w), limit + 1))
    if len(batch) > limit:
        log.info("find_some (%dx%d blocks) -> stopped at %d solution(s)", h, w, limit)
        return batch[:limit], False
    out = [list(s) for s in sorted({tuple(s) for s in batch})]
    log.info("find_some (%dx%d blocks) -> all %d solution(s)", h, w, len(out))
    return out, True


def find_unique(grid: Sequence[int], h: int, w: int) -> UniqueResult:
    """
    Stops as soon as two distinct solutions are seen. The pair returned is the
    first two distinct solutions in traversal order.
    """
    found: List[Grid] = []
    for solution in iter_solutions(grid, h, w):
        if found and solution == found[0]:
            continue
        found.append(solution)
        if len(found) == 2:
            break

    if not found:
        result = UniqueResult.none()
    elif len(found) == 1:
        result = UniqueResult.unique(found[0])
    else:
        result = UniqueResult.multiple(found[0], found[1])
    log.info("find_unique (%dx%d blocks) -> %s", h, w, result.status)
    return result
