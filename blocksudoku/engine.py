from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .board import BoardParams, anti_literals, peers_of, row_of, col_of
from .models import InvariantViolation
from .state import CandidateState

log = logging.getLogger(__name__)


def apply_assignment(
    params: BoardParams,
    state: CandidateState,
    grid: List[int],
    pos: int,
    value: int,
) -> Tuple[CandidateState, List[int]]:
    """
    Place `value` at `pos` and propagate:
    - grid[pos] = value
    - drop pos from the worklist
    - eliminate value from every still-undetermined peer
    A peer whose rank drops to 0 is left in place; search backtracks on it.
    """
    grid[pos] = value
    state.remove(pos)
    for q, v in anti_literals(params, pos, value):
        state.eliminate(q, v)
    return state, grid


def init_state(
    params: BoardParams, givens: Sequence[int]
) -> Optional[Tuple[CandidateState, List[int]]]:
    """
    Build the propagated worklist for `givens` (row-major).
    Returns (state, grid) on success, None if two givens conflict or a
    given is out of range.
    """
    state = CandidateState.full(params.cells, params.full_mask)
    grid = [0] * params.cells
    for pos, v in enumerate(givens):
        if v == 0:
            continue
        if not state.is_live(pos, v):
            log.info(
                "Unsatisfiable givens: %d at r%dc%d is not a candidate",
                v, row_of(params, pos) + 1, col_of(params, pos) + 1,
            )
            return None
        apply_assignment(params, state, grid, pos, v)
    return state, grid


def check_invariants(params: BoardParams, state: CandidateState, grid: Sequence[int]) -> None:
    """Raise InvariantViolation if grid and worklist disagree. Tests only."""
    if len(grid) != params.cells:
        raise InvariantViolation(f"grid has {len(grid)} cells, expected {params.cells}")

    prev = None
    for entry in state:
        key = (entry.rank, entry.pos)
        if prev is not None and key <= prev:
            raise InvariantViolation(f"worklist not sorted at {key} after {prev}")
        prev = key
        if entry.rank != entry.candidates.bit_count():
            raise InvariantViolation(f"rank mismatch at {entry.pos}")
        if entry.candidates & ~params.full_mask:
            raise InvariantViolation(f"out-of-range candidate bits at {entry.pos}")

    for pos in range(params.cells):
        v = grid[pos]
        if (v == 0) != (pos in state):
            raise InvariantViolation(f"entry/grid mismatch at {pos}")
        for q in peers_of(params, pos):
            if v and grid[q] == v:
                raise InvariantViolation(f"peers {pos} and {q} both hold {v}")
            if v and state.is_live(q, v):
                raise InvariantViolation(f"{v} still live at {q}, assigned at peer {pos}")
