from __future__ import annotations

import pytest

from blocksudoku.board import BoardParams, index_of, peers_of
from blocksudoku.engine import apply_assignment, check_invariants, init_state
from blocksudoku.models import InvariantViolation
from blocksudoku.state import CandidateState


def test_init_state_propagates_givens(classic_puzzle):
    p = BoardParams(3, 3)
    state, grid = init_state(p, classic_puzzle)
    assert grid == classic_puzzle
    assert len(state) == classic_puzzle.count(0)
    check_invariants(p, state, grid)
    # r1c3 sees 5, 3, 7 in its row, 6, 9, 8 in its block
    entry = state.lookup(index_of(p, 0, 2))
    assert entry.values() == [1, 2, 4]


def test_init_state_does_not_mutate_input(classic_puzzle):
    before = list(classic_puzzle)
    init_state(BoardParams(3, 3), classic_puzzle)
    assert classic_puzzle == before


@pytest.mark.parametrize(
    "givens",
    [
        [1, 1, 0, 0] + [0] * 12,        # same row
        [1, 0, 0, 0, 0, 1] + [0] * 10,  # same block
        [5] + [0] * 15,                 # out of range
        [-1] + [0] * 15,
    ],
)
def test_init_state_rejects_conflicting_givens(givens):
    assert init_state(BoardParams(2, 2), givens) is None


def test_apply_assignment_removes_value_from_peers():
    p = BoardParams(2, 2)
    state, grid = init_state(p, [0] * 16)
    pos = index_of(p, 1, 1)
    apply_assignment(p, state, grid, pos, 3)
    assert grid[pos] == 3
    assert pos not in state
    for q in peers_of(p, pos):
        assert not state.is_live(q, 3)
        assert state.lookup(q).rank == 3
    check_invariants(p, state, grid)


def test_invariants_hold_along_a_search_path(classic_puzzle, classic_solution):
    p = BoardParams(3, 3)
    state, grid = init_state(p, classic_puzzle)
    while len(state):
        entry = state.pop_front()
        v = classic_solution[entry.pos]
        assert v in entry.values()
        apply_assignment(p, state, grid, entry.pos, v)
        check_invariants(p, state, grid)
    assert grid == classic_solution


def test_check_invariants_detects_rank_mismatch():
    p = BoardParams(2, 2)
    state, grid = init_state(p, [0] * 16)
    state._masks[0] = 0b110
    with pytest.raises(InvariantViolation):
        check_invariants(p, state, grid)


def test_check_invariants_detects_stale_candidate():
    p = BoardParams(2, 2)
    state = CandidateState.full(p.cells, p.full_mask)
    grid = [0] * 16
    grid[0] = 1
    state.remove(0)
    with pytest.raises(InvariantViolation):
        check_invariants(p, state, grid)
