from __future__ import annotations

from blocksudoku.state import CandidateState, StateEntry


def keys(state):
    return [(e.rank, e.pos) for e in state]


def test_full_state_ordered_by_position():
    state = CandidateState.full(4, 0b11110)
    assert len(state) == 4
    assert keys(state) == [(4, 0), (4, 1), (4, 2), (4, 3)]


def test_eliminate_resplices_entry():
    state = CandidateState.full(4, 0b11110)
    assert state.eliminate(2, 3)
    assert keys(state) == [(3, 2), (4, 0), (4, 1), (4, 3)]
    assert state.lookup(2) == StateEntry(3, 2, 0b10110)

    assert state.eliminate(0, 1)
    # equal ranks fall back to position order
    assert keys(state) == [(3, 0), (3, 2), (4, 1), (4, 3)]


def test_eliminate_is_noop_for_dead_candidate_or_missing_cell():
    state = CandidateState.full(4, 0b11110)
    state.eliminate(1, 2)
    before = keys(state)
    assert not state.eliminate(1, 2)
    assert not state.eliminate(1, 0)
    assert not state.eliminate(1, 7)
    state.remove(3)
    assert not state.eliminate(3, 1)
    assert keys(state) == [k for k in before if k[1] != 3]


def test_rank_can_reach_zero():
    state = CandidateState.full(2, 0b110)
    state.eliminate(1, 1)
    state.eliminate(1, 2)
    front = state.peek_front()
    assert front == StateEntry(0, 1, 0)
    assert front.values() == []


def test_lookup_and_remove():
    state = CandidateState.full(3, 0b1110)
    state.remove(1)
    state.remove(1)
    assert state.lookup(1) is None
    assert 1 not in state
    assert len(state) == 2


def test_pop_front_returns_most_constrained():
    state = CandidateState.full(3, 0b1110)
    state.eliminate(2, 1)
    state.eliminate(2, 3)
    entry = state.pop_front()
    assert entry.pos == 2
    assert entry.rank == 1
    assert entry.values() == [2]
    assert 2 not in state
    assert len(state) == 2


def test_clone_is_independent():
    state = CandidateState.full(3, 0b1110)
    other = state.clone()
    other.eliminate(0, 1)
    other.remove(2)
    assert state.lookup(0).rank == 3
    assert 2 in state
    assert keys(state) == [(3, 0), (3, 1), (3, 2)]


def test_values_ascending():
    assert StateEntry(3, 0, 0b1010100).values() == [2, 4, 6]
