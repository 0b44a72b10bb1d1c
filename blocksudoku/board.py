from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Sequence, Tuple

Literal = Tuple[int, int]  # (position, value)


@dataclass(frozen=True)
class BoardParams:
    h: int  # block height
    w: int  # block width

    @property
    def hw(self) -> int:
        return self.h * self.w

    @property
    def cells(self) -> int:
        return self.hw * self.hw

    @property
    def full_mask(self) -> int:
        # bits 1..hw set => (1<<(hw+1)) - 2
        return (1 << (self.hw + 1)) - 2


# -----------------------------
# Addressing
# -----------------------------

def index_of(params: BoardParams, row: int, col: int) -> int:
    return row * params.hw + col


def row_of(params: BoardParams, pos: int) -> int:
    return pos // params.hw


def col_of(params: BoardParams, pos: int) -> int:
    return pos % params.hw


def block_origin_of(params: BoardParams, pos: int) -> Tuple[int, int]:
    r, c = row_of(params, pos), col_of(params, pos)
    return (r // params.h * params.h, c // params.w * params.w)


@lru_cache(maxsize=None)
def _peer_table(h: int, w: int) -> Tuple[FrozenSet[int], ...]:
    params = BoardParams(h, w)
    hw = params.hw
    table = []
    for pos in range(params.cells):
        r, c = row_of(params, pos), col_of(params, pos)
        br, bc = block_origin_of(params, pos)
        peers = set()
        peers |= {r * hw + cc for cc in range(hw)}
        peers |= {rr * hw + c for rr in range(hw)}
        peers |= {
            (br + dr) * hw + (bc + dc)
            for dr in range(h)
            for dc in range(w)
        }
        peers.discard(pos)
        table.append(frozenset(peers))
    return tuple(table)


def peers_of(params: BoardParams, pos: int) -> FrozenSet[int]:
    """Positions sharing a row, column or block with `pos`, excluding `pos`."""
    return _peer_table(params.h, params.w)[pos]


# -----------------------------
# Literal / peer relation
# -----------------------------

def anti_literals(params: BoardParams, pos: int, value: int) -> FrozenSet[Literal]:
    """Literals ruled out once `value` is placed at `pos`."""
    return frozenset((q, value) for q in peers_of(params, pos))


# -----------------------------
# Board rules
# -----------------------------

def groups_of(params: BoardParams) -> List[List[int]]:
    """Every row, column and block as a list of positions."""
    hw = params.hw
    groups: List[List[int]] = []
    for r in range(hw):
        groups.append([r * hw + c for c in range(hw)])
    for c in range(hw):
        groups.append([r * hw + c for r in range(hw)])
    for br in range(0, hw, params.h):
        for bc in range(0, hw, params.w):
            groups.append(
                [(br + dr) * hw + (bc + dc) for dr in range(params.h) for dc in range(params.w)]
            )
    return groups


def validate_board(grid: Sequence[int], h: int, w: int) -> Tuple[bool, str]:
    """
    Checks:
      - grid has hw*hw cells
      - values in 0..hw
      - no duplicate values in any row/col/block (ignoring 0)
    """
    if h < 0 or w < 0:
        return False, f"Block dimensions must be non-negative (got {h}x{w})."
    params = BoardParams(h, w)
    hw = params.hw
    if len(grid) != params.cells:
        return False, f"Board must have {params.cells} cells (got {len(grid)})."

    for pos, v in enumerate(grid):
        r, c = row_of(params, pos), col_of(params, pos)
        if not isinstance(v, int) or isinstance(v, bool):
            return False, f"Invalid value at ({r+1},{c+1}): {v!r} (not an integer)."
        if v < 0 or v > hw:
            return False, f"Invalid value at ({r+1},{c+1}): {v} (allowed: 0..{hw})."

    for group in groups_of(params):
        seen = 0
        for pos in group:
            v = grid[pos]
            if v == 0:
                continue
            bit = 1 << v
            if seen & bit:
                r, c = row_of(params, pos), col_of(params, pos)
                return False, f"Conflict: value {v} appears twice in a row/column/block (cell {r+1},{c+1})."
            seen |= bit

    return True, "OK"


def is_solved(grid: Sequence[int], h: int, w: int) -> bool:
    params = BoardParams(h, w)
    if len(grid) != params.cells:
        return False
    if any(v == 0 for v in grid):
        return False
    ok, _ = validate_board(grid, h, w)
    return ok


def refines(candidate: Sequence[int], puzzle: Sequence[int]) -> bool:
    """True if `candidate` agrees with every given (nonzero cell) of `puzzle`."""
    if len(candidate) != len(puzzle):
        return False
    return all(g == 0 or g == v for v, g in zip(candidate, puzzle))
