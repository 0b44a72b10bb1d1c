from __future__ import annotations

from typing import List

import pytest


def rows_to_grid(rows: List[str]) -> List[int]:
    return [0 if ch in ".0" else int(ch) for row in rows for ch in row]


CLASSIC_PUZZLE = rows_to_grid([
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
])

CLASSIC_SOLUTION = rows_to_grid([
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
])

SOLVED_4 = rows_to_grid([
    "1234",
    "3412",
    "2143",
    "4321",
])

# 2 rows x 3 cols blocks
SOLVED_6 = rows_to_grid([
    "123456",
    "456123",
    "231564",
    "564231",
    "312645",
    "645312",
])


@pytest.fixture
def classic_puzzle() -> List[int]:
    return list(CLASSIC_PUZZLE)


@pytest.fixture
def classic_solution() -> List[int]:
    return list(CLASSIC_SOLUTION)


@pytest.fixture
def solved_4() -> List[int]:
    return list(SOLVED_4)


@pytest.fixture
def solved_6() -> List[int]:
    return list(SOLVED_6)


def brute_force_solutions(grid: List[int], h: int, w: int) -> List[List[int]]:
    """Plain row-major backtracking, no propagation. Reference for small boards."""
    hw = h * w
    work = list(grid)
    out: List[List[int]] = []

    def ok(pos: int, v: int) -> bool:
        r, c = divmod(pos, hw)
        br, bc = r // h * h, c // w * w
        for i in range(hw):
            if i != c and work[r * hw + i] == v:
                return False
            if i != r and work[i * hw + c] == v:
                return False
        for rr in range(br, br + h):
            for cc in range(bc, bc + w):
                if (rr, cc) != (r, c) and work[rr * hw + cc] == v:
                    return False
        return True

    for pos, v in enumerate(work):
        if v and not ok(pos, v):
            return []

    def backtrack(pos: int) -> None:
        if pos == hw * hw:
            out.append(list(work))
            return
        if work[pos]:
            backtrack(pos + 1)
            return
        for v in range(1, hw + 1):
            if ok(pos, v):
                work[pos] = v
                backtrack(pos + 1)
                work[pos] = 0

    backtrack(0)
    return sorted(out)


@pytest.fixture
def brute_force():
    return brute_force_solutions
