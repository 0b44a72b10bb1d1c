from __future__ import annotations

from typing import List, Sequence

from .models import Grid, ParseError

SEPARATORS = set("|+-=")
EMPTY_SYMBOLS = {".", "_", "0"}


def _symbol_value(tok: str) -> int:
    if tok in EMPTY_SYMBOLS:
        return 0
    if tok.isdigit():
        return int(tok)
    # allow A..Z for 10..35 on large boards
    if len(tok) == 1 and tok.isalpha() and tok.isascii():
        return 10 + ord(tok.upper()) - ord("A")
    raise ParseError(f"Unknown cell symbol: {tok!r}")


def parse_grid(text: str, h: int, w: int) -> Grid:
    """
    Read a grid drawing into a flat row-major grid.
    Accepts:
      - one character per cell for boards up to 9x9, e.g. '53..7....'
        or '| 5 3 . | . 7 . | . . . |' (spaces and | + - = are ignored)
      - whitespace-separated tokens for larger boards, e.g. '12 . 3 | A ...'
    The cell count is not checked here.
    """
    hw = h * w
    cells: List[int] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if hw <= 9:
            for ch in line:
                if ch.isspace() or ch in SEPARATORS:
                    continue
                if ch.isdigit():
                    cells.append(int(ch))
                elif ch in EMPTY_SYMBOLS:
                    cells.append(0)
                else:
                    raise ParseError(f"Unknown cell symbol: {ch!r}")
        else:
            for tok in line.split():
                if all(ch in SEPARATORS for ch in tok):
                    continue
                cells.append(_symbol_value(tok))
    return cells


def _symbol(v: int) -> str:
    # pretty printing up to base-36: 1..9, A..Z
    if v == 0:
        return "."
    if 1 <= v <= 9:
        return str(v)
    return chr(ord("A") + (v - 10))


def format_grid(grid: Sequence[int], h: int, w: int) -> str:
    """Text drawing with | between block columns and rule lines between block rows."""
    hw = h * w
    if hw == 0:
        return ""
    cellw = 1 if hw <= 9 else 2
    lines: List[str] = []
    rule = None
    for r in range(hw):
        parts: List[str] = []
        for c in range(hw):
            if c % w == 0 and c != 0:
                parts.append("|")
            parts.append(_symbol(grid[r * hw + c]).rjust(cellw))
        line = " ".join(parts)
        if rule is None:
            rule = "".join("+" if ch == "|" else "-" for ch in line)
        if r % h == 0 and r != 0:
            lines.append(rule)
        lines.append(line)
    return "\n".join(lines)


def to_rows(grid: Sequence[int], hw: int) -> List[List[int]]:
    return [list(grid[r * hw:(r + 1) * hw]) for r in range(hw)]


def from_rows(rows: Sequence[Sequence[int]]) -> Grid:
    return [v for row in rows for v in row]


def board_to_csv(grid: Sequence[int], hw: int) -> bytes:
    lines = [",".join(str(v) for v in row) for row in to_rows(grid, hw)]
    return ("\n".join(lines) + "\n").encode("utf-8")
