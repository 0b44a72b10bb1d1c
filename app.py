from __future__ import annotations

import uuid
from typing import List, Tuple

import pandas as pd
import streamlit as st

from blocksudoku.board import validate_board
from blocksudoku.config import (
    resolve_library_path,
    resolve_max_enumerated,
    resolve_max_shown,
    setup_logging,
)
from blocksudoku.models import (
    STATUS_MULTIPLE,
    STATUS_UNIQUE,
    InvalidBoardSize,
    ParseError,
    PuzzleRecord,
)
from blocksudoku.search import find_one, find_some, find_unique
from blocksudoku.storage import load_library, save_library
from blocksudoku.textio import board_to_csv, format_grid, parse_grid

BLOCK_DIMS = [1, 2, 3, 4, 5]
DEFAULT_DIMS = (3, 3)

setup_logging()
LIBRARY_PATH = resolve_library_path()
MAX_SHOWN = resolve_max_shown()
MAX_ENUMERATED = resolve_max_enumerated()


def cell_key(h: int, w: int, r: int, c: int) -> str:
    # include block dims so changing size doesn't collide with old widget state
    return f"cell_{h}x{w}_{r}_{c}"


def reset_board(h: int, w: int) -> None:
    hw = h * w
    for r in range(hw):
        for c in range(hw):
            st.session_state[cell_key(h, w, r, c)] = ""


def load_cells(h: int, w: int, cells: List[int]) -> None:
    hw = h * w
    for r in range(hw):
        for c in range(hw):
            v = cells[r * hw + c]
            st.session_state[cell_key(h, w, r, c)] = "" if v == 0 else str(v)


def read_board(h: int, w: int) -> Tuple[List[int], List[str]]:
    """
    Read cell widget values from session_state and build a flat board.
    Returns (board, errors). Empty string or '0' => 0.
    """
    hw = h * w
    errors: List[str] = []
    board: List[int] = [0] * (hw * hw)

    for r in range(hw):
        for c in range(hw):
            raw = str(st.session_state.get(cell_key(h, w, r, c), "")).strip()
            if raw == "":
                continue

            if not raw.isdigit():
                errors.append(f"Cell ({r+1},{c+1}) is not a number: '{raw}'")
                continue

            v = int(raw)
            if 0 <= v <= hw:
                board[r * hw + c] = v
            else:
                errors.append(f"Cell ({r+1},{c+1}) out of range: {v} (allowed 1..{hw}, or blank/0).")

    return board, errors


def render_board_html(board: List[int], h: int, w: int, title: str, givens: List[int] | None = None) -> None:
    """
    Render a clean Sudoku grid with thick block borders using HTML/CSS.
    Givens are shown in bold when provided.
    """
    hw = h * w

    html = [f"<div class='sudoku-wrap'><div class='sudoku-title'>{title}</div>"]
    html.append("<table class='sudoku'>")
    for r in range(hw):
        html.append("<tr>")
        for c in range(hw):
            v = board[r * hw + c]
            cls = []
            if r % h == 0:
                cls.append("top")
            if c % w == 0:
                cls.append("left")
            if (r + 1) % h == 0:
                cls.append("bottom")
            if (c + 1) % w == 0:
                cls.append("right")
            if givens is not None and givens[r * hw + c]:
                cls.append("given")
            cls_attr = f" class='{' '.join(cls)}'" if cls else ""
            disp = "" if v == 0 else str(v)
            html.append(f"<td{cls_attr}>{disp}</td>")
        html.append("</tr>")
    html.append("</table></div>")

    st.markdown("".join(html), unsafe_allow_html=True)


def solutions_df(solutions: List[List[int]], hw: int) -> pd.DataFrame:
    if not solutions:
        return pd.DataFrame(columns=["#", "first row", "cells differing from #1"])
    first = solutions[0]
    rows = []
    for i, s in enumerate(solutions):
        rows.append(
            {
                "#": i + 1,
                "first row": " ".join(str(v) for v in s[:hw]),
                "cells differing from #1": sum(1 for a, b in zip(s, first) if a != b),
            }
        )
    return pd.DataFrame(rows)


st.set_page_config(page_title="Block Sudoku Solver", layout="wide")

st.markdown(
    """
<style>
/* Make inputs larger and centered */
div[data-testid="stTextInput"] input {
    text-align: center;
    font-size: 22px !important;
    height: 2.8rem;
    padding: 0.25rem 0.25rem;
}
div[data-testid="stTextInput"] { margin-bottom: 0rem; }

/* Sudoku HTML output */
.sudoku-wrap { margin-top: 0.5rem; }
.sudoku-title { font-size: 1.05rem; font-weight: 600; margin: 0.5rem 0 0.35rem 0; }
table.sudoku { border-collapse: collapse; }
table.sudoku td {
    width: 2.8rem;
    height: 2.8rem;
    text-align: center;
    vertical-align: middle;
    font-size: 22px;
    border: 1px solid rgba(49, 51, 63, 0.25);
}
table.sudoku td.top { border-top: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.left { border-left: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.bottom { border-bottom: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.right { border-right: 3px solid rgba(49, 51, 63, 0.65); }
table.sudoku td.given { font-weight: 700; }

.sudoku-spacer { height: 0.25rem; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("Block Sudoku Solver")
st.caption("Blocks are h×w, the grid is hw×hw. Leave cells blank (or enter 0). Allowed values: 1..hw.")

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Settings")
    if "dims" not in st.session_state:
        st.session_state.dims = DEFAULT_DIMS

    cur_h, cur_w = st.session_state.dims
    h_sel = st.selectbox("Block height (h)", BLOCK_DIMS, index=BLOCK_DIMS.index(cur_h))
    w_sel = st.selectbox("Block width (w)", BLOCK_DIMS, index=BLOCK_DIMS.index(cur_w))

    if (h_sel, w_sel) != st.session_state.dims:
        st.session_state.dims = (h_sel, w_sel)
        reset_board(h_sel, w_sel)

    st.divider()
    if st.button("Reset board", use_container_width=True):
        reset_board(*st.session_state.dims)

    st.divider()
    st.subheader("Library")
    st.caption(f"Library: `{LIBRARY_PATH}`")
    library = load_library(LIBRARY_PATH)
    if library.puzzles:
        pid = st.selectbox(
            "Saved puzzles",
            sorted(library.puzzles.keys()),
            format_func=lambda k: f"{library.puzzles[k].name} ({library.puzzles[k].h}×{library.puzzles[k].w})",
        )
        if st.button("Load puzzle", use_container_width=True):
            rec = library.puzzles[pid]
            st.session_state.dims = (rec.h, rec.w)
            load_cells(rec.h, rec.w, rec.cells)
            st.rerun()
        if st.button("Delete puzzle", use_container_width=True):
            library.remove(pid)
            save_library(library, LIBRARY_PATH)
            st.rerun()
    else:
        st.info("No saved puzzles yet.")

h, w = st.session_state.dims
hw = h * w

# ---- Text import ----
with st.expander("Paste a grid drawing"):
    text = st.text_area(
        "Grid text",
        value="",
        height=220,
        help="Digits (or letters A.. above 9), '.', '_' or '0' for blanks. Spaces and | + - = are ignored.",
    )
    if st.button("Import text"):
        try:
            cells = parse_grid(text, h, w)
        except ParseError as e:
            st.error(str(e))
        else:
            if len(cells) != hw * hw:
                st.error(f"Expected {hw * hw} cells, read {len(cells)}.")
            else:
                load_cells(h, w, cells)
                st.rerun()

# ---- Input grid in a form (prevents rerun on every keystroke) ----
st.subheader("Input")

with st.form("sudoku_form", clear_on_submit=False):
    # Build column widths with spacer columns between blocks
    spacer_w = 0.18
    widths = []
    for g in range(h):
        widths.extend([1.0] * w)
        if g != h - 1:
            widths.append(spacer_w)

    for r in range(hw):
        cols = st.columns(widths, gap="small")
        col_idx = 0
        for c in range(hw):
            # insert a spacer column after each block
            if c > 0 and c % w == 0:
                col_idx += 1  # skip spacer column
            with cols[col_idx]:
                key = cell_key(h, w, r, c)
                if key not in st.session_state:
                    st.session_state[key] = ""
                st.text_input(
                    label="",
                    key=key,
                    label_visibility="collapsed",
                    placeholder="",
                )
            col_idx += 1

        # horizontal spacer between blocks of rows
        if (r + 1) % h == 0 and (r + 1) != hw:
            st.markdown("<div class='sudoku-spacer'></div>", unsafe_allow_html=True)

    colA, colB, colC, colD, colE = st.columns(5)
    validate_clicked = colA.form_submit_button("Validate", use_container_width=True)
    one_clicked = colB.form_submit_button("Find one", use_container_width=True)
    all_clicked = colC.form_submit_button("Find all", use_container_width=True)
    unique_clicked = colD.form_submit_button("Check uniqueness", use_container_width=True)
    save_clicked = colE.form_submit_button("Save to library", use_container_width=True)

save_name = st.text_input("Name for saved puzzle", value="")

# ---- Actions ----
if validate_clicked or one_clicked or all_clicked or unique_clicked or save_clicked:
    board, parse_errors = read_board(h, w)
    if parse_errors:
        st.error("Please fix these input issues:")
        st.write("\n".join([f"- {e}" for e in parse_errors]))
        st.stop()

    ok, msg = validate_board(board, h, w)
    if not ok:
        st.error(msg)
    else:
        st.success("Board looks valid.")
    render_board_html(board, h, w, "Current board (preview)")

    if save_clicked and not ok:
        st.warning("Not saved: fix the conflicts above first.")
    elif save_clicked:
        rid = f"pz_{uuid.uuid4().hex[:12]}"
        library.add(PuzzleRecord(id=rid, name=save_name.strip() or rid, h=h, w=w, cells=board))
        save_library(library, LIBRARY_PATH)
        st.success("Puzzle saved.")

    try:
        if one_clicked:
            solution = find_one(board, h, w)
            if solution is None:
                st.error("No solution found (the puzzle may be unsolvable).")
            else:
                st.success("Solution found ✅")
                render_board_html(solution, h, w, "Solution", givens=board)
                st.code(format_grid(solution, h, w))
                st.download_button(
                    "Download solution as CSV",
                    data=board_to_csv(solution, hw),
                    file_name=f"sudoku_solution_{hw}x{hw}.csv",
                    mime="text/csv",
                )

        if all_clicked:
            with st.spinner("Enumerating solutions..."):
                solutions, complete = find_some(board, h, w, MAX_ENUMERATED)
            if not solutions:
                st.error("No solution found (the puzzle may be unsolvable).")
            else:
                if complete:
                    st.success(f"{len(solutions)} solution(s) found.")
                else:
                    st.warning(f"At least {len(solutions)} solutions; enumeration stopped at the limit.")
                st.dataframe(solutions_df(solutions, hw), use_container_width=True, hide_index=True)
                shown = solutions[:MAX_SHOWN]
                if len(solutions) > len(shown):
                    st.info(f"Showing the first {len(shown)} of {len(solutions)}.")
                for i, s in enumerate(shown):
                    render_board_html(s, h, w, f"Solution #{i + 1}", givens=board)

        if unique_clicked:
            result = find_unique(board, h, w)
            if result.status == STATUS_UNIQUE:
                st.success("Exactly one solution.")
                render_board_html(result.first, h, w, "Unique solution", givens=board)
            elif result.status == STATUS_MULTIPLE:
                st.warning("More than one solution. Two of them:")
                c1, c2 = st.columns(2)
                with c1:
                    render_board_html(result.first, h, w, "Solution A", givens=board)
                with c2:
                    render_board_html(result.second, h, w, "Solution B", givens=board)
            else:
                st.error("No solution.")
    except InvalidBoardSize as e:
        st.error(str(e))
else:
    # Always show a preview (readable) even before submitting
    board, _ = read_board(h, w)
    render_board_html(board, h, w, "Current board (preview)")
