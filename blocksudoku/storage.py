from __future__ import annotations

import json
import logging
import os
from typing import Optional

from .config import resolve_library_path
from .models import Library, PuzzleRecord

log = logging.getLogger(__name__)


def record_fits(record: PuzzleRecord) -> bool:
    """True if the record's cells match its h×w blocks."""
    if record.h < 0 or record.w < 0:
        return False
    hw = record.h * record.w
    return len(record.cells) == hw * hw and all(
        isinstance(v, int) and 0 <= v <= hw for v in record.cells
    )


def load_library(path: Optional[str] = None) -> Library:
    """
    Read the puzzle library. Records whose cells do not fit their block
    dimensions are dropped with a warning; a missing file is an empty library.
    """
    p = path or resolve_library_path()
    if not os.path.exists(p):
        return Library()
    with open(p, "r", encoding="utf-8") as f:
        raw = json.load(f)
    lib = Library.from_jsonable(raw)
    for rid, rec in list(lib.puzzles.items()):
        if not record_fits(rec):
            log.warning(
                "Dropping puzzle %s: %d cell(s) do not fit %dx%d blocks",
                rid, len(rec.cells), rec.h, rec.w,
            )
            lib.remove(rid)
    log.info("Loaded %d puzzle(s) from %s", len(lib.puzzles), p)
    return lib


def save_library(library: Library, path: Optional[str] = None) -> None:
    p = path or resolve_library_path()
    os.makedirs(os.path.dirname(os.path.abspath(p)), exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(library.to_jsonable(), f, ensure_ascii=False, indent=2)
    log.info("Saved %d puzzle(s) to %s", len(library.puzzles), p)
