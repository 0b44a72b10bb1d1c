from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

Grid = List[int]


class InvalidBoardSize(ValueError):
    """Grid length does not match hw*hw for the given block dimensions."""


class ParseError(ValueError):
    pass


class InvariantViolation(AssertionError):
    pass


STATUS_NONE = "none"
STATUS_UNIQUE = "unique"
STATUS_MULTIPLE = "multiple"


@dataclass(frozen=True)
class UniqueResult:
    status: str                      # "none" | "unique" | "multiple"
    solutions: Tuple[Tuple[int, ...], ...] = ()  # 0, 1 or 2 grids

    @property
    def first(self) -> Optional[Grid]:
        return list(self.solutions[0]) if self.solutions else None

    @property
    def second(self) -> Optional[Grid]:
        return list(self.solutions[1]) if len(self.solutions) > 1 else None

    @staticmethod
    def none() -> "UniqueResult":
        return UniqueResult(STATUS_NONE)

    @staticmethod
    def unique(grid: Grid) -> "UniqueResult":
        return UniqueResult(STATUS_UNIQUE, (tuple(grid),))

    @staticmethod
    def multiple(first: Grid, second: Grid) -> "UniqueResult":
        if list(first) == list(second):
            raise ValueError("multiple() needs two distinct grids")
        return UniqueResult(STATUS_MULTIPLE, (tuple(first), tuple(second)))


@dataclass
class PuzzleRecord:
    id: str
    name: str
    h: int
    w: int
    cells: List[int] = field(default_factory=list)  # flat, row-major
    note: str = ""


@dataclass
class Library:
    puzzles: Dict[str, PuzzleRecord] = field(default_factory=dict)

    def add(self, record: PuzzleRecord) -> None:
        self.puzzles[record.id] = record

    def remove(self, record_id: str) -> None:
        self.puzzles.pop(record_id, None)

    def to_jsonable(self) -> dict:
        return {"puzzles": {k: asdict(v) for k, v in self.puzzles.items()}}

    @staticmethod
    def from_jsonable(raw: dict) -> "Library":
        lib = Library()
        lib.puzzles = {k: PuzzleRecord(**v) for k, v in raw.get("puzzles", {}).items()}
        return lib
