from .board import BoardParams, is_solved, refines, validate_board
from .models import InvalidBoardSize, ParseError, UniqueResult
from .search import find_all, find_one, find_some, find_unique, iter_solutions

__all__ = [
    "BoardParams",
    "InvalidBoardSize",
    "ParseError",
    "UniqueResult",
    "find_all",
    "find_one",
    "find_some",
    "find_unique",
    "is_solved",
    "iter_solutions",
    "refines",
    "validate_board",
]
