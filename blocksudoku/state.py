from __future__ import annotations

from bisect import bisect_left, insort
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class StateEntry:
    rank: int
    pos: int
    candidates: int  # bitmask, bit v set => v still possible

    def values(self) -> List[int]:
        """Live candidate values, ascending."""
        out: List[int] = []
        cm = self.candidates
        while cm:
            lsb = cm & -cm
            out.append(lsb.bit_length() - 1)  # because bit is (1<<v)
            cm ^= lsb
        return out


class CandidateState:
    """
    Worklist of undetermined cells ordered by ascending rank.

    Ties are broken by position, which is the row-major order the entries
    were inserted in. `_keys` is the sorted (rank, pos) list; `_masks` maps a
    position to its candidate bitmask.
    """

    def __init__(self) -> None:
        self._keys: List[Tuple[int, int]] = []
        self._masks: Dict[int, int] = {}

    @classmethod
    def full(cls, cells: int, full_mask: int) -> "CandidateState":
        state = cls()
        rank = full_mask.bit_count()
        state._keys = [(rank, pos) for pos in range(cells)]
        state._masks = {pos: full_mask for pos in range(cells)}
        return state

    def clone(self) -> "CandidateState":
        other = CandidateState()
        other._keys = list(self._keys)
        other._masks = dict(self._masks)
        return other

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, pos: int) -> bool:
        return pos in self._masks

    def __iter__(self) -> Iterator[StateEntry]:
        for rank, pos in self._keys:
            yield StateEntry(rank, pos, self._masks[pos])

    def lookup(self, pos: int) -> Optional[StateEntry]:
        """Entry for `pos`, or None if the cell is already assigned."""
        mask = self._masks.get(pos)
        if mask is None:
            return None
        return StateEntry(mask.bit_count(), pos, mask)

    def is_live(self, pos: int, value: int) -> bool:
        mask = self._masks.get(pos)
        if mask is None or value <= 0:
            return False
        return bool(mask & (1 << value))

    def eliminate(self, pos: int, value: int) -> bool:
        if not self.is_live(pos, value):
            return False
        mask = self._masks[pos]
        old_key = (mask.bit_count(), pos)
        del self._keys[bisect_left(self._keys, old_key)]
        mask ^= 1 << value
        self._masks[pos] = mask
        insort(self._keys, (mask.bit_count(), pos))
        return True

    def remove(self, pos: int) -> None:
        mask = self._masks.pop(pos, None)
        if mask is None:
            return
        del self._keys[bisect_left(self._keys, (mask.bit_count(), pos))]

    def peek_front(self) -> Optional[StateEntry]:
        if not self._keys:
            return None
        rank, pos = self._keys[0]
        return StateEntry(rank, pos, self._masks[pos])

    def pop_front(self) -> StateEntry:
        """Remove and return the most constrained entry."""
        rank, pos = self._keys.pop(0)
        mask = self._masks.pop(pos)
        return StateEntry(rank, pos, mask)
