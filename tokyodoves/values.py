"""
Board Values for Tokyo Doves Analysis

A board value describes the "distance to decision" of a position seen from
the player to move:

- Win(n):   the player can force a win in exactly n turns (n odd)
- Lose(n):  the player is forced to lose within n turns (n even)
- Unknown:  the value was not determined within the search bound
- Finished: the game is already over (turn count zero)

The values are ordered as follows:

    Lose(2) < Lose(4) < Lose(6) < ... < Unknown < ... < Win(5) < Win(3) < Win(1)

Finished is only equal to itself and is never less or greater than any other
value, so BoardValue is partially ordered.

This module provides:
1. BoardValue and its kind (BoardValueKind)
2. Ordering, a three-way comparison result
3. Interval, a closed range of board values returned by evaluation
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Optional


class Ordering(IntEnum):
    """Three-way comparison result."""
    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        """Flip LESS and GREATER."""
        return Ordering(-self.value)

    @classmethod
    def of(cls, left: int, right: int) -> Ordering:
        """Compare two integers."""
        if left < right:
            return cls.LESS
        if left > right:
            return cls.GREATER
        return cls.EQUAL


class BoardValueKind(Enum):
    """Four kinds of BoardValue."""
    WIN = "Win"
    LOSE = "Lose"
    UNKNOWN = "Unknown"
    FINISHED = "Finished"

    def __str__(self) -> str:
        return self.value


# Rank of the kinds in the value order (Finished has none)
_KIND_RANK = {
    BoardValueKind.LOSE: 0,
    BoardValueKind.UNKNOWN: 1,
    BoardValueKind.WIN: 2,
}


@dataclass(frozen=True, order=False)
class BoardValue:
    """
    Value of a board from the perspective of the player to move.

    The whole value is a single optional turn count:
    None is Unknown, 0 is Finished, odd numbers are Win and
    even numbers (>= 2) are Lose.
    """
    _turns: Optional[int] = None

    MAX: ClassVar[BoardValue]
    MIN: ClassVar[BoardValue]

    def __post_init__(self):
        if self._turns is not None and self._turns < 0:
            raise ValueError(f"turn count must be non-negative, got {self._turns}")

    @classmethod
    def win(cls, turns: int) -> Optional[BoardValue]:
        """Create Win(turns), or None unless turns is odd and positive."""
        if turns > 0 and turns % 2 == 1:
            return cls(turns)
        return None

    @classmethod
    def lose(cls, turns: int) -> Optional[BoardValue]:
        """Create Lose(turns), or None unless turns is even and positive."""
        if turns > 0 and turns % 2 == 0:
            return cls(turns)
        return None

    @classmethod
    def unknown(cls) -> BoardValue:
        return cls(None)

    @classmethod
    def finished(cls) -> BoardValue:
        return cls(0)

    @classmethod
    def from_raw(cls, turns: Optional[int]) -> BoardValue:
        """Create a value from its raw turn count (None for Unknown)."""
        return cls(turns)

    @property
    def raw(self) -> Optional[int]:
        return self._turns

    @property
    def kind(self) -> BoardValueKind:
        if self._turns is None:
            return BoardValueKind.UNKNOWN
        if self._turns == 0:
            return BoardValueKind.FINISHED
        if self._turns % 2 == 1:
            return BoardValueKind.WIN
        return BoardValueKind.LOSE

    def try_unwrap(self) -> Optional[int]:
        """Turn count of Win or Lose, otherwise None."""
        if self._turns is not None and self._turns >= 1:
            return self._turns
        return None

    def unwrap(self) -> int:
        turns = self.try_unwrap()
        if turns is None:
            raise ValueError(f"{self} has no turn count")
        return turns

    def is_win(self) -> bool:
        return self.kind is BoardValueKind.WIN

    def is_lose(self) -> bool:
        return self.kind is BoardValueKind.LOSE

    def is_unknown(self) -> bool:
        return self.kind is BoardValueKind.UNKNOWN

    def is_finished(self) -> bool:
        return self.kind is BoardValueKind.FINISHED

    def increment(self) -> BoardValue:
        """
        Next value of the series below, seen from the previous player.

            Unknown -> Unknown
            Finished -> Win(1) -> Lose(2) -> Win(3) -> Lose(4) -> ...
        """
        if self._turns is None:
            return self
        return BoardValue(self._turns + 1)

    def try_decrement(self) -> Optional[BoardValue]:
        """
        Inverse of increment.

            Unknown -> Unknown
            ... -> Lose(4) -> Win(3) -> Lose(2) -> Win(1) -> Finished

        Returns None for Finished.
        """
        if self._turns is None:
            return self
        if self._turns == 0:
            return None
        return BoardValue(self._turns - 1)

    def decrement(self) -> BoardValue:
        """Same as try_decrement but raises on Finished."""
        value = self.try_decrement()
        if value is None:
            raise ValueError("Finished cannot be decremented")
        return value

    def partial_cmp(self, other: BoardValue) -> Optional[Ordering]:
        """Compare two values; None if they are incomparable."""
        left_kind = self.kind
        right_kind = other.kind

        if left_kind is BoardValueKind.FINISHED or right_kind is BoardValueKind.FINISHED:
            return Ordering.EQUAL if left_kind is right_kind else None

        if left_kind is not right_kind or left_kind is BoardValueKind.UNKNOWN:
            return Ordering.of(_KIND_RANK[left_kind], _KIND_RANK[right_kind])

        # Same kind, Win or Lose
        if left_kind is BoardValueKind.LOSE:
            return Ordering.of(self._turns, other._turns)
        return Ordering.of(other._turns, self._turns)

    def __lt__(self, other: BoardValue) -> bool:
        return self.partial_cmp(other) is Ordering.LESS

    def __le__(self, other: BoardValue) -> bool:
        return self.partial_cmp(other) in (Ordering.LESS, Ordering.EQUAL)

    def __gt__(self, other: BoardValue) -> bool:
        return self.partial_cmp(other) is Ordering.GREATER

    def __ge__(self, other: BoardValue) -> bool:
        return self.partial_cmp(other) in (Ordering.GREATER, Ordering.EQUAL)

    def __str__(self) -> str:
        kind = self.kind
        if kind in (BoardValueKind.UNKNOWN, BoardValueKind.FINISHED):
            return str(kind)
        return f"{kind}({self._turns})"

    def __repr__(self) -> str:
        return f"BoardValue.{self}"


BoardValue.MAX = BoardValue(1)
BoardValue.MIN = BoardValue(2)


@dataclass(frozen=True)
class Interval:
    """Closed interval [left, right] between two BoardValues."""
    left: BoardValue
    right: BoardValue

    def __post_init__(self):
        if self.left.is_finished() or self.right.is_finished():
            raise ValueError("Finished cannot bound an interval")
        if not self.left <= self.right:
            raise ValueError(f"empty interval: {self.left} > {self.right}")

    @classmethod
    def exact(cls, value: BoardValue) -> Interval:
        return cls(value, value)

    def contains(self, item: BoardValue) -> bool:
        return self.left <= item <= self.right

    def __contains__(self, item: BoardValue) -> bool:
        return self.contains(item)

    def single(self) -> Optional[BoardValue]:
        """The value itself if the interval is a single point."""
        if self.left == self.right:
            return self.left
        return None

    def __str__(self) -> str:
        return f"[{self.left}, {self.right}]"


if __name__ == "__main__":
    print("=== Tokyo Doves: Board Values ===\n")

    values = [
        BoardValue.lose(2), BoardValue.lose(6), BoardValue.unknown(),
        BoardValue.win(7), BoardValue.win(3), BoardValue.MAX,
    ]
    for smaller, larger in zip(values, values[1:]):
        print(f"{smaller} < {larger}: {smaller < larger}")

    finished = BoardValue.finished()
    print(f"\n{finished} < Unknown: {finished < BoardValue.unknown()}")
    print(f"{finished} > Unknown: {finished > BoardValue.unknown()}")
    print(f"{finished}.increment() = {finished.increment()}")
