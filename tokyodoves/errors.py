"""Exceptions raised by tokyodoves."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .board import Board
    from .values import BoardValue, Ordering


class TokyoDovesError(Exception):
    """Base class of all errors of this package."""


class InvalidBoardError(TokyoDovesError, ValueError):
    """A board could not be built from the given positions, text or integer."""


class IllegalActionError(TokyoDovesError, ValueError):
    """An action is not legal on the board it was checked against."""


class ArgsValidationError(TokyoDovesError, ValueError):
    """Arguments of an analysis function were rejected before searching."""


class FinishedBoardError(ArgsValidationError):
    """The board belongs to a finished game (a boss is surrounded)."""

    def __init__(self, board: Board):
        super().__init__("board of finished game")
        self.board = board


class UnsupportedValueError(ArgsValidationError):
    """Only Win and Lose values can be searched for."""

    def __init__(self, value: BoardValue):
        super().__init__(f"{value} is not supported")
        self.value = value


class DrawJudgeError(ArgsValidationError):
    """Judge.DRAW cannot be analyzed."""

    def __init__(self):
        super().__init__("Judge.DRAW not supported")


class ValueMismatchError(TokyoDovesError):
    """
    The value of the board differs from the claimed value.

    `ordering` is GREATER if the true value is greater than the claim
    and LESS if it is less.
    """

    def __init__(self, ordering: Ordering):
        super().__init__(f"value of board is {ordering.name.lower()} than the claimed value")
        self.ordering = ordering
