"""
Game rules for Tokyo Doves.

GameRule collects the options that change how a game (and therefore an
analysis) proceeds. It is immutable; use the with_* helpers to derive
variants:

    rule = GameRule().with_is_remove_accepted(False).with_first_player(Color.GREEN)
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .board import Board, Color
from .errors import FinishedBoardError


class Judge(Enum):
    """Judgement of the winner when both bosses are surrounded by one action."""
    LAST_WINS = "last_wins"   # the player who performed the action wins
    NEXT_WINS = "next_wins"   # the player who would move next wins
    DRAW = "draw"             # draw game (not supported by the analysis)


@dataclass(frozen=True)
class GameRule:
    """Detailed rules for playing and analyzing games."""
    is_remove_accepted: bool = True
    first_player: Color = Color.RED
    suicide_atk_judge: Judge = Judge.NEXT_WINS
    initial_board: Board = field(default_factory=Board)

    def with_is_remove_accepted(self, is_remove_accepted: bool) -> GameRule:
        return replace(self, is_remove_accepted=is_remove_accepted)

    def with_first_player(self, first_player: Color) -> GameRule:
        return replace(self, first_player=first_player)

    def with_suicide_atk_judge(self, judge: Judge) -> GameRule:
        return replace(self, suicide_atk_judge=judge)

    def with_initial_board(self, initial_board: Board) -> GameRule:
        """Replace the initial board; boards of finished games are rejected."""
        if initial_board.is_finished():
            raise FinishedBoardError(initial_board)
        return replace(self, initial_board=initial_board)
