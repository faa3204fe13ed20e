"""
tokyodoves: Exact Game Value Search for Tokyo Doves

Tokyo Doves is a two-player board game on a floating 4x4 field where a
player loses when their boss dove gets surrounded. This package decides,
within a bounded look-ahead, whether the player to move can force a win or
is forced to lose, and which actions realize the outcome.

This package provides:
- BoardValue: Win(n) / Lose(n) / Unknown / Finished with their partial order
- Interval: bounds on a value that could not be determined exactly
- Board, Action, Color, Dove: the game itself
- GameRule, Judge: rule configuration
- Search functions: create_checkmate_tree, create_checkmate_tree_with_value,
  compare_board_value, evaluate_board, find_best_actions
- BoardValueTree: optimal lines returned by the checkmate-tree functions
- DoveAnalyst, AnalysisConfig: configured analysis with reports

Example usage:
    from tokyodoves import Board, Color, GameRule, evaluate_board

    board = Board.from_str(" B; a;TH y;b mM")
    interval = evaluate_board(board, Color.RED, 3, GameRule())
    print(f"Value: {interval}")
"""

__version__ = "0.3.0"
__author__ = "tokyodoves developers"

from .values import (
    BoardValue,
    BoardValueKind,
    Interval,
    Ordering,
)

from .board import (
    Action,
    ActionKind,
    Board,
    Color,
    Dove,
    Surrounded,
)

from .rules import (
    GameRule,
    Judge,
)

from .errors import (
    ArgsValidationError,
    DrawJudgeError,
    FinishedBoardError,
    IllegalActionError,
    InvalidBoardError,
    TokyoDovesError,
    UnsupportedValueError,
    ValueMismatchError,
)

from .tree import BoardValueTree

from .analysis import (
    NextBoardStatus,
    compare_board_value,
    create_checkmate_tree,
    create_checkmate_tree_with_value,
    evaluate_board,
    find_best_actions,
    iter_next_boards,
)

from .engine import (
    AnalysisConfig,
    AnalysisReport,
    DoveAnalyst,
)

__all__ = [
    # Values
    "BoardValue",
    "BoardValueKind",
    "Interval",
    "Ordering",
    # Board
    "Action",
    "ActionKind",
    "Board",
    "Color",
    "Dove",
    "Surrounded",
    # Rules
    "GameRule",
    "Judge",
    # Errors
    "ArgsValidationError",
    "DrawJudgeError",
    "FinishedBoardError",
    "IllegalActionError",
    "InvalidBoardError",
    "TokyoDovesError",
    "UnsupportedValueError",
    "ValueMismatchError",
    # Analysis
    "BoardValueTree",
    "NextBoardStatus",
    "compare_board_value",
    "create_checkmate_tree",
    "create_checkmate_tree_with_value",
    "evaluate_board",
    "find_best_actions",
    "iter_next_boards",
    # Engine
    "AnalysisConfig",
    "AnalysisReport",
    "DoveAnalyst",
]
