"""
Exact Board-Value Search for Tokyo Doves

Every function here answers a question about the value of a board
(see tokyodoves.values) by an exhaustive negamax search:

- create_checkmate_tree:            optimal lines up to a fixed depth
- create_checkmate_tree_with_value: optimal lines for a claimed value
- compare_board_value:              true value vs. a claimed value
- evaluate_board:                   iterative deepening, returns an Interval
- find_best_actions:                actions consistent with optimal play

All of them share the move outcome classifier iter_next_boards, which labels
each legal action by its immediate result: Win (the opponent's boss gets
surrounded), Lose (the mover's own boss does) or Unknown (game continues).

The search is single-threaded and keeps no state between calls; the only
bound on the work is the depth (or the claimed value) given by the caller.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from .board import Action, Board, Color, Surrounded
from .errors import (
    DrawJudgeError,
    FinishedBoardError,
    UnsupportedValueError,
    ValueMismatchError,
)
from .rules import GameRule, Judge
from .tree import BoardValueTree
from .values import BoardValue, Interval, Ordering


logger = logging.getLogger(__name__)


class NextBoardStatus(Enum):
    """Immediate outcome of an action from the mover's perspective."""
    WIN = "win"
    LOSE = "lose"
    UNKNOWN = "unknown"


def iter_next_boards(
    board: Board,
    player: Color,
    rule: GameRule,
) -> Iterator[Tuple[Action, Board, NextBoardStatus]]:
    """
    Yield (action, next_board, status) for every legal action of `player`.

    The generator is lazy and one-shot; call again to restart it.
    """
    judge = rule.suicide_atk_judge
    if judge is Judge.DRAW:
        raise ValueError("Judge.DRAW cannot classify actions")
    wins_if_both = judge is Judge.LAST_WINS
    own = Surrounded.of(player)
    opponent = Surrounded.of(player.toggle())

    for action in board.legal_actions(player, True, True, rule.is_remove_accepted):
        next_board = board.perform(action)
        status = next_board.surrounded_status()

        if status == Surrounded.BOTH:
            outcome = NextBoardStatus.WIN if wins_if_both else NextBoardStatus.LOSE
        elif status == opponent:
            outcome = NextBoardStatus.WIN
        elif status == own:
            outcome = NextBoardStatus.LOSE
        else:
            outcome = NextBoardStatus.UNKNOWN
        yield action, next_board, outcome


def _validate_args(board: Board, value: BoardValue, rule: GameRule) -> None:
    if board.surrounded_status() != Surrounded.NONE:
        raise FinishedBoardError(board)
    if value.is_finished() or value.is_unknown():
        raise UnsupportedValueError(value)
    if rule.suicide_atk_judge not in (Judge.NEXT_WINS, Judge.LAST_WINS):
        raise DrawJudgeError()


def _validate_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"search depth must be non-negative, got {depth}")


# ----------------------------------------------------------------------
#  Full checkmate tree
# ----------------------------------------------------------------------
def create_checkmate_tree(
    board: Board,
    player: Color,
    max_depth: int,
    rule: GameRule,
) -> BoardValueTree:
    """
    Create a BoardValueTree describing the routes to the end of the game.

    Once the value of a node is determined, edges whose values are not
    the "next" value are pruned:

        ... -> Win(5) -> Lose(4) -> Win(3) -> Lose(2) -> Win(1)

    A node valued Win(1) becomes a leaf. If the value of `board` is already
    known, create_checkmate_tree_with_value is much faster.

    Raises:
        FinishedBoardError: `board` is of a finished game
        DrawJudgeError: `rule.suicide_atk_judge` is Judge.DRAW
    """
    _validate_args(board, BoardValue.MAX, rule)
    _validate_depth(max_depth)
    tree = _create_checkmate_tree(board, player, max_depth, rule)
    logger.debug("checkmate tree of %r (depth %d): %s", board, max_depth, tree.value)
    return tree


def _create_checkmate_tree(
    board: Board,
    player: Color,
    max_depth: int,
    rule: GameRule,
) -> BoardValueTree:
    if max_depth == 0:
        return BoardValueTree(board, player)

    value = BoardValue.MIN
    children: Dict[Action, BoardValueTree] = {}

    for action, next_board, status in iter_next_boards(board, player, rule):
        if status is NextBoardStatus.WIN:
            return BoardValueTree(board, player, BoardValue.MAX)
        if status is NextBoardStatus.LOSE:
            continue

        child = _create_checkmate_tree(next_board, player.toggle(), max_depth - 1, rule)
        child_value = child.value.increment()
        if child_value < value:
            continue
        if child_value > value:
            value = child_value
            children = {}
        children[action] = child

    return BoardValueTree(board, player, value, children)


# ----------------------------------------------------------------------
#  Value-guided checkmate tree
# ----------------------------------------------------------------------
def create_checkmate_tree_with_value(
    board: Board,
    value: BoardValue,
    player: Color,
    rule: GameRule,
) -> BoardValueTree:
    """
    Create a BoardValueTree for a board whose value is known in advance.

    It returns the same kind of tree as create_checkmate_tree but searches
    only the lines that can realize `value`, which makes it much faster.

    Raises:
        FinishedBoardError: `board` is of a finished game
        UnsupportedValueError: `value` is Unknown or Finished
        DrawJudgeError: `rule.suicide_atk_judge` is Judge.DRAW
        ValueMismatchError: the value of `board` differs from `value`;
            its `ordering` tells whether the true value is GREATER or LESS
    """
    _validate_args(board, value, rule)
    tree, ordering = _create_checkmate_tree_with_value(board, value, player, rule)
    if ordering is not Ordering.EQUAL:
        logger.debug("claimed %s for %r, true value is %s", value, board, ordering.name)
        raise ValueMismatchError(ordering)
    return tree


def _create_checkmate_tree_with_value(
    board: Board,
    value: BoardValue,
    player: Color,
    rule: GameRule,
) -> Tuple[BoardValueTree, Ordering]:
    cmp = Ordering.LESS
    children: Dict[Action, BoardValueTree] = {}

    for action, next_board, status in iter_next_boards(board, player, rule):
        if status is NextBoardStatus.WIN:
            if value == BoardValue.MAX:
                return BoardValueTree(board, player, value), Ordering.EQUAL
            return BoardValueTree(board, player), Ordering.GREATER
        if status is NextBoardStatus.LOSE:
            continue
        if value == BoardValue.MAX:
            continue

        child, child_cmp = _create_checkmate_tree_with_value(
            next_board, value.decrement(), player.toggle(), rule
        )
        if child_cmp is Ordering.LESS:
            return BoardValueTree(board, player), Ordering.GREATER
        if child_cmp is Ordering.EQUAL:
            children[action] = child
        cmp = max(cmp, child_cmp.reverse())

    if cmp is not Ordering.EQUAL:
        return BoardValueTree(board, player), cmp
    return BoardValueTree(board, player, value, children), cmp


# ----------------------------------------------------------------------
#  Comparison and evaluation
# ----------------------------------------------------------------------
def compare_board_value(
    board: Board,
    value: BoardValue,
    player: Color,
    rule: GameRule,
) -> Ordering:
    """
    Compare the value of `board` with `value`.

    Returns GREATER if the value of `board` is greater than `value`,
    EQUAL if they are equal and LESS if it is less.

    Raises:
        FinishedBoardError: `board` is of a finished game
        UnsupportedValueError: `value` is Unknown or Finished
        DrawJudgeError: `rule.suicide_atk_judge` is Judge.DRAW
    """
    _validate_args(board, value, rule)
    ordering = _compare_board_value(board, value, player, rule)
    logger.debug("value of %r compared to %s: %s", board, value, ordering.name)
    return ordering


def _compare_board_value(
    board: Board,
    value: BoardValue,
    player: Color,
    rule: GameRule,
) -> Ordering:
    cmp = Ordering.LESS
    for _, next_board, status in iter_next_boards(board, player, rule):
        if status is NextBoardStatus.WIN:
            return Ordering.EQUAL if value == BoardValue.MAX else Ordering.GREATER
        if status is NextBoardStatus.LOSE:
            continue
        if value == BoardValue.MAX:
            continue

        next_cmp = _compare_board_value(next_board, value.decrement(), player.toggle(), rule)
        if next_cmp is Ordering.LESS:
            return Ordering.GREATER
        cmp = max(cmp, next_cmp.reverse())
    return cmp


def evaluate_board(
    board: Board,
    player: Color,
    search_depth: int,
    rule: GameRule,
) -> Interval:
    """
    Calculate the value of `board` by searching `search_depth` turns ahead.

    The result is an Interval: a single point [v, v] when the value was
    determined, otherwise the range the value may still take beyond the
    search horizon.

    Raises:
        FinishedBoardError: `board` is of a finished game
        DrawJudgeError: `rule.suicide_atk_judge` is Judge.DRAW
    """
    _validate_args(board, BoardValue.MAX, rule)
    _validate_depth(search_depth)
    interval = _evaluate_board(board, player, search_depth, rule)
    logger.debug("evaluated %r to depth %d: %s", board, search_depth, interval)
    return interval


def _evaluate_board(
    board: Board,
    player: Color,
    search_depth: int,
    rule: GameRule,
) -> Interval:
    for depth in range(1, search_depth + 1):
        value = BoardValue.from_raw(depth)
        if _compare_board_value(board, value, player, rule) is Ordering.EQUAL:
            return Interval.exact(value)

    if search_depth % 2 == 0:
        left_turns, right_turns = search_depth + 2, search_depth + 1
    else:
        left_turns, right_turns = search_depth + 1, search_depth + 2
    return Interval(BoardValue.from_raw(left_turns), BoardValue.from_raw(right_turns))


# ----------------------------------------------------------------------
#  Best actions
# ----------------------------------------------------------------------
def find_best_actions(
    board: Board,
    player: Color,
    search_depth: int,
    rule: GameRule,
) -> List[Action]:
    """
    Collect the actions consistent with optimal play.

    With search_depth == 0 nothing is known and every legal action is
    returned. The order follows Board.legal_actions.

    Raises:
        FinishedBoardError: `board` is of a finished game
        DrawJudgeError: `rule.suicide_atk_judge` is Judge.DRAW
    """
    _validate_args(board, BoardValue.MAX, rule)
    _validate_depth(search_depth)
    actions = _find_best_actions(board, player, search_depth, rule)
    logger.debug("%d best actions for %s on %r", len(actions), player, board)
    return actions


def _find_best_actions(
    board: Board,
    player: Color,
    search_depth: int,
    rule: GameRule,
) -> List[Action]:
    if search_depth == 0:
        return board.legal_actions(player, True, True, rule.is_remove_accepted)

    interval = _evaluate_board(board, player, search_depth, rule)
    value = interval.single() or BoardValue.unknown()

    actions = []
    for action, next_board, status in iter_next_boards(board, player, rule):
        if status is NextBoardStatus.WIN:
            if value != BoardValue.MAX:
                raise RuntimeError(f"immediate win found but the board was evaluated {value}")
            actions.append(action)
            continue
        if status is NextBoardStatus.LOSE:
            continue
        if value == BoardValue.MAX:
            continue

        if value.is_unknown():
            # The opponent must not be better off than the worst case allows
            bound = interval.left.decrement()
            if _compare_board_value(next_board, bound, player.toggle(), rule) is not Ordering.GREATER:
                actions.append(action)
        elif _compare_board_value(next_board, value.decrement(), player.toggle(), rule) is Ordering.EQUAL:
            actions.append(action)
    return actions
