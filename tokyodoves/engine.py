"""
Tokyo Doves Analyst

Bundles the search functions of tokyodoves.analysis behind a configured
object, the way a game engine is used:

1. AnalysisConfig holds the search depth and the game rule
2. DoveAnalyst runs the analysis of a board for the player to move
3. AnalysisReport collects what was found (value interval, best actions, time)

Example:
    analyst = DoveAnalyst(AnalysisConfig(depth=3))
    report = analyst.analyze(Board.from_str(" B; a;TH y;b mM"), Color.RED)
    print(report.value, [str(a) for a in report.best_actions])
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .analysis import (
    compare_board_value,
    create_checkmate_tree,
    create_checkmate_tree_with_value,
    evaluate_board,
    find_best_actions,
)
from .board import Action, Board, Color
from .rules import GameRule
from .tree import BoardValueTree
from .values import BoardValue, Interval, Ordering


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for DoveAnalyst."""
    depth: int = 3
    rule: GameRule = field(default_factory=GameRule)

    # Log at INFO level when the value of a board is decided
    declare_about_to_end: bool = True

    def __post_init__(self):
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")
        if not isinstance(self.rule, GameRule):
            raise ValueError(f"rule must be a GameRule, got {type(self.rule).__name__}")

    def with_depth(self, depth: int) -> AnalysisConfig:
        return replace(self, depth=depth)


@dataclass
class AnalysisReport:
    """Result of DoveAnalyst.analyze."""
    player: Color
    interval: Interval
    best_actions: List[Action]
    depth: int
    think_time_ms: int

    @property
    def value(self) -> BoardValue:
        """Exact value if it was decided, otherwise Unknown."""
        return self.interval.single() or BoardValue.unknown()

    @property
    def is_decided(self) -> bool:
        return self.interval.single() is not None

    def summary(self) -> str:
        actions = ", ".join(str(a) for a in self.best_actions[:5])
        if len(self.best_actions) > 5:
            actions += f", ... ({len(self.best_actions)} in total)"
        return (
            f"{self.player} to move: value {self.interval} at depth {self.depth} "
            f"in {self.think_time_ms} ms; best: {actions}"
        )


class DoveAnalyst:
    """
    Analyzes Tokyo Doves positions with the exact search.

    Boards and players default to the initial board and the first player
    of the configured rule.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    @property
    def rule(self) -> GameRule:
        return self.config.rule

    def _resolve(self, board: Optional[Board], player: Optional[Color]):
        board = board if board is not None else self.rule.initial_board
        player = player if player is not None else self.rule.first_player
        return board, player

    def evaluate(self, board: Optional[Board] = None, player: Optional[Color] = None) -> Interval:
        board, player = self._resolve(board, player)
        return evaluate_board(board, player, self.config.depth, self.rule)

    def best_actions(self, board: Optional[Board] = None, player: Optional[Color] = None) -> List[Action]:
        board, player = self._resolve(board, player)
        return find_best_actions(board, player, self.config.depth, self.rule)

    def compare(self, value: BoardValue, board: Optional[Board] = None, player: Optional[Color] = None) -> Ordering:
        board, player = self._resolve(board, player)
        return compare_board_value(board, value, player, self.rule)

    def analyze(self, board: Optional[Board] = None, player: Optional[Color] = None) -> AnalysisReport:
        """Evaluate the board and collect the best actions."""
        board, player = self._resolve(board, player)
        start_time = time.perf_counter()

        interval = evaluate_board(board, player, self.config.depth, self.rule)
        actions = find_best_actions(board, player, self.config.depth, self.rule)

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        report = AnalysisReport(
            player=player,
            interval=interval,
            best_actions=actions,
            depth=self.config.depth,
            think_time_ms=elapsed_ms,
        )

        if self.config.declare_about_to_end and report.is_decided:
            logger.info("This game is about to end: value=%s for %s", report.value, player)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", report.summary())
        return report

    def checkmate_tree(
        self,
        board: Optional[Board] = None,
        player: Optional[Color] = None,
        value: Optional[BoardValue] = None,
    ) -> BoardValueTree:
        """
        Checkmate tree of the board.

        With `value`, the faster value-guided search is used and
        ValueMismatchError is raised if the claim is wrong;
        otherwise the tree is searched to the configured depth.
        """
        board, player = self._resolve(board, player)
        if value is not None:
            return create_checkmate_tree_with_value(board, value, player, self.rule)
        return create_checkmate_tree(board, player, self.config.depth, self.rule)
