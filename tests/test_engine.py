"""
Tests for DoveAnalyst and its configuration.
"""

import logging

import pytest

from tokyodoves import (
    Action,
    AnalysisConfig,
    Board,
    BoardValue,
    Color,
    Dove,
    FinishedBoardError,
    GameRule,
    Interval,
    Ordering,
    ValueMismatchError,
)
from tokyodoves.engine import AnalysisReport, DoveAnalyst


RED, GREEN = Color.RED, Color.GREEN


class TestAnalysisConfig:
    """Tests for AnalysisConfig."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.depth == 3
        assert config.rule == GameRule()
        assert config.declare_about_to_end

    def test_negative_depth(self):
        with pytest.raises(ValueError):
            AnalysisConfig(depth=-1)

    def test_bad_rule(self):
        with pytest.raises(ValueError):
            AnalysisConfig(rule="next_wins")

    def test_with_depth(self):
        config = AnalysisConfig(depth=1)
        assert config.with_depth(5).depth == 5
        assert config.depth == 1


class TestGameRule:
    """Tests for GameRule."""

    def test_defaults(self):
        rule = GameRule()
        assert rule.is_remove_accepted
        assert rule.first_player is RED
        assert rule.initial_board == Board()

    def test_with_helpers(self):
        rule = GameRule().with_is_remove_accepted(False).with_first_player(GREEN)
        assert not rule.is_remove_accepted
        assert rule.first_player is GREEN
        assert GameRule().is_remove_accepted

    def test_finished_initial_board(self, finished_board):
        with pytest.raises(FinishedBoardError):
            GameRule().with_initial_board(finished_board)


class TestDoveAnalyst:
    """Tests for DoveAnalyst."""

    def test_analyze(self, mate_in_3):
        analyst = DoveAnalyst(AnalysisConfig(depth=3))
        report = analyst.analyze(mate_in_3, RED)
        assert report.is_decided
        assert report.value == BoardValue.win(3)
        assert report.best_actions == ["mate", "mate_b"]
        assert report.depth == 3
        assert report.think_time_ms >= 0
        assert "Win(3)" in report.summary()

    def test_undecided_report(self, quiet):
        report = DoveAnalyst(AnalysisConfig(depth=2)).analyze(quiet, RED)
        assert not report.is_decided
        assert report.value.is_unknown()
        assert report.interval == Interval(BoardValue.lose(4), BoardValue.win(3))

    def test_about_to_end_logged(self, mate_in_3, caplog):
        analyst = DoveAnalyst(AnalysisConfig(depth=3))
        with caplog.at_level(logging.INFO, logger="tokyodoves.engine"):
            analyst.analyze(mate_in_3, RED)
        assert "about to end" in caplog.text

    def test_about_to_end_silenced(self, mate_in_3, caplog):
        analyst = DoveAnalyst(AnalysisConfig(depth=3, declare_about_to_end=False))
        with caplog.at_level(logging.INFO, logger="tokyodoves.engine"):
            analyst.analyze(mate_in_3, RED)
        assert "about to end" not in caplog.text

    def test_summary_logged_at_debug(self, mate_in_3, caplog):
        analyst = DoveAnalyst(AnalysisConfig(depth=3))
        with caplog.at_level(logging.DEBUG, logger="tokyodoves.engine"):
            report = analyst.analyze(mate_in_3, RED)
        assert report.summary() in caplog.text

    def test_summary_not_built_above_debug(self, mate_in_3, caplog, monkeypatch):
        """Test the summary is only formatted when DEBUG is enabled."""
        calls = []
        original = AnalysisReport.summary
        monkeypatch.setattr(AnalysisReport, "summary", lambda self: calls.append(1) or original(self))
        analyst = DoveAnalyst(AnalysisConfig(depth=3))
        with caplog.at_level(logging.INFO, logger="tokyodoves.engine"):
            analyst.analyze(mate_in_3, RED)
        assert calls == []

    def test_defaults_to_initial_board(self):
        """Test the rule's initial board and first player are used."""
        analyst = DoveAnalyst(AnalysisConfig(depth=1))
        assert analyst.evaluate() == Interval(BoardValue.lose(2), BoardValue.win(3))

    def test_custom_initial_board(self, mate_in_1_board):
        rule = GameRule().with_initial_board(mate_in_1_board)
        analyst = DoveAnalyst(AnalysisConfig(depth=1, rule=rule))
        assert analyst.best_actions() == [Action.move(RED, Dove.T, (1, 0))]
        assert analyst.compare(BoardValue.MAX) is Ordering.EQUAL

    def test_checkmate_tree(self, mate_in_3):
        analyst = DoveAnalyst(AnalysisConfig(depth=3))
        assert analyst.checkmate_tree(mate_in_3, RED).value == BoardValue.win(3)
        guided = analyst.checkmate_tree(mate_in_3, RED, BoardValue.win(3))
        assert guided.actions() == ["mate", "mate_b"]
        with pytest.raises(ValueMismatchError):
            analyst.checkmate_tree(mate_in_3, RED, BoardValue.MAX)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
