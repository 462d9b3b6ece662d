"""Tests for console rendering."""

from pewlayout.core.config import SearchConfig
from pewlayout.layout.arrangements import find_all_arrangements
from pewlayout.layout.matrix import CANONICAL_STATES
from pewlayout.layout.moves import get_valid_moves
from pewlayout.layout.planner import plan_transition
from pewlayout.utils.display import LiveLogger, ProgressDisplay, StatusDisplay


OUTER = CANONICAL_STATES["outer_ring"]


class TestStatusDisplay:

    def test_matrix_rows_are_named(self, capsys):
        StatusDisplay.print_matrix(OUTER)
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["d0", "d1", "d2"]
        assert lines[3].split() == ["Outer", "2", "2", "2"]

    def test_arrangement_lists_positions(self, capsys):
        StatusDisplay.print_arrangement(1, find_all_arrangements((0, 0, 6, 2, 2, 2))[0])
        out = capsys.readouterr().out
        assert "#1" in out
        assert "pair on Outer Ring, Horizontal Diagonal" in out

    def test_move_line(self, capsys):
        StatusDisplay.print_move(1, get_valid_moves(OUTER)[0])
        out = capsys.readouterr().out
        assert "Move pews on horizontal diagonal inward" in out
        assert "0,0,0;2,0,0;0,2,2" in out

    def test_plan_reports_skipped_strategies(self, capsys):
        plan = plan_transition(OUTER, CANONICAL_STATES["diagonal_0"], SearchConfig(strategies=["teleport", "bfs"]))
        StatusDisplay.print_plan(plan)
        out = capsys.readouterr().out
        assert "Step 0: Initial arrangement" in out
        assert "Unknown strategies skipped: teleport" in out

    def test_fields_format_ratios(self, capsys):
        StatusDisplay.print_fields({"success_rate": 0.5, "mean_moves": 3.25, "solved": True}, "Survey")
        out = capsys.readouterr().out
        assert "50.0%" in out
        assert "3.250" in out
        assert "✅ True" in out


class TestProgressDisplay:

    def test_counts_solved_pairs(self, capsys):
        progress = ProgressDisplay(total_pairs=2)
        progress.update(1, True, "direct")
        progress.update(2, False)
        progress.finish()
        out = capsys.readouterr().out
        assert "2/2 pairs" in out
        assert "1 solved, 1 failed" in out


class TestLiveLogger:

    def test_quiet_logger_still_shows_errors(self, capsys):
        logger = LiveLogger(verbose=False)
        logger.log_info("hidden")
        logger.log_error("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out
