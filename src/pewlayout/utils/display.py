"""
Console rendering for pewlayout: matrices, arrangements, moves, plans and
survey progress.
"""

import time
from typing import Any, Dict, Optional, Sequence
from datetime import datetime

from pewlayout.core.base import Arrangement, Move, TransitionPlan
from pewlayout.layout.occupancy import (
    DIAGONAL_COUNT, RING_NAMES, arrangement_cells, arrangement_to_matrix, format_matrix,
    get_position_name,
)


class ProgressDisplay:
    """Single-line progress for a transition survey."""

    def __init__(self, total_pairs: int):
        self.total_pairs = max(total_pairs, 1)
        self.solved = 0
        self.start_time = time.time()

    def update(self, done: int, solved: bool, strategy: Optional[str] = None):
        """Redraw after ``done`` pairs; ``solved`` is the outcome of the last one."""
        if solved:
            self.solved += 1
        fraction = min(done / self.total_pairs, 1.0)
        filled = int(30 * fraction)
        bar = "█" * filled + "░" * (30 - filled)

        line = (
            f"\r⏳ [{bar}] {done}/{self.total_pairs} pairs "
            f"| solved {self.solved} | {self._elapsed()}"
        )
        if strategy:
            line += f" | {strategy}"
        print(line, end="", flush=True)

    def finish(self):
        failed = self.total_pairs - self.solved
        icon = "✅" if failed == 0 else "❌"
        print(f"\n{icon} Survey done in {self._elapsed()}: {self.solved} solved, {failed} failed")

    def _elapsed(self) -> str:
        seconds = time.time() - self.start_time
        if seconds < 60:
            return f"{seconds:.1f}s"
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"


class StatusDisplay:
    """Formatted console output."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_fields(fields: Dict[str, Any], title: str):
        """Key/value block; ratios in [0, 1] print as percentages."""
        StatusDisplay.print_section(title)
        for key, value in fields.items():
            if isinstance(value, bool):
                value = f"{'✅' if value else '❌'} {value}"
            elif isinstance(value, float):
                value = f"{value:.1%}" if 0 <= value <= 1 else f"{value:.3f}"
            print(f"  {key:<24} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info"):
        icons = {"info": "ℹ️", "success": "✅", "warning": "⚠️", "error": "❌"}
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icons.get(status, 'ℹ️')} [{timestamp}] {message}")

    @staticmethod
    def print_matrix(matrix: Sequence[Sequence[int]]):
        """Ring-by-diagonal grid, one ring per line."""
        print(f"  {'':<8} " + " ".join(f"d{d}" for d in range(DIAGONAL_COUNT)))
        for ring, row in enumerate(matrix):
            print(f"  {RING_NAMES[ring]:<8} " + " ".join(f"{v:>2}" for v in row))

    @staticmethod
    def print_arrangement(number: int, arrangement: Arrangement):
        """Occupied positions of one arrangement and its matrix."""
        print(f"\n  #{number}")
        for ring, diagonal in sorted(arrangement_cells(arrangement)):
            print(f"    pair on {get_position_name(ring, diagonal)}")
        StatusDisplay.print_matrix(arrangement_to_matrix(arrangement))

    @staticmethod
    def print_move(number: int, move: Move):
        print(f"  {number:2d}. {move.description:<64} → {format_matrix(move.matrix)}")

    @staticmethod
    def print_plan(plan: TransitionPlan):
        """Strategy summary followed by every step with its matrix."""
        StatusDisplay.print_fields({
            "Strategy": plan.strategy,
            "Moves": len(plan.moves),
            "States Expanded": plan.expanded,
            "Strategies Tried": ", ".join(plan.attempted),
        }, "Plan")
        if plan.skipped:
            print(f"  Unknown strategies skipped: {', '.join(plan.skipped)}")
        for number, step in enumerate(plan.steps):
            StatusDisplay.print_section(f"Step {number}: {step.description}")
            StatusDisplay.print_matrix(step.matrix)


class LiveLogger:
    """Timestamped status lines; errors are always shown."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_result(self, message: str, success: bool = True):
        if self.verbose:
            StatusDisplay.print_status(message, "success" if success else "error")

    def log_info(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        StatusDisplay.print_status(message, "error")
