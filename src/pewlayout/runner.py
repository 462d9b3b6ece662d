"""
Transition survey runner for pewlayout.

Plans transitions between pairs of valid matrices, checks every returned path
move by move, and records which strategy solved each pair.
"""

import os
import time
from dataclasses import dataclass, field
from itertools import permutations
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from pewlayout.core import Config
from pewlayout.core.base import Matrix
from pewlayout.layout.matrix import all_valid_matrices
from pewlayout.layout.moves import SearchContext
from pewlayout.layout.occupancy import format_matrix
from pewlayout.layout.planner import plan_transition, verify_transition
from pewlayout.utils.logger import ExperimentLogger
from pewlayout.utils.display import ProgressDisplay, StatusDisplay, LiveLogger


@dataclass
class SurveySummary:
    total: int
    solved: int
    valid_paths: int
    success_rate: float
    path_validity_rate: float
    mean_moves: float
    max_moves: int
    by_strategy: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "solved": self.solved,
            "valid_paths": self.valid_paths,
            "success_rate": self.success_rate,
            "path_validity_rate": self.path_validity_rate,
            "mean_moves": self.mean_moves,
            "max_moves": self.max_moves,
            **{f"strategy_{name}": count for name, count in self.by_strategy.items()},
        }


def survey_pairs(limit: Optional[int] = None) -> List[Tuple[Matrix, Matrix]]:
    """Ordered pairs of distinct valid matrices, optionally truncated."""
    pairs = list(permutations(all_valid_matrices(), 2))
    if limit is not None:
        pairs = pairs[:limit]
    return pairs


def summarize_survey(records: Sequence[Dict[str, Any]]) -> SurveySummary:
    """Aggregate survey records into rates and path statistics."""
    total = len(records)
    solved = [r for r in records if r["success"]]
    valid = [r for r in solved if r["valid_path"]]
    moves = np.array([r["moves"] for r in solved], dtype=int)

    by_strategy: Dict[str, int] = {}
    for record in solved:
        by_strategy[record["strategy"]] = by_strategy.get(record["strategy"], 0) + 1

    return SurveySummary(
        total=total,
        solved=len(solved),
        valid_paths=len(valid),
        success_rate=len(solved) / total if total else 0.0,
        path_validity_rate=len(valid) / len(solved) if solved else 0.0,
        mean_moves=float(moves.mean()) if moves.size else 0.0,
        max_moves=int(moves.max()) if moves.size else 0,
        by_strategy=by_strategy,
    )


class SurveyRunner:
    """Runs the planner over many matrix pairs and logs the outcome."""

    def __init__(self, config: Config):
        self.config = config
        self.logger: Optional[ExperimentLogger] = None
        self.records: List[Dict[str, Any]] = []
        self.live_logger = LiveLogger(verbose=config.runner.verbose)

    def setup(self) -> None:
        """Create the run directory (deferred to avoid side effects on import)."""
        os.makedirs(self.config.runner.log_dir, exist_ok=True)
        self.logger = ExperimentLogger(
            log_dir=self.config.runner.log_dir,
            experiment_name=self.config.runner.experiment_name,
        )
        self.live_logger.log_info(f"Survey logs will be written to {self.logger.run_dir}")

    def run_pair(self, start: Matrix, goal: Matrix) -> Dict[str, Any]:
        """Plan one transition and describe the outcome."""
        context = SearchContext(config=self.config.search)
        began = time.time()
        plan = plan_transition(start, goal, context=context)
        elapsed = time.time() - began

        record = {
            "start": format_matrix(start),
            "goal": format_matrix(goal),
            "success": plan.success,
            "strategy": plan.strategy,
            "moves": len(plan.moves),
            "valid_path": plan.success and verify_transition(plan.steps, start, goal),
            "expanded": plan.expanded,
            "attempted": ",".join(plan.attempted),
            "elapsed": elapsed,
        }
        if not plan.success:
            record["error"] = plan.steps[0].description if plan.steps else plan.error.value
        return record

    def run_survey(self, pairs: Optional[Sequence[Tuple[Matrix, Matrix]]] = None,
                   limit: Optional[int] = None) -> SurveySummary:
        """
        Plan every pair and save logs and the results table.

        Args:
            pairs: Matrix pairs to survey; all ordered pairs when omitted
            limit: Maximum number of pairs taken from the default list

        Returns:
            Aggregated SurveySummary
        """
        if self.logger is None:
            self.setup()

        if pairs is None:
            pairs = survey_pairs(limit)

        verbose = self.config.runner.verbose
        progress = ProgressDisplay(total_pairs=len(pairs)) if verbose else None
        self.records = []

        for index, (start, goal) in enumerate(pairs, start=1):
            record = self.run_pair(start, goal)
            self.records.append(record)
            self.logger.log_record(index, record)
            if progress:
                progress.update(index, record["success"], record["strategy"])

        summary = summarize_survey(self.records)
        if progress:
            progress.finish()

        self.logger.save_logs()
        results_path = self.config.runner.results_path
        if not os.path.isabs(results_path):
            results_path = os.path.join(self.logger.run_dir, results_path)
        self.logger.save_results(self.records, results_path, self.config.runner.results_format)

        if verbose:
            StatusDisplay.print_fields(summary.to_dict(), "Survey Results")
        return summary
