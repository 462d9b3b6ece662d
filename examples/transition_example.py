#!/usr/bin/env python3
"""A quick demonstration of pewlayout: arrangements, one transition and a small survey."""
import sys

from pewlayout import (
    Config, SurveyRunner, find_all_arrangements, generate_default_matrix, plan_transition,
)
from pewlayout.layout.occupancy import get_position_name


def show_arrangements():
    """Print every arrangement of the fully spread vector."""
    vector = (2, 2, 2, 2, 2, 2)
    arrangements = find_all_arrangements(vector)
    print(f"\nVector {vector} has {len(arrangements)} arrangements:")
    for number, arrangement in enumerate(arrangements, start=1):
        cells = sorted({(ring, diagonal) for ring, diagonal, _ in arrangement})
        print(f"  #{number}: " + " | ".join(get_position_name(r, d) for r, d in cells))


def show_transition():
    """Plan the move from the default layout to a single diagonal."""
    start = generate_default_matrix()
    goal = [[2, 0, 0], [2, 0, 0], [2, 0, 0]]
    plan = plan_transition(start, goal)

    print("\n" + "[Transition]".center(40, "-"))
    print(f"  Strategy : {plan.strategy}")
    print(f"  Moves    : {len(plan.moves)}")
    for step in plan.steps:
        print(f"  {step.description:<60} {step.matrix}")
    return plan.success


def main():
    """Main function to run the pewlayout demo."""
    print("\n" + " pewlayout Quick Test ".center(80, "="))

    show_arrangements()
    if not show_transition():
        print("❌ Transition planning failed")
        return 1

    config = Config()
    config.runner.experiment_name = "quick_survey"
    config.runner.verbose = False

    print("\n[>] Running a small transition survey...")
    runner = SurveyRunner(config)
    summary = runner.run_survey(limit=50)

    print("\n" + "[Final Summary]".center(80, "="))
    print(f"  Solved       : {summary.solved}/{summary.total}")
    print(f"  Mean moves   : {summary.mean_moves:.2f}")
    print(f"  Log files saved to: {runner.logger.run_dir}")
    print("=" * 80)

    return 0 if summary.solved == summary.total else 1


if __name__ == "__main__":
    sys.exit(main())
