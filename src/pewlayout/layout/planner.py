"""
Transition planner.

Finds a sequence of moves between two valid matrices. Strategies are plain
functions registered by name and tried in the configured order; all of them
share one ``SearchContext`` so ring directions committed by an earlier,
failed strategy still apply to later ones.
"""

import heapq
from collections import deque
from typing import List, Optional, Sequence

from pewlayout.core.base import (
    ErrorCode, Matrix, Move, TransitionPlan, TransitionStep,
)
from pewlayout.core.config import SearchConfig
from pewlayout.core.registry import STRATEGY_REGISTRY, register_strategy
from pewlayout.layout.matrix import CANONICAL_STATES, diagnose_matrix
from pewlayout.layout.moves import SearchContext, get_valid_moves, is_legal_transition
from pewlayout.layout.occupancy import (
    DIAGONAL_COUNT, PAIR, RING_COUNT, cell_distance, copy_matrix, matrix_key,
)


Path = List[Move]


def bfs_search(start: Matrix, goal: Matrix, context: SearchContext, max_depth: int) -> Optional[Path]:
    """Shortest move sequence of at most ``max_depth`` moves."""
    goal_key = matrix_key(goal)
    start_key = matrix_key(start)
    if start_key == goal_key:
        return []

    queue = deque([(start, [])])
    visited = {start_key}
    while queue:
        matrix, path = queue.popleft()
        if len(path) >= max_depth:
            continue
        for move in get_valid_moves(matrix, context):
            key = matrix_key(move.matrix)
            if key in visited:
                continue
            next_path = path + [move]
            if key == goal_key:
                return next_path
            visited.add(key)
            queue.append((move.matrix, next_path))
    return None


def astar_search(start: Matrix, goal: Matrix, context: SearchContext, max_depth: int) -> Optional[Path]:
    """A* with cell distance as the heuristic, bounded to ``max_depth`` moves."""
    goal_key = matrix_key(goal)
    counter = 0
    frontier = [(cell_distance(start, goal), counter, start, [])]
    closed = set()

    while frontier:
        _, _, matrix, path = heapq.heappop(frontier)
        key = matrix_key(matrix)
        if key == goal_key:
            return path
        if key in closed:
            continue
        closed.add(key)
        if len(path) >= max_depth:
            continue
        for move in get_valid_moves(matrix, context):
            if matrix_key(move.matrix) in closed:
                continue
            counter += 1
            steps = len(path) + 1
            heapq.heappush(frontier, (steps + cell_distance(move.matrix, goal), counter, move.matrix, path + [move]))
    return None


def select_canonical(goal: Sequence[Sequence[int]]) -> str:
    """
    Name of the canonical state used as a waypoint towards ``goal``.

    Exact match first, then the outer ring when it holds at least two pairs,
    otherwise the diagonal with the most occupied cells.
    """
    goal_key = matrix_key(goal)
    for name, state in CANONICAL_STATES.items():
        if matrix_key(state) == goal_key:
            return name

    if sum(goal[RING_COUNT - 1]) >= 2 * PAIR:
        return "outer_ring"

    counts = [sum(1 for r in range(RING_COUNT) if goal[r][d]) for d in range(DIAGONAL_COUNT)]
    best = max(range(DIAGONAL_COUNT), key=lambda d: (counts[d], -d))
    return f"diagonal_{best}"


@register_strategy("direct")
def direct_strategy(start: Matrix, goal: Matrix, context: SearchContext) -> Optional[Path]:
    """Greedy descent on cell distance, finished by a short BFS."""
    config = context.config
    goal_key = matrix_key(goal)
    current = start
    visited = {matrix_key(start)}
    path: Path = []

    for _ in range(config.greedy_max_steps):
        if matrix_key(current) == goal_key:
            return path
        if cell_distance(current, goal) <= config.greedy_finish_distance:
            tail = bfs_search(current, goal, context, config.finish_search_depth)
            return path + tail if tail is not None else None

        candidates = [m for m in get_valid_moves(current, context) if matrix_key(m.matrix) not in visited]
        if not candidates:
            return None
        best = min(candidates, key=lambda m: cell_distance(m.matrix, goal))
        path.append(best)
        current = best.matrix
        visited.add(matrix_key(current))

    return path if matrix_key(current) == goal_key else None


@register_strategy("astar")
def astar_strategy(start: Matrix, goal: Matrix, context: SearchContext) -> Optional[Path]:
    return astar_search(start, goal, context, context.config.astar_max_depth)


@register_strategy("bfs")
def bfs_strategy(start: Matrix, goal: Matrix, context: SearchContext) -> Optional[Path]:
    return bfs_search(start, goal, context, context.config.bfs_max_depth)


@register_strategy("via_canonical")
def via_canonical_strategy(start: Matrix, goal: Matrix, context: SearchContext) -> Optional[Path]:
    """Route through the canonical state nearest the goal."""
    waypoint = CANONICAL_STATES[select_canonical(goal)]
    depth = context.config.astar_max_depth

    first_leg = astar_search(start, waypoint, context, depth)
    if first_leg is None:
        return None
    second_leg = astar_search(waypoint, goal, context, depth)
    if second_leg is None:
        return None
    return first_leg + second_leg


def _error_plan(matrix, description: str, error: ErrorCode) -> TransitionPlan:
    shown = copy_matrix(matrix) if error != ErrorCode.STRUCTURAL_INVALID else None
    return TransitionPlan(steps=[TransitionStep(shown, description, error=error)], error=error)


def plan_transition(start, end, config: Optional[SearchConfig] = None,
                    context: Optional[SearchContext] = None) -> TransitionPlan:
    """
    Plan the moves transforming ``start`` into ``end``.

    Args:
        start: Valid occupancy matrix to start from
        end: Valid occupancy matrix to reach
        config: Search bounds and strategy order (defaults when omitted)
        context: Search context to use; it is reset before searching

    Returns:
        TransitionPlan whose steps begin with the start state. Invalid input
        or an exhausted search yields a single error step; identical
        matrices yield no steps.
    """
    for label, matrix in (("start", start), ("target", end)):
        report = diagnose_matrix(matrix)
        if not report.valid:
            return _error_plan(matrix, f"Invalid {label} matrix: {report.message}", report.error)

    if matrix_key(start) == matrix_key(end):
        return TransitionPlan(steps=[])

    if context is None:
        context = SearchContext(config=config or SearchConfig())
    elif config is not None:
        context.config = config
    context.reset()

    start_matrix = copy_matrix(start)
    end_matrix = copy_matrix(end)
    attempted = []
    skipped = []
    for name in context.config.strategies:
        strategy = STRATEGY_REGISTRY.get(name)
        if strategy is None:
            skipped.append(name)
            continue
        attempted.append(name)
        path = strategy(start_matrix, end_matrix, context)
        if path is None:
            continue
        steps = [TransitionStep(copy_matrix(start_matrix), "Initial arrangement")]
        steps.extend(TransitionStep(copy_matrix(move.matrix), move.description, move) for move in path)
        return TransitionPlan(steps=steps, strategy=name, expanded=context.expanded,
                              attempted=attempted, skipped=skipped)

    plan = _error_plan(start_matrix, "Could not find a path between these arrangements", ErrorCode.SEARCH_EXHAUSTED)
    plan.expanded = context.expanded
    plan.attempted = attempted
    plan.skipped = skipped
    return plan


def calculate_transition(start, end, config: Optional[SearchConfig] = None) -> List[TransitionStep]:
    """Step list from ``start`` to ``end``; see ``plan_transition``."""
    return plan_transition(start, end, config).steps


def verify_transition(steps: Sequence[TransitionStep], start, end) -> bool:
    """Check that steps run from start to end through legal moves only."""
    if not steps or any(step.is_error for step in steps):
        return False
    if matrix_key(steps[0].matrix) != matrix_key(start) or matrix_key(steps[-1].matrix) != matrix_key(end):
        return False
    return all(
        is_legal_transition(before.matrix, after.matrix)
        for before, after in zip(steps, steps[1:])
    )
