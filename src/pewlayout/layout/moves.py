"""
Move generator.

A move is either a rotation of every pew on one ring by the same number of
slots, or a radial shift of every pew on one diagonal by one ring. Only moves
that land on another valid matrix are produced. Rotation directions are
remembered per ring in a ``SearchContext`` so a transition never reverses a
ring's spin.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from pewlayout.core.base import (
    Matrix, Move, MoveDirection, MoveKind, PewMotion,
)
from pewlayout.core.config import SearchConfig
from pewlayout.layout import geometry
from pewlayout.layout.matrix import is_valid_matrix
from pewlayout.layout.occupancy import (
    DIAGONAL_COUNT, DIAGONAL_NAMES, PAIR, RING_COUNT, RING_NAMES,
    copy_matrix, matrix_key,
)


@dataclass
class SearchContext:
    """State shared by every search made for one transition."""
    config: SearchConfig = field(default_factory=SearchConfig)
    ring_directions: Dict[int, MoveDirection] = field(default_factory=dict)
    expanded: int = 0

    def reset(self):
        self.ring_directions.clear()
        self.expanded = 0

    def preferred_direction(self, ring: int) -> Optional[MoveDirection]:
        if not self.config.direction_consistency:
            return None
        return self.ring_directions.get(ring)

    def remember_direction(self, ring: int, direction: MoveDirection):
        if self.config.direction_consistency:
            self.ring_directions.setdefault(ring, direction)


def rotation_direction(offset: int, preferred: Optional[MoveDirection] = None) -> Tuple[MoveDirection, int]:
    """
    Direction and step count for moving a ring ``offset`` diagonal slots.

    Clockwise needs ``offset`` steps and counterclockwise ``3 - offset``;
    the shorter one wins unless the ring already has a direction.
    """
    clockwise_steps = offset % DIAGONAL_COUNT
    counter_steps = (DIAGONAL_COUNT - clockwise_steps) % DIAGONAL_COUNT
    if preferred == MoveDirection.CLOCKWISE:
        return MoveDirection.CLOCKWISE, clockwise_steps
    if preferred == MoveDirection.COUNTERCLOCKWISE:
        return MoveDirection.COUNTERCLOCKWISE, counter_steps
    if clockwise_steps <= counter_steps:
        return MoveDirection.CLOCKWISE, clockwise_steps
    return MoveDirection.COUNTERCLOCKWISE, counter_steps


def rotate_ring(matrix: Sequence[Sequence[int]], ring: int, offset: int) -> Matrix:
    """Shift every pair on ``ring`` forward by ``offset`` diagonals."""
    rotated = copy_matrix(matrix)
    row = matrix[ring]
    for d in range(DIAGONAL_COUNT):
        rotated[ring][(d + offset) % DIAGONAL_COUNT] = row[d]
    return rotated


def shift_diagonal(matrix: Sequence[Sequence[int]], diagonal: int, delta: int) -> Matrix:
    """Move every pair on ``diagonal`` by ``delta`` rings, clamped, collapsing duplicates."""
    rings = [r for r in range(RING_COUNT) if matrix[r][diagonal]]
    shifted_rings = {min(max(r + delta, 0), RING_COUNT - 1) for r in rings}
    shifted = copy_matrix(matrix)
    for r in range(RING_COUNT):
        shifted[r][diagonal] = PAIR if r in shifted_rings else 0
    return shifted


def _ring_move(matrix: Sequence[Sequence[int]], ring: int, direction: MoveDirection,
               steps: int, result: Matrix) -> Move:
    signed = steps if direction == MoveDirection.CLOCKWISE else -steps
    pews = []
    for d in range(DIAGONAL_COUNT):
        if not matrix[ring][d]:
            continue
        for side in (0, 1):
            source = (ring, d, side)
            start_angle = geometry.pew_angle(d, side)
            radius = geometry.ring_radius(ring)
            pews.append(PewMotion(
                source=source,
                target=geometry.rotate_placement(source, signed),
                direction=direction,
                start_angle=start_angle,
                end_angle=start_angle + signed * geometry.SLOT_ANGLE,
                start_radius=radius,
                end_radius=radius,
            ))

    plural = "s" if steps != 1 else ""
    return Move(
        kind=MoveKind.RING,
        index=ring,
        direction=direction,
        steps=steps,
        matrix=result,
        description=f"Rotate {RING_NAMES[ring].lower()} ring {direction.value} by {steps} position{plural}",
        pews=pews,
        angular_distance=geometry.rotation_angle(steps),
        linear_distance=0.0,
    )


def _diagonal_move(matrix: Sequence[Sequence[int]], diagonal: int, direction: MoveDirection,
                   delta: int, result: Matrix) -> Move:
    pews = []
    hops = []
    for r in range(RING_COUNT):
        if not matrix[r][diagonal]:
            continue
        target_ring = min(max(r + delta, 0), RING_COUNT - 1)
        hops.append(f"{RING_NAMES[r]} -> {RING_NAMES[target_ring]}")
        for side in (0, 1):
            angle = geometry.pew_angle(diagonal, side)
            pews.append(PewMotion(
                source=(r, diagonal, side),
                target=(target_ring, diagonal, side),
                direction=direction,
                start_angle=angle,
                end_angle=angle,
                start_radius=geometry.ring_radius(r),
                end_radius=geometry.ring_radius(target_ring),
            ))

    linear = max((abs(p.end_radius - p.start_radius) for p in pews), default=0.0)
    return Move(
        kind=MoveKind.DIAGONAL,
        index=diagonal,
        direction=direction,
        steps=1,
        matrix=result,
        description=f"Move pews on {DIAGONAL_NAMES[diagonal].lower()} diagonal {direction.value} ({', '.join(hops)} ring)",
        pews=pews,
        angular_distance=0.0,
        linear_distance=linear,
    )


def get_valid_moves(matrix: Sequence[Sequence[int]], context: Optional[SearchContext] = None) -> List[Move]:
    """
    Enumerate every legal move from ``matrix``.

    Args:
        matrix: A valid occupancy matrix
        context: Search context holding ring directions; a fresh one is used
            when omitted

    Returns:
        Ring rotations (ring order) followed by diagonal shifts (diagonal
        order, inward before outward)
    """
    if context is None:
        context = SearchContext()
    context.expanded += 1

    current = matrix_key(matrix)
    moves: List[Move] = []

    for ring in range(RING_COUNT):
        occupied = [d for d in range(DIAGONAL_COUNT) if matrix[ring][d]]
        if not occupied:
            continue
        anchor = occupied[0]
        for target in range(DIAGONAL_COUNT):
            if target == anchor:
                continue
            offset = (target - anchor) % DIAGONAL_COUNT
            direction, steps = rotation_direction(offset, context.preferred_direction(ring))
            result = rotate_ring(matrix, ring, offset)
            if matrix_key(result) == current or not is_valid_matrix(result):
                continue
            moves.append(_ring_move(matrix, ring, direction, steps, result))
            context.remember_direction(ring, direction)

    for diagonal in range(DIAGONAL_COUNT):
        if not any(matrix[r][diagonal] for r in range(RING_COUNT)):
            continue
        for direction, delta in ((MoveDirection.INWARD, -1), (MoveDirection.OUTWARD, 1)):
            result = shift_diagonal(matrix, diagonal, delta)
            if matrix_key(result) == current or not is_valid_matrix(result):
                continue
            moves.append(_diagonal_move(matrix, diagonal, direction, delta, result))

    return moves


def neighbor_keys(matrix: Sequence[Sequence[int]]) -> set:
    """Matrices one move away, independent of ring directions."""
    return {matrix_key(move.matrix) for move in get_valid_moves(matrix)}


def is_legal_transition(before: Sequence[Sequence[int]], after: Sequence[Sequence[int]]) -> bool:
    """True if ``after`` is reached from ``before`` by exactly one move."""
    if not is_valid_matrix(before) or not is_valid_matrix(after):
        return False
    return matrix_key(after) in neighbor_keys(before)
