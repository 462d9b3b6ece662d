"""
Pew slot geometry.

Each ring has 6 angular slots, 60 degrees apart: diagonal ``d`` sits at
``d * 60`` degrees and its opposite side at ``d * 60 + 180``. Angles increase
in screen coordinates (y down), so a positive step is a clockwise rotation.
Radii are fractions of the hexagon size.
"""

import math
import numpy as np

from pewlayout.core.base import Placement


SLOT_COUNT = 6
SLOT_ANGLE = math.pi / 3
DIAGONAL_ANGLES = np.array([0.0, math.pi / 3, 2 * math.pi / 3])
RING_RADII = np.array([0.3, 0.6, 0.85])


def slot_index(diagonal: int, side: int) -> int:
    return diagonal + 3 * side


def slot_placement(ring: int, slot: int) -> Placement:
    slot %= SLOT_COUNT
    return (ring, slot % 3, slot // 3)


def pew_angle(diagonal: int, side: int) -> float:
    """Angle of a pew position in radians."""
    return float(DIAGONAL_ANGLES[diagonal] + (math.pi if side else 0.0))


def ring_radius(ring: int, hex_size: float = 1.0) -> float:
    return float(RING_RADII[ring] * hex_size)


def pew_position(ring: int, diagonal: int, side: int, hex_size: float = 1.0) -> np.ndarray:
    """(x, y) of a pew relative to the hexagon centre."""
    angle = pew_angle(diagonal, side)
    radius = ring_radius(ring, hex_size)
    return np.array([radius * math.cos(angle), radius * math.sin(angle)])


def rotate_placement(placement: Placement, steps: int) -> Placement:
    """Move a pew ``steps`` slots around its ring (negative is counterclockwise)."""
    ring, diagonal, side = placement
    return slot_placement(ring, slot_index(diagonal, side) + steps)


def rotation_angle(steps: int) -> float:
    return abs(steps) * SLOT_ANGLE

