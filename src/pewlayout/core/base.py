"""
Base types for the pewlayout engine.

This module defines the result records, error codes and move descriptions
shared by the validators, the move generator and the transition planner.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


Matrix = List[List[int]]
MatrixKey = Tuple[Tuple[int, ...], ...]
Vector = Tuple[int, ...]
Placement = Tuple[int, int, int]
Arrangement = List[Placement]


class ErrorCode(Enum):
    """Outcome codes for validation and planning."""
    OK = "OK"
    STRUCTURAL_INVALID = "StructuralInvalid"
    CONSTRAINT_INVALID = "ConstraintInvalid"
    SEARCH_EXHAUSTED = "SearchExhausted"


class MoveKind(Enum):
    """Kinds of atomic moves."""
    RING = "ring"
    DIAGONAL = "diagonal"


class MoveDirection(Enum):
    """Direction of a ring rotation or a diagonal shift."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"
    INWARD = "inward"
    OUTWARD = "outward"


@dataclass
class ValidationResult:
    """Result of validating a vector or a matrix."""
    valid: bool
    error: ErrorCode = ErrorCode.OK
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "error": self.error.value,
            "message": self.message,
        }


@dataclass
class PewMotion:
    """Displacement of a single pew during a move."""
    source: Placement  # (ring, diagonal, side) before the move
    target: Placement  # (ring, diagonal, side) after the move
    direction: MoveDirection
    start_angle: float
    end_angle: float
    start_radius: float
    end_radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": list(self.source),
            "target": list(self.target),
            "direction": self.direction.value,
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "start_radius": self.start_radius,
            "end_radius": self.end_radius,
        }


@dataclass
class Move:
    """A single ring rotation or diagonal shift between two valid matrices."""
    kind: MoveKind
    index: int  # ring index for rotations, diagonal index for shifts
    direction: MoveDirection
    steps: int
    matrix: Matrix
    description: str
    pews: List[PewMotion] = field(default_factory=list)
    angular_distance: float = 0.0
    linear_distance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert move to dictionary representation."""
        return {
            "kind": self.kind.value,
            "index": self.index,
            "direction": self.direction.value,
            "steps": self.steps,
            "matrix": [list(row) for row in self.matrix],
            "description": self.description,
            "pews": [pew.to_dict() for pew in self.pews],
            "angular_distance": self.angular_distance,
            "linear_distance": self.linear_distance,
        }


@dataclass
class TransitionStep:
    """One entry of a transition: the matrix shown and how it was reached."""
    matrix: Optional[Matrix]
    description: str
    move: Optional[Move] = None
    error: ErrorCode = ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self.error != ErrorCode.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matrix": [list(row) for row in self.matrix] if self.matrix is not None else None,
            "description": self.description,
            "move": self.move.to_dict() if self.move else None,
            "error": self.error.value,
        }


@dataclass
class TransitionPlan:
    """Steps of a transition together with how they were found."""
    steps: List[TransitionStep]
    strategy: Optional[str] = None
    error: ErrorCode = ErrorCode.OK
    expanded: int = 0
    attempted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # strategy names with no registered search

    @property
    def success(self) -> bool:
        return self.error == ErrorCode.OK

    @property
    def moves(self) -> List[Move]:
        return [step.move for step in self.steps if step.move is not None]

    def to_dict(self) -> Dict[str, Any]:
        """Convert plan to dictionary representation."""
        return {
            "strategy": self.strategy,
            "error": self.error.value,
            "expanded": self.expanded,
            "attempted": list(self.attempted),
            "skipped": list(self.skipped),
            "steps": [step.to_dict() for step in self.steps],
        }
