"""
Core modules for pewlayout.

This package contains the fundamental components:
- Result records, move descriptions and error codes
- Configuration management
- Registry for search strategies
"""

from pewlayout.core.base import (
    ErrorCode,
    MoveKind,
    MoveDirection,
    ValidationResult,
    PewMotion,
    Move,
    TransitionStep,
    TransitionPlan,
)

from pewlayout.core.config import Config, load_config, create_default_config, validate_config, SearchConfig, ArrangementConfig, RunnerConfig

from pewlayout.core.registry import register_strategy, STRATEGY_REGISTRY

__all__ = [
    "ErrorCode",
    "MoveKind",
    "MoveDirection",
    "ValidationResult",
    "PewMotion",
    "Move",
    "TransitionStep",
    "TransitionPlan",
    "Config",
    "load_config",
    "create_default_config",
    "validate_config",
    "SearchConfig",
    "ArrangementConfig",
    "RunnerConfig",
    "register_strategy",
    "STRATEGY_REGISTRY",
]
