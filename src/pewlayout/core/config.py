"""
Configuration management for pewlayout.

This module handles loading and validation of configuration files and
provides typed configuration objects for the search, the arrangement finder
and the survey runner.
"""

import os
import yaml
from typing import Any, Dict, List
from dataclasses import dataclass, field
from pathlib import Path

from pewlayout.core.registry import STRATEGY_REGISTRY


DEFAULT_STRATEGIES = ["direct", "astar", "bfs", "via_canonical"]


@dataclass
class SearchConfig:
    """Bounds and ordering for the transition planner."""
    greedy_max_steps: int = 10
    greedy_finish_distance: int = 2
    finish_search_depth: int = 4
    astar_max_depth: int = 10
    bfs_max_depth: int = 10
    strategies: List[str] = field(default_factory=lambda: list(DEFAULT_STRATEGIES))
    direction_consistency: bool = True

    def __post_init__(self):
        for name in ("greedy_max_steps", "finish_search_depth", "astar_max_depth", "bfs_max_depth"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer")
        if not isinstance(self.greedy_finish_distance, int) or self.greedy_finish_distance < 0:
            raise ValueError("greedy_finish_distance must be a non-negative integer")
        if not isinstance(self.strategies, (list, tuple)) or not self.strategies:
            raise ValueError("strategies must be a non-empty list of strategy names")
        self.strategies = list(self.strategies)
        if not isinstance(self.direction_consistency, bool):
            raise ValueError("direction_consistency must be a boolean")


@dataclass
class ArrangementConfig:
    """Configuration for the arrangement finder."""
    method: str = "exhaustive"  # "exhaustive" or "greedy"

    def __post_init__(self):
        if self.method not in ["exhaustive", "greedy"]:
            raise ValueError(f"method must be 'exhaustive' or 'greedy', got '{self.method}'")


@dataclass
class RunnerConfig:
    """Configuration for the transition survey runner."""
    experiment_name: str = "transition_survey"
    log_dir: str = "logs"
    results_path: str = "survey_results.csv"
    results_format: str = "csv"
    verbose: bool = True

    def __post_init__(self):
        if self.results_format not in ["csv", "json", "excel"]:
            raise ValueError(f"results_format must be 'csv', 'json' or 'excel', got '{self.results_format}'")
        # Directory creation is deferred to runner.setup() to avoid side effects on import


@dataclass
class Config:
    """Main configuration object."""
    runner: RunnerConfig = field(default_factory=RunnerConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    arrangement: ArrangementConfig = field(default_factory=ArrangementConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        runner = RunnerConfig(**(data.get("runner") or {}))
        search = SearchConfig(**(data.get("search") or {}))
        arrangement = ArrangementConfig(**(data.get("arrangement") or {}))
        return cls(runner=runner, search=search, arrangement=arrangement)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "runner": {k: v for k, v in self.runner.__dict__.items()},
            "search": {k: (list(v) if isinstance(v, list) else v) for k, v in self.search.__dict__.items()},
            "arrangement": {k: v for k, v in self.arrangement.__dict__.items()},
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If fields are missing or out of range
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ValueError("Configuration file must contain a mapping")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "config.yaml") -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config

    Returns:
        Default Config object
    """
    config = Config()

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    # Import the planner to trigger strategy registration
    import pewlayout.layout.planner  # noqa: F401

    issues = []

    unknown = [name for name in config.search.strategies if name not in STRATEGY_REGISTRY]
    for name in unknown:
        issues.append(f"ERROR: Unknown search strategy '{name}' (available: {', '.join(STRATEGY_REGISTRY)})")

    if len(set(config.search.strategies)) != len(config.search.strategies):
        issues.append("WARNING: Search strategies contain duplicates; repeated strategies are tried again")

    if config.search.finish_search_depth > config.search.bfs_max_depth:
        issues.append("WARNING: finish_search_depth is larger than bfs_max_depth")

    if config.search.greedy_finish_distance > 9:
        issues.append("WARNING: greedy_finish_distance above 9 makes the direct strategy a plain bounded BFS")

    if not config.search.direction_consistency:
        issues.append("WARNING: direction_consistency is disabled; rings may reverse spin during a transition")

    if config.arrangement.method == "greedy":
        issues.append("WARNING: greedy arrangement construction may fall back to a fixed arrangement")

    if not config.runner.experiment_name:
        issues.append("ERROR: Experiment name is required")

    if config.runner.log_dir and os.path.exists(config.runner.log_dir) and not os.path.isdir(config.runner.log_dir):
        issues.append(f"ERROR: log_dir exists and is not a directory: {config.runner.log_dir}")

    return issues
