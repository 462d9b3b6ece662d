"""Utility modules for pewlayout."""

from pewlayout.utils.logger import ExperimentLogger
from pewlayout.utils.display import ProgressDisplay, StatusDisplay, LiveLogger

__all__ = [
    "ExperimentLogger",
    "ProgressDisplay",
    "StatusDisplay",
    "LiveLogger",
]
