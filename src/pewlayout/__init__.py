"""
pewlayout: pew arrangements and transitions on a hexagonal church floor

A constraint engine and path planner for three symmetric pew pairs placed on
a floor divided into 3 concentric rings and 3 diagonals.

Features:
- Occupancy vector and matrix validation
- Enumeration of every arrangement realizing a vector
- Transition planning through ring rotations and diagonal shifts
- Surveys of transitions between all valid matrices

Example Usage:
```python
from pewlayout import calculate_transition, generate_default_matrix

start = generate_default_matrix()
goal = [[2, 0, 0], [2, 0, 0], [2, 0, 0]]
for step in calculate_transition(start, goal):
    print(step.description, step.matrix)
```

Command-line Usage:
```bash
pewlayout vector 2,2,2,2,2,2 --arrangements
pewlayout transition "0,0,0;0,0,0;2,2,2" "2,0,0;2,0,0;2,0,0"
pewlayout survey --config config.yaml --limit 100
```
"""

# Normal imports instead of lazy loading to ensure proper registry initialization
from pewlayout.core.config import Config, load_config, validate_config
from pewlayout.layout import (
    is_valid_vector, generate_all_valid_vectors, find_all_arrangements,
    is_valid_matrix, generate_default_matrix, get_valid_moves,
    calculate_transition, plan_transition, verify_transition,
)
from pewlayout.runner import SurveyRunner

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "is_valid_vector",
    "generate_all_valid_vectors",
    "find_all_arrangements",
    "is_valid_matrix",
    "generate_default_matrix",
    "get_valid_moves",
    "calculate_transition",
    "plan_transition",
    "verify_transition",
    "SurveyRunner",
]
