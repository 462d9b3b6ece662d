"""
Command-line interface for pewlayout.

Validates occupancy vectors and matrices, lists arrangements and moves,
plans transitions between matrices and runs transition surveys.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from pewlayout.core.config import Config, load_config, create_default_config, validate_config
from pewlayout.core.registry import STRATEGY_REGISTRY
from pewlayout.layout.arrangements import find_all_arrangements
from pewlayout.layout.matrix import diagnose_matrix
from pewlayout.layout.moves import get_valid_moves
from pewlayout.layout.occupancy import (
    matrix_to_vector, parse_matrix, parse_vector,
)
from pewlayout.layout.planner import plan_transition
from pewlayout.layout.vectors import diagnose_vector, generate_all_valid_vectors
from pewlayout.runner import SurveyRunner
from pewlayout.utils.display import StatusDisplay, LiveLogger


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="pewlayout: pew arrangements and transitions on a hexagonal church floor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a vector and show its arrangements
  pewlayout vector 2,2,2,2,2,2 --arrangements

  # Plan a transition between two matrices
  pewlayout transition "0,0,0;0,0,0;2,2,2" "2,0,0;2,0,0;2,0,0"

  # Survey every pair of valid matrices
  pewlayout survey --config config.yaml --limit 200
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    vector_parser = subparsers.add_parser("vector", help="Validate an occupancy vector")
    vector_parser.add_argument("vector", help="Vector as r1,r2,r3,d1,d2,d3")
    vector_parser.add_argument("--arrangements", action="store_true", help="Also list arrangements")
    vector_parser.add_argument("--method", choices=["exhaustive", "greedy"], default=None, help="Arrangement method")
    vector_parser.add_argument("--config", "-c", help="Path to configuration file")
    vector_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    vectors_parser = subparsers.add_parser("vectors", help="List all valid vectors")
    vectors_parser.add_argument("--counts", action="store_true", help="Show arrangement counts")
    vectors_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    arrangements_parser = subparsers.add_parser("arrangements", help="List arrangements of a vector")
    arrangements_parser.add_argument("vector", help="Vector as r1,r2,r3,d1,d2,d3")
    arrangements_parser.add_argument("--method", choices=["exhaustive", "greedy"], default=None, help="Arrangement method")
    arrangements_parser.add_argument("--config", "-c", help="Path to configuration file")
    arrangements_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    matrix_parser = subparsers.add_parser("matrix", help="Validate an occupancy matrix")
    matrix_parser.add_argument("matrix", help='Matrix as "a,b,c;d,e,f;g,h,i"')
    matrix_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    moves_parser = subparsers.add_parser("moves", help="List legal moves from a matrix")
    moves_parser.add_argument("matrix", help='Matrix as "a,b,c;d,e,f;g,h,i"')
    moves_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    transition_parser = subparsers.add_parser("transition", help="Plan a transition between two matrices")
    transition_parser.add_argument("start", help="Start matrix")
    transition_parser.add_argument("end", help="Target matrix")
    transition_parser.add_argument("--config", "-c", help="Path to configuration file")
    transition_parser.add_argument("--strategies", nargs="+", choices=sorted(STRATEGY_REGISTRY), help="Override strategy order")
    transition_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")

    survey_parser = subparsers.add_parser("survey", help="Plan transitions between all valid matrices")
    survey_parser.add_argument("--config", "-c", help="Path to configuration file")
    survey_parser.add_argument("--limit", type=int, help="Maximum number of matrix pairs")
    survey_parser.add_argument("--output-dir", help="Override log directory")
    survey_parser.add_argument("--quiet", "-q", action="store_true", help="Suppress progress output")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    return parser


def _load_config(path: Optional[str], logger: LiveLogger) -> Optional[Config]:
    """Load configuration, or defaults when no path is given."""
    if not path:
        return Config()
    try:
        config = load_config(path)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {path}")
        logger.log_info("Use 'pewlayout create-config' to create a default configuration")
        return None
    except (ValueError, yaml.YAMLError) as e:
        logger.log_error(f"Configuration error: {e}")
        return None

    errors = [issue for issue in validate_config(config) if issue.startswith("ERROR")]
    for error in errors:
        logger.log_error(error.replace("ERROR: ", ""))
    return None if errors else config


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def _arrangement_method(args, config: Config) -> str:
    return args.method or config.arrangement.method


def vector_command(args) -> int:
    """Execute vector command."""
    logger = LiveLogger(verbose=args.format == "text")
    config = _load_config(args.config, logger)
    if config is None:
        return 1

    try:
        vector = parse_vector(args.vector)
    except ValueError:
        logger.log_error(f"Could not parse vector: {args.vector}")
        return 1

    report = diagnose_vector(vector)
    arrangements = []
    if report.valid and args.arrangements:
        arrangements = find_all_arrangements(vector, _arrangement_method(args, config))

    if args.format == "json":
        data = {"vector": list(vector), **report.to_dict()}
        if args.arrangements:
            data["arrangements"] = [[list(p) for p in arr] for arr in arrangements]
        _print_json(data)
        return 0 if report.valid else 1

    StatusDisplay.print_header(f"Vector ({', '.join(str(v) for v in vector)})")
    if not report.valid:
        logger.log_result(f"{report.error.value}: {report.message}", success=False)
        return 1
    logger.log_result("Valid vector")
    if args.arrangements:
        _print_arrangements(arrangements)
    return 0


def _print_arrangements(arrangements) -> None:
    StatusDisplay.print_section(f"{len(arrangements)} arrangement{'s' if len(arrangements) != 1 else ''}")
    for number, arrangement in enumerate(arrangements, start=1):
        StatusDisplay.print_arrangement(number, arrangement)


def vectors_command(args) -> int:
    """Execute vectors command."""
    vectors = generate_all_valid_vectors()
    counts = [len(find_all_arrangements(v)) for v in vectors] if args.counts else None

    if args.format == "json":
        if counts is None:
            _print_json([list(v) for v in vectors])
        else:
            _print_json([{"vector": list(v), "arrangements": c} for v, c in zip(vectors, counts)])
        return 0

    StatusDisplay.print_header(f"{len(vectors)} valid vectors")
    for index, vector in enumerate(vectors):
        line = f"  ({', '.join(str(v) for v in vector)})"
        if counts is not None:
            line += f"  arrangements: {counts[index]}"
        print(line)
    return 0


def arrangements_command(args) -> int:
    """Execute arrangements command."""
    args.arrangements = True
    return vector_command(args)


def _parse_matrix_arg(text: str, logger: LiveLogger):
    try:
        return parse_matrix(text)
    except ValueError:
        logger.log_error(f"Could not parse matrix: {text}")
        return None


def matrix_command(args) -> int:
    """Execute matrix command."""
    logger = LiveLogger(verbose=args.format == "text")
    matrix = _parse_matrix_arg(args.matrix, logger)
    if matrix is None:
        return 1

    report = diagnose_matrix(matrix)
    if args.format == "json":
        data = {"matrix": matrix, **report.to_dict()}
        if report.valid:
            data["vector"] = list(matrix_to_vector(matrix))
        _print_json(data)
        return 0 if report.valid else 1

    StatusDisplay.print_header("Matrix")
    StatusDisplay.print_matrix(matrix)
    if not report.valid:
        logger.log_result(f"{report.error.value}: {report.message}", success=False)
        return 1
    logger.log_result(f"Valid configuration, vector {matrix_to_vector(matrix)}")
    return 0


def moves_command(args) -> int:
    """Execute moves command."""
    logger = LiveLogger(verbose=args.format == "text")
    matrix = _parse_matrix_arg(args.matrix, logger)
    if matrix is None:
        return 1

    report = diagnose_matrix(matrix)
    if not report.valid:
        logger.log_error(f"{report.error.value}: {report.message}")
        return 1

    moves = get_valid_moves(matrix)
    if args.format == "json":
        _print_json([move.to_dict() for move in moves])
        return 0

    StatusDisplay.print_header(f"{len(moves)} legal moves")
    for number, move in enumerate(moves, start=1):
        StatusDisplay.print_move(number, move)
    return 0


def transition_command(args) -> int:
    """Execute transition command."""
    logger = LiveLogger(verbose=args.format == "text")
    config = _load_config(args.config, logger)
    if config is None:
        return 1
    if args.strategies:
        config.search.strategies = list(args.strategies)

    start = _parse_matrix_arg(args.start, logger)
    end = _parse_matrix_arg(args.end, logger)
    if start is None or end is None:
        return 1

    plan = plan_transition(start, end, config.search)

    if args.format == "json":
        _print_json(plan.to_dict())
        return 0 if plan.success else 1

    StatusDisplay.print_header("Transition")
    if not plan.success:
        logger.log_result(plan.steps[0].description, success=False)
        return 1
    if not plan.steps:
        logger.log_result("Configuration already applied")
        return 0

    StatusDisplay.print_plan(plan)
    return 0


def survey_command(args) -> int:
    """Execute survey command."""
    logger = LiveLogger(verbose=not args.quiet)
    config = _load_config(args.config, logger)
    if config is None:
        return 1
    if args.output_dir:
        config.runner.log_dir = args.output_dir
    if args.quiet:
        config.runner.verbose = False

    StatusDisplay.print_header("pewlayout Transition Survey")
    runner = SurveyRunner(config)
    runner.setup()
    summary = runner.run_survey(limit=args.limit)

    if summary.valid_paths != summary.solved:
        logger.log_error(f"{summary.solved - summary.valid_paths} planned paths failed verification")
        return 1
    logger.log_result(f"Solved {summary.solved}/{summary.total} transitions",
                      success=summary.solved == summary.total)
    return 0


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)

    StatusDisplay.print_header("Creating Configuration File")
    if Path(args.output).exists() and not args.force:
        logger.log_warning(f"Configuration file already exists: {args.output}")
        response = input("Overwrite existing file? (y/N): ").strip().lower()
        if response not in ['y', 'yes']:
            logger.log_info("Configuration creation cancelled")
            return 0

    try:
        config = create_default_config(args.output)
    except OSError as e:
        logger.log_error(f"Failed to create config: {e}")
        return 1

    logger.log_result(f"Configuration created: {args.output}")
    StatusDisplay.print_fields({
        "Output File": args.output,
        "Strategies": ", ".join(config.search.strategies),
        "Arrangement Method": config.arrangement.method,
    }, "Configuration Summary")
    return 0


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        return 1
    except (ValueError, yaml.YAMLError) as e:
        logger.log_error(f"Configuration error: {e}")
        return 1

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    for error in errors:
        logger.log_error(error.replace("ERROR: ", ""))
    for warning in warnings:
        logger.log_warning(warning.replace("WARNING: ", ""))

    if errors or (args.strict and warnings):
        logger.log_result("Configuration is invalid", success=False)
        return 1

    logger.log_result("Configuration is valid")
    StatusDisplay.print_fields({
        "Strategies": ", ".join(config.search.strategies),
        "A* Depth": config.search.astar_max_depth,
        "BFS Depth": config.search.bfs_max_depth,
        "Arrangement Method": config.arrangement.method,
        "Log Directory": config.runner.log_dir,
    }, "Configuration Summary")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    command_handlers = {
        "vector": vector_command,
        "vectors": vectors_command,
        "arrangements": arrangements_command,
        "matrix": matrix_command,
        "moves": moves_command,
        "transition": transition_command,
        "survey": survey_command,
        "create-config": create_config_command,
        "validate-config": validate_config_command,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
