#!/usr/bin/env python
"""
Simple CLI for routing paths between scene entities
Usage: python route.py route scene.yaml --from A --to B
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional

from spaghetti_router import PathRouter, RouterConfig, load_scene
from spaghetti_router.core.exceptions import RouterError
from spaghetti_router.routing.path_optimizer import validate_clearance
from spaghetti_router.cli import (
    setup_argument_parser,
    build_config_overrides,
    print_route_result,
    run_init_command,
    discover_config
)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_NO_ROUTE = 2


def setup_logging(log_file: Optional[Path] = None, log_level: str = 'INFO') -> None:
    """
    Configure logging to output to console and, optionally, a file

    Args:
        log_file: Path to log file (None for console only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console goes to stderr so --json output stays parseable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def load_config(explicit_path: Optional[str], overrides: dict) -> RouterConfig:
    """
    Discover and load the router config, then apply command-line overrides

    Args:
        explicit_path: --config value, if any
        overrides: Nested dict of overridden values

    Returns:
        Validated RouterConfig (built-in defaults when no file is found)
    """
    config_file = discover_config(explicit_path)
    if config_file:
        print(f"📋 Loading config from: {config_file}", file=sys.stderr)
        config = RouterConfig.from_yaml(config_file)
    else:
        config = RouterConfig()

    if not overrides:
        return config

    merged = config.to_dict()
    for section, values in overrides.items():
        merged.setdefault(section, {}).update(values)
    return RouterConfig(merged)


def run_route_command(args) -> int:
    """
    Route between two scene entities and print the result

    Returns:
        Exit code (0 = route found, 2 = no route, 1 = input error)
    """
    log_file = Path(args.log_file) if args.log_file else None
    setup_logging(log_file, log_level=args.log_level)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config, build_config_overrides(args))
        scene = load_scene(args.scene_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    router = PathRouter(config)

    try:
        result = router.route_between(scene, args.start_id, args.end_id)
    except RouterError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    conflicts: List = []
    if result.ok:
        blocking = scene.blocking_rects(exclude_ids=(args.start_id, args.end_id))
        conflicts = [r for r in blocking if not validate_clearance(result.points, [r])]
        if conflicts:
            logger.warning(f"Smoothed path touches {len(conflicts)} blocking rectangle(s)")

    print_route_result(result, as_json=args.json, conflicts=conflicts)
    return EXIT_OK if result.ok else EXIT_NO_ROUTE


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the router CLI"""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command == 'init':
        return run_init_command(force=args.force, path=args.path)

    return run_route_command(args)


if __name__ == '__main__':
    sys.exit(main())
