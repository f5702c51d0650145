"""
Command-line argument parser configuration with subcommands
"""

import argparse


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser with subcommands (init, route)

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='spaghetti-router',
        description='Automatic obstacle-avoiding path routing for diagram scenes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Initialize configuration
  spaghetti-router init                           # Create ./router_config.yaml
  spaghetti-router init --force                   # Overwrite existing config
  spaghetti-router init --path ./my_router.yaml   # Create in custom location

  # Route between two entities of a scene
  spaghetti-router route scene.yaml --from A --to B
  spaghetti-router route scene.yaml --from A --to B --smoothing catmull_rom
  spaghetti-router route scene.yaml --from A --to B --proximity-weight 2 --json
  spaghetti-router route scene.yaml --from A --to B --log-level DEBUG
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        help='Command to execute'
    )

    # ========================================================================
    # INIT SUBCOMMAND
    # ========================================================================
    init_parser = subparsers.add_parser(
        'init',
        help='Create a new configuration file',
        description='Write a commented router configuration template'
    )

    init_parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing configuration file'
    )

    init_parser.add_argument(
        '--path', '-p',
        type=str,
        help='Custom path for config file (default: ./router_config.yaml)'
    )

    # ========================================================================
    # ROUTE SUBCOMMAND
    # ========================================================================
    route_parser = subparsers.add_parser(
        'route',
        help='Route a path between two scene entities',
        description='Compute an obstacle-avoiding path between two entities of a YAML scene'
    )

    route_parser.add_argument(
        'scene_file',
        help='Path to YAML scene file (objects, obstacles, zones)'
    )

    route_parser.add_argument(
        '--from',
        dest='start_id',
        required=True,
        help='Id of the start entity'
    )

    route_parser.add_argument(
        '--to',
        dest='end_id',
        required=True,
        help='Id of the end entity'
    )

    route_parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to router config (optional, will auto-discover)'
    )

    route_parser.add_argument(
        '--smoothing',
        choices=['none', 'rounded', 'catmull_rom'],
        help='Override the configured smoothing mode'
    )

    route_parser.add_argument(
        '--proximity-weight',
        type=float,
        help='Override the configured proximity weight (0 disables clutter avoidance)'
    )

    route_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the route result as JSON'
    )

    route_parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Set logging level (default: WARNING). Use DEBUG to see grid and search statistics.'
    )

    route_parser.add_argument(
        '--log-file',
        type=str,
        help='Also write a DEBUG log to this file'
    )

    return parser


def build_config_overrides(args: argparse.Namespace) -> dict:
    """
    Collect config values overridden on the command line

    Args:
        args: Parsed command-line arguments

    Returns:
        Nested dict in config file layout (empty when nothing is overridden)
    """
    overrides = {}
    if args.smoothing is not None:
        overrides.setdefault('smoothing', {})['mode'] = args.smoothing
    if args.proximity_weight is not None:
        overrides.setdefault('search', {})['proximity_weight'] = args.proximity_weight
    return overrides
