"""
CLI utilities for route.py
"""

from .argument_parser import setup_argument_parser, build_config_overrides
from .output import print_route_result, print_separator
from .init_command import run_init_command
from .config_discovery import discover_config

__all__ = [
    'setup_argument_parser',
    'build_config_overrides',
    'print_route_result',
    'print_separator',
    'run_init_command',
    'discover_config'
]
