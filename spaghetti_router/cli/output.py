"""
Output formatting and printing utilities for CLI
"""

import json
from typing import List, Optional

from ..core.models import Rect, RouteResult


def format_point(point) -> str:
    return f"({point[0]:.1f}, {point[1]:.1f})"


def print_separator(width: int = 70, char: str = '=') -> None:
    """
    Print a separator line

    Args:
        width: Width of the separator
        char: Character to use for separator
    """
    print(char * width)


def print_route_result(result: RouteResult, as_json: bool = False, conflicts: Optional[List[Rect]] = None) -> None:
    """
    Print a routing outcome

    Args:
        result: Route result to print
        as_json: Emit the result as a JSON document instead of text
        conflicts: Blocking rects the final polyline touches, if any
    """
    if as_json:
        print(json.dumps(result.model_dump(mode='json'), indent=2))
        return

    if not result.ok:
        print(f"❌ {result.message}")
        return

    print(f"✅ {result.message}")
    print_separator()
    for i, point in enumerate(result.points):
        print(f"  {i:>3}  {format_point(point)}")
    print_separator()
    print(f"Points: {len(result.points)}   Length: {result.length:.1f}")

    if conflicts:
        print(f"⚠️  Smoothed path touches {len(conflicts)} blocking rectangle(s)")
