"""
Path analytics and tabular export
"""

from .path_metrics import (
    PathRecord,
    PathSummary,
    path_length,
    summarize_paths,
    count_object_visits,
    top_hotspots,
    record_from_route,
)
from .dataframe_export import paths_to_dataframe

__all__ = [
    'PathRecord',
    'PathSummary',
    'path_length',
    'summarize_paths',
    'count_object_visits',
    'top_hotspots',
    'record_from_route',
    'paths_to_dataframe',
]
