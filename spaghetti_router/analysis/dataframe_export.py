"""
Export path records to a Polars DataFrame
"""

import logging
from typing import Any, Dict, Iterable, List

import polars as pl

from .path_metrics import PathRecord

logger = logging.getLogger(__name__)


def paths_to_dataframe(records: Iterable[PathRecord]) -> pl.DataFrame:
    """
    Export path records to a Polars DataFrame for analysis

    One row per path. If there are no paths, returns an empty DataFrame
    with the same schema.

    Args:
        records: Path records

    Returns:
        Polars DataFrame with columns:
        - path_id: Record id
        - description: Free-text description
        - auto_generated: Whether the router produced the path
        - point_count: Number of vertices
        - start_x, start_y: First vertex
        - end_x, end_y: Last vertex
        - length: Polyline length
        - frequency: Walk frequency
        - weighted_cost: length * frequency
    """
    rows: List[Dict[str, Any]] = []

    for record in records:
        rows.append({
            'path_id': record.id,
            'description': record.description,
            'auto_generated': record.auto_generated,
            'point_count': len(record.points),
            'start_x': float(record.points[0][0]),
            'start_y': float(record.points[0][1]),
            'end_x': float(record.points[-1][0]),
            'end_y': float(record.points[-1][1]),
            'length': float(record.length),
            'frequency': record.frequency,
            'weighted_cost': float(record.weighted_cost),
        })

    schema = {
        'path_id': pl.Utf8,
        'description': pl.Utf8,
        'auto_generated': pl.Boolean,
        'point_count': pl.Int64,
        'start_x': pl.Float64,
        'start_y': pl.Float64,
        'end_x': pl.Float64,
        'end_y': pl.Float64,
        'length': pl.Float64,
        'frequency': pl.Int64,
        'weighted_cost': pl.Float64,
    }

    if not rows:
        logger.info("No paths recorded, returning empty DataFrame")
        return pl.DataFrame({name: pl.Series([], dtype=dtype) for name, dtype in schema.items()})

    df = pl.DataFrame(rows, schema=schema)
    logger.info(f"Created DataFrame with {len(df)} path rows")
    return df
