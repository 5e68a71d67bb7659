"""
Helpers that trim chart series to the extent of actual data.

The selected range (30/90/365 days) is kept intact; only leading and trailing
empty days are removed so a chart uses its full width for days with data.
"""

from typing import Callable, List, Sequence, TypeVar

from rythm.core.models.output_models import RollingPoint, TrendPoint

PointT = TypeVar('PointT')


def _has_trend_data(point: TrendPoint) -> bool:
    return point.sleep is not None or point.mood is not None


def _has_rolling_data(point: RollingPoint) -> bool:
    return any(
        value is not None
        for value in (
            point.sleep7, point.sleep30, point.sleep90,
            point.mood7, point.mood30, point.mood90,
        )
    )


def _trim(points: Sequence[PointT], has_data: Callable[[PointT], bool]) -> List[PointT]:
    indices = [i for i, point in enumerate(points) if has_data(point)]
    if not indices:
        return []
    return list(points[indices[0]:indices[-1] + 1])


def trim_to_data_extent_trend(points: Sequence[TrendPoint]) -> List[TrendPoint]:
    """Trim trend points to the first..last point carrying sleep or mood."""
    return _trim(points, _has_trend_data)


def trim_to_data_extent_rolling(points: Sequence[RollingPoint]) -> List[RollingPoint]:
    """Trim rolling points to the first..last point carrying any rolling value."""
    return _trim(points, _has_rolling_data)
