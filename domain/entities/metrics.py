"""
Workout metrics used by reporting code that aggregates many workouts.

WorkoutMetric is the closed set of quantities a workout can report through
`Workout.get_item`; the helpers here format and total them.
"""
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Union

if TYPE_CHECKING:
    from domain.entities.workout import Workout


class WorkoutMetric(str, Enum):
    """Metric kinds a workout can be summarized by."""

    WORKOUTS = "workouts"
    TIME = "time"
    ENERGY = "energy"
    VOLUME = "volume"


_LABELS = {
    WorkoutMetric.WORKOUTS: "Number of workouts",
    WorkoutMetric.TIME: "Workout time",
    WorkoutMetric.ENERGY: "Energy burned",
    WorkoutMetric.VOLUME: "Volume",
}


def comma_number(value: Union[int, float]) -> str:
    """
    Format a number with thousands separators.

    Examples:
        >>> comma_number(1234567)
        '1,234,567'
        >>> comma_number(1113.398)
        '1,113.4'
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{round(value, 2):,}"


def format_duration(total_seconds: float) -> Optional[str]:
    """
    Format a duration using its largest applicable units.

    Returns None when the duration is not positive (e.g. an end time that
    was recorded before the start time).

    Examples:
        >>> format_duration(3725)
        '1h 2m 5s'
        >>> format_duration(3600)
        '1h'
        >>> format_duration(0) is None
        True
    """
    if total_seconds <= 0:
        return None
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    seconds = int(total_seconds % 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def metric_label(metric: WorkoutMetric) -> str:
    """Human-readable name of a metric."""
    return _LABELS[WorkoutMetric(metric)]


def stringify_metric(value: float, metric: WorkoutMetric) -> str:
    """Format a metric value with its unit."""
    metric = WorkoutMetric(metric)
    if metric is WorkoutMetric.TIME:
        return format_duration(value) or "0s"
    if metric is WorkoutMetric.WORKOUTS:
        return f"{int(value)} workout" if value == 1 else f"{int(value)} workouts"
    if metric is WorkoutMetric.ENERGY:
        return f"{comma_number(value)} kj"
    return f"{comma_number(value)} kg"


def total_for(workouts: Iterable["Workout"], metric: WorkoutMetric) -> float:
    """
    Sum a metric over many workouts.

    Workouts without a recorded energy count as zero.
    """
    return sum(workout.get_item(metric) or 0 for workout in workouts)
