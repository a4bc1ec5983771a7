from datetime import datetime
from typing import Dict, List, Optional, Sequence

from attendai.schemas.schedule import ScheduleItem, ScheduleItemPosition
from attendai.services.schedule_service import classes_for_day
from attendai.utils.time_utils import WEEKDAYS, parse_time

# Weekly grid geometry
GRID_START_HOUR = 8
GRID_END_HOUR = 21
HOUR_HEIGHT_PX = 64
MIN_EVENT_HEIGHT_PX = 32


def _hours(time_str: str) -> float:
    return parse_time(time_str) / 60


def event_position(start_time: str, end_time: str) -> Dict[str, float]:
    """Vertical offset and height of a class block in the weekly grid."""
    start = _hours(start_time)
    end = _hours(end_time)

    return {
        "top": (start - GRID_START_HOUR) * HOUR_HEIGHT_PX,
        "height": max((end - start) * HOUR_HEIGHT_PX, MIN_EVENT_HEIGHT_PX),
    }


def current_time_position(now: datetime) -> Optional[float]:
    """Offset of the "now" marker, or None when the grid does not show this hour."""
    total_hours = now.hour + now.minute / 60
    if total_hours < GRID_START_HOUR or total_hours > GRID_END_HOUR:
        return None
    return (total_hours - GRID_START_HOUR) * HOUR_HEIGHT_PX


def week_layout(
    schedule: Sequence[ScheduleItem],
) -> Dict[str, List[ScheduleItemPosition]]:
    layout = {}
    for day in WEEKDAYS:
        layout[day] = [
            ScheduleItemPosition(item=item, **event_position(item.start_time, item.end_time))
            for item in classes_for_day(schedule, day)
        ]
    return layout
