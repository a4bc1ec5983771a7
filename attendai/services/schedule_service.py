import uuid
from datetime import date
from typing import Iterable, List, Sequence

from attendai.schemas.schedule import ExtractedScheduleItem, ScheduleItem
from attendai.utils.time_utils import parse_time, weekday_name


def classes_for_day(schedule: Sequence[ScheduleItem], day: str) -> List[ScheduleItem]:
    """
    Return the classes held on a weekday, earliest first.

    Start times are compared as minutes since midnight; comparing the raw
    strings would put "10:00 AM" before "9:00 AM".
    """
    wanted = day.strip().lower()
    matching = [item for item in schedule if item.day.lower() == wanted]
    return sorted(matching, key=lambda item: parse_time(item.start_time))


def classes_for_date(schedule: Sequence[ScheduleItem], day: date) -> List[ScheduleItem]:
    return classes_for_day(schedule, weekday_name(day))


def upsert_schedule_item(
    schedule: Sequence[ScheduleItem], item: ScheduleItem
) -> List[ScheduleItem]:
    """Overwrite the item with the same id in place, or append it."""
    if any(existing.id == item.id for existing in schedule):
        return [item if existing.id == item.id else existing for existing in schedule]
    return list(schedule) + [item]


def delete_schedule_item(
    schedule: Sequence[ScheduleItem], item_id: str
) -> List[ScheduleItem]:
    return [item for item in schedule if item.id != item_id]


def new_item_id() -> str:
    return uuid.uuid4().hex


def assign_ids(raw_items: Iterable[ExtractedScheduleItem]) -> List[ScheduleItem]:
    """Give every extracted class a fresh id, keeping the extraction order."""
    return [
        ScheduleItem(id=new_item_id(), **raw.model_dump())
        for raw in raw_items
    ]
