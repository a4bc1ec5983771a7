# attendai/schemas/schedule.py
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from attendai.schemas.base import CamelModel
from attendai.utils.time_utils import normalize_day, to_12h, validate_time


class ScheduleItemBase(CamelModel):
    day: str
    start_time: str
    end_time: str
    subject: str = Field(min_length=1)
    room: Optional[str] = None
    group: Optional[str] = None

    @field_validator("day")
    @classmethod
    def validate_day(cls, value):
        return normalize_day(value)


class ScheduleItem(ScheduleItemBase):
    id: str


class ExtractedScheduleItem(ScheduleItemBase):
    """One class session as returned by the extraction model, before it has an id."""

    pass


class ScheduleItemCreate(ScheduleItemBase):
    """
    Manual add/edit form payload.

    When ``id`` matches an existing item the item is overwritten in place,
    otherwise a new item is created. Times may be sent as "HH:MM" and are
    stored in the "h:MM AM/PM" form produced by extraction.
    """

    id: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, value):
        if not value or not value.strip():
            raise ValueError("Time is required")
        return to_12h(validate_time(value))


class ScheduleItemPosition(CamelModel):
    item: ScheduleItem
    top: float
    height: float


class WeekLayout(CamelModel):
    days: Dict[str, List[ScheduleItemPosition]]
    current_time_position: Optional[float] = None
