# attendai/schemas/data.py
from typing import List, Optional

from pydantic import Field

from attendai.schemas.attendance import AttendanceRecord
from attendai.schemas.base import CamelModel
from attendai.schemas.schedule import ScheduleItem


class UserDataRead(CamelModel):
    schedule: List[ScheduleItem] = Field(default_factory=list)
    records: List[AttendanceRecord] = Field(default_factory=list)


class UserDataUpdate(CamelModel):
    # A field left out (or null) keeps the stored value
    schedule: Optional[List[ScheduleItem]] = None
    records: Optional[List[AttendanceRecord]] = None


class UserDataSaveResponse(CamelModel):
    success: bool
    data: UserDataRead
