# attendai/schemas/attendance.py
from datetime import date
from enum import Enum

from attendai.schemas.base import CamelModel


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"
    CANCELLED = "CANCELLED"


# Statuses counted as having attended the class
ATTENDED_STATUSES = {AttendanceStatus.PRESENT, AttendanceStatus.LATE}


class AttendanceRecord(CamelModel):
    id: str
    schedule_item_id: str
    date: date
    status: AttendanceStatus
    # Epoch milliseconds
    timestamp: int


class AttendanceMark(CamelModel):
    schedule_item_id: str
    date: date
    status: AttendanceStatus


class OverallStats(CamelModel):
    percentage: float
    total_classes: int
    attended_classes: int
    missed_classes: int
    cancelled_classes: int


class AttendanceStatsRead(OverallStats):
    message: str


class SubjectStats(CamelModel):
    subject: str
    stats: OverallStats
