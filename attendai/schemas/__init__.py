from .attendance import (
    AttendanceMark,
    AttendanceRecord,
    AttendanceStatsRead,
    AttendanceStatus,
    OverallStats,
    SubjectStats,
)
from .auth import LoginRequest, RegisterRequest, SendOTPRequest
from .data import UserDataRead, UserDataSaveResponse, UserDataUpdate
from .schedule import (
    ExtractedScheduleItem,
    ScheduleItem,
    ScheduleItemCreate,
    ScheduleItemPosition,
    WeekLayout,
)
from .token import Token, TokenData
from .user import UserRead

__all__ = [
    "AttendanceMark",
    "AttendanceRecord",
    "AttendanceStatsRead",
    "AttendanceStatus",
    "OverallStats",
    "SubjectStats",
    "LoginRequest",
    "RegisterRequest",
    "SendOTPRequest",
    "UserDataRead",
    "UserDataSaveResponse",
    "UserDataUpdate",
    "ExtractedScheduleItem",
    "ScheduleItem",
    "ScheduleItemCreate",
    "ScheduleItemPosition",
    "WeekLayout",
    "Token",
    "TokenData",
    "UserRead",
]
